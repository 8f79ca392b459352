import logging

from fastapi import APIRouter, Depends, HTTPException

from app.api.v1.schemas import (
    BookingOpenRequestSchema,
    BookingResponseSchema,
    CriteriaResponseSchema,
    CriteriaSchema,
    DurationRequestSchema,
    PaymentDetailsSchema,
    PaymentMethodRequestSchema,
    SelectionRequestSchema,
    SelectionResponseSchema,
    SessionResponseSchema,
    SlotRequestSchema,
    StationListResponseSchema,
    StationSchema,
)
from app.application.client_session import ClientSession
from app.application.exceptions import BookingTransitionError, InvalidArgument, StationDirectoryError
from app.application.ports.session_store import SessionStorePort
from app.application.use_cases.booking import BookingResult
from app.application.use_cases.filter_stations import FilterStationsUseCase, active_filter_count
from app.wiring.dependencies import get_filter_use_case, get_session_store

router = APIRouter()
logger = logging.getLogger(__name__)


def _session(session_id: str, store: SessionStorePort) -> ClientSession:
    session = store.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Session {session_id} not found")
    return session


def _booking_response(session: ClientSession, run) -> BookingResponseSchema:
    try:
        result: BookingResult = run()
    except InvalidArgument as e:
        raise HTTPException(status_code=400, detail=str(e))
    except BookingTransitionError as e:
        logger.warning("Booking event rejected", extra={"session_id": session.session_id, "reason": str(e)})
        raise HTTPException(status_code=409, detail=str(e))
    return BookingResponseSchema.from_workflow(session.booking, result)


@router.post("/sessions", response_model=SessionResponseSchema, status_code=201)
def create_session(store: SessionStorePort = Depends(get_session_store)):
    session = store.create()
    return SessionResponseSchema(session_id=session.session_id)


@router.delete("/sessions/{session_id}", status_code=204)
def delete_session(session_id: str, store: SessionStorePort = Depends(get_session_store)):
    if not store.delete(session_id):
        raise HTTPException(status_code=404, detail=f"Session {session_id} not found")


@router.get("/sessions/{session_id}/criteria", response_model=CriteriaResponseSchema)
def get_criteria(session_id: str, store: SessionStorePort = Depends(get_session_store)):
    session = _session(session_id, store)
    return CriteriaResponseSchema(
        criteria=CriteriaSchema.from_criteria(session.query, session.criteria),
        active_filter_count=active_filter_count(session.criteria),
    )


@router.put("/sessions/{session_id}/criteria", response_model=CriteriaResponseSchema)
def put_criteria(
    session_id: str,
    req: CriteriaSchema,
    store: SessionStorePort = Depends(get_session_store),
):
    session = _session(session_id, store)
    session.query = req.query
    session.criteria = req.to_criteria()
    return CriteriaResponseSchema(
        criteria=CriteriaSchema.from_criteria(session.query, session.criteria),
        active_filter_count=active_filter_count(session.criteria),
    )


@router.delete("/sessions/{session_id}/criteria", response_model=CriteriaResponseSchema)
def clear_criteria(session_id: str, store: SessionStorePort = Depends(get_session_store)):
    session = _session(session_id, store)
    session.reset_criteria()
    return CriteriaResponseSchema(
        criteria=CriteriaSchema.from_criteria(session.query, session.criteria),
        active_filter_count=0,
    )


@router.get("/sessions/{session_id}/stations", response_model=StationListResponseSchema)
def session_stations(
    session_id: str,
    store: SessionStorePort = Depends(get_session_store),
    uc: FilterStationsUseCase = Depends(get_filter_use_case),
):
    session = _session(session_id, store)
    try:
        result = uc.execute(session.query, session.criteria)
    except StationDirectoryError as e:
        raise HTTPException(status_code=502, detail=str(e))
    selected = session.selection.reconcile(result.stations)
    return StationListResponseSchema(
        stations=[StationSchema.from_entity(s) for s in result.stations],
        count=len(result.stations),
        total=result.total,
        empty=result.empty,
        active_filter_count=result.active_filters,
        selected_station_id=selected.id if selected else None,
    )


@router.get("/sessions/{session_id}/selection", response_model=SelectionResponseSchema)
def get_selection(session_id: str, store: SessionStorePort = Depends(get_session_store)):
    session = _session(session_id, store)
    selected = session.selection.selected
    return SelectionResponseSchema(selected=StationSchema.from_entity(selected) if selected else None)


@router.post("/sessions/{session_id}/selection", response_model=SelectionResponseSchema)
def toggle_selection(
    session_id: str,
    req: SelectionRequestSchema,
    store: SessionStorePort = Depends(get_session_store),
    uc: FilterStationsUseCase = Depends(get_filter_use_case),
):
    session = _session(session_id, store)
    station = uc.get_station(req.station_id)
    selected = session.selection.toggle(station)
    return SelectionResponseSchema(selected=StationSchema.from_entity(selected) if selected else None)


@router.get("/sessions/{session_id}/booking", response_model=BookingResponseSchema)
def get_booking(session_id: str, store: SessionStorePort = Depends(get_session_store)):
    session = _session(session_id, store)
    return BookingResponseSchema.from_workflow(session.booking)


@router.post("/sessions/{session_id}/booking", response_model=BookingResponseSchema)
def open_booking(
    session_id: str,
    req: BookingOpenRequestSchema,
    store: SessionStorePort = Depends(get_session_store),
    uc: FilterStationsUseCase = Depends(get_filter_use_case),
):
    session = _session(session_id, store)
    if req.station_id:
        station = uc.get_station(req.station_id)
    else:
        station = session.selection.selected
        if station is None:
            raise HTTPException(status_code=400, detail="No station selected")
    return _booking_response(session, lambda: session.booking.open(station))


@router.post("/sessions/{session_id}/booking/slot", response_model=BookingResponseSchema)
def choose_slot(session_id: str, req: SlotRequestSchema, store: SessionStorePort = Depends(get_session_store)):
    session = _session(session_id, store)
    return _booking_response(session, lambda: session.booking.choose_slot(req.slot))


@router.post("/sessions/{session_id}/booking/duration", response_model=BookingResponseSchema)
def change_duration(
    session_id: str,
    req: DurationRequestSchema,
    store: SessionStorePort = Depends(get_session_store),
):
    session = _session(session_id, store)
    booking = session.booking
    if req.hours is not None:
        return _booking_response(session, lambda: booking.set_duration(req.hours))
    if req.delta == 1:
        return _booking_response(session, booking.increment_duration)
    if req.delta == -1:
        return _booking_response(session, booking.decrement_duration)
    raise HTTPException(status_code=400, detail="Provide hours, or delta of +1 or -1")


@router.post("/sessions/{session_id}/booking/proceed", response_model=BookingResponseSchema)
def proceed_to_payment(session_id: str, store: SessionStorePort = Depends(get_session_store)):
    session = _session(session_id, store)
    return _booking_response(session, session.booking.proceed_to_payment)


@router.post("/sessions/{session_id}/booking/payment-method", response_model=BookingResponseSchema)
def choose_payment_method(
    session_id: str,
    req: PaymentMethodRequestSchema,
    store: SessionStorePort = Depends(get_session_store),
):
    session = _session(session_id, store)
    return _booking_response(session, lambda: session.booking.choose_payment_method(req.method))


@router.post("/sessions/{session_id}/booking/back", response_model=BookingResponseSchema)
def back(session_id: str, store: SessionStorePort = Depends(get_session_store)):
    session = _session(session_id, store)
    return _booking_response(session, session.booking.back)


@router.post("/sessions/{session_id}/booking/pay", response_model=BookingResponseSchema)
def pay(
    session_id: str,
    req: PaymentDetailsSchema,
    store: SessionStorePort = Depends(get_session_store),
):
    session = _session(session_id, store)
    return _booking_response(session, lambda: session.booking.submit_payment(req.to_details()))


@router.delete("/sessions/{session_id}/booking", response_model=BookingResponseSchema)
def close_booking(session_id: str, store: SessionStorePort = Depends(get_session_store)):
    session = _session(session_id, store)
    return _booking_response(session, session.booking.close)
