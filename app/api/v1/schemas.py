from __future__ import annotations

from pydantic import BaseModel, Field

from app.application.use_cases.booking import BookingResult, BookingWorkflow
from app.application.use_cases.cost import estimated_energy, format_amount, round_amount
from app.domain.entities.booking_state import TIME_SLOTS, Confirming, Idle, Payment
from app.domain.entities.filter_criteria import ANY, FilterCriteria
from app.domain.entities.payment import PaymentDetails, PaymentMethod
from app.domain.entities.station import Station


class CoordinatesSchema(BaseModel):
    lat: float
    lng: float


class StationSchema(BaseModel):
    id: str
    name: str
    address: str
    distance_km: float
    status: str
    status_label: str
    charger_types: list[str]
    amenities: list[str]
    available_chargers: int
    total_chargers: int
    price_per_unit: float
    coordinates: CoordinatesSchema

    @classmethod
    def from_entity(cls, station: Station) -> StationSchema:
        return cls(
            id=station.id,
            name=station.name,
            address=station.address,
            distance_km=station.distance_km,
            status=station.status.value,
            status_label=station.status_label,
            charger_types=sorted(station.charger_types),
            amenities=sorted(station.amenities),
            available_chargers=station.available_chargers,
            total_chargers=station.total_chargers,
            price_per_unit=station.price_per_unit,
            coordinates=CoordinatesSchema(lat=station.coordinates.lat, lng=station.coordinates.lng),
        )


class CriteriaSchema(BaseModel):
    query: str = ""
    charger_type: str = ANY
    availability: str = ANY
    amenities: list[str] = Field(default_factory=list)
    max_distance: float = Field(gt=0)

    def to_criteria(self) -> FilterCriteria:
        return FilterCriteria(
            charger_type=self.charger_type,
            availability=self.availability,
            amenities=frozenset(self.amenities),
            max_distance_km=self.max_distance,
        )

    @classmethod
    def from_criteria(cls, query: str, criteria: FilterCriteria) -> CriteriaSchema:
        return cls(
            query=query,
            charger_type=criteria.charger_type,
            availability=criteria.availability,
            amenities=sorted(criteria.amenities),
            max_distance=criteria.max_distance_km,
        )


class CriteriaResponseSchema(BaseModel):
    criteria: CriteriaSchema
    active_filter_count: int


class StationListResponseSchema(BaseModel):
    stations: list[StationSchema]
    count: int
    total: int
    empty: bool
    active_filter_count: int
    selected_station_id: str | None = None


class OptionSchema(BaseModel):
    value: str
    label: str


class FilterOptionsSchema(BaseModel):
    charger_types: list[str]
    availability: list[OptionSchema]
    amenities: list[str]
    min_distance: float
    max_distance: float
    default_criteria: CriteriaSchema
    time_slots: list[str] = Field(default_factory=lambda: list(TIME_SLOTS))


class SessionResponseSchema(BaseModel):
    session_id: str


class SelectionRequestSchema(BaseModel):
    station_id: str


class SelectionResponseSchema(BaseModel):
    selected: StationSchema | None = None


class BookingOpenRequestSchema(BaseModel):
    station_id: str | None = None  # defaults to the current selection


class SlotRequestSchema(BaseModel):
    slot: str


class DurationRequestSchema(BaseModel):
    delta: int | None = Field(default=None, description="+1 / -1 step, clamped to the allowed range")
    hours: int | None = None


class PaymentMethodRequestSchema(BaseModel):
    method: PaymentMethod


class PaymentDetailsSchema(BaseModel):
    card_number: str | None = None
    expiry: str | None = None
    cvv: str | None = None
    cardholder_name: str | None = None
    upi_id: str | None = None
    wallet_id: str | None = None

    def to_details(self) -> PaymentDetails:
        return PaymentDetails(**self.model_dump())


class BookingResponseSchema(BaseModel):
    action: str | None = None
    state: str
    message: str | None = None
    station_id: str | None = None
    station_name: str | None = None
    slot: str | None = None
    duration_hours: int | None = None
    payment_method: PaymentMethod | None = None
    cost: float | None = None
    cost_display: str | None = None
    estimated_energy: float | None = None
    booking_id: str | None = None
    error: str | None = None
    can_proceed: bool = False
    time_slots: list[str] = Field(default_factory=list)

    @classmethod
    def from_workflow(cls, workflow: BookingWorkflow, result: BookingResult | None = None) -> BookingResponseSchema:
        state = result.state if result else workflow.state
        action = result.action if result else None
        message = result.message if result else None
        if isinstance(state, Idle):
            return cls(action=action, state=state.name, message=message)

        session = state.session
        cost = workflow.quote()
        return cls(
            action=action,
            state=state.name,
            message=message,
            station_id=session.station.id,
            station_name=session.station.name,
            slot=session.slot,
            duration_hours=session.duration_hours,
            payment_method=session.payment_method,
            cost=round_amount(cost) if cost is not None else None,
            cost_display=format_amount(cost) if cost is not None else None,
            estimated_energy=estimated_energy(session.duration_hours, workflow.units_per_hour),
            booking_id=state.booking_id if isinstance(state, Confirming) else None,
            error=state.error if isinstance(state, Payment) else None,
            can_proceed=workflow.can_proceed,
            time_slots=list(TIME_SLOTS),
        )
