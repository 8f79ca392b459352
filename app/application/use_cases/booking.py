from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import dataclass
from typing import Callable

from app.application.exceptions import (
    BookingTransitionError,
    InvalidArgument,
    PaymentGatewayError,
    StationDirectoryError,
)
from app.application.ports.payment_gateway import PaymentGatewayPort
from app.application.ports.scheduler import ScheduledHandle, SchedulerPort
from app.application.ports.station_directory import StationDirectoryPort
from app.application.use_cases.cost import charging_cost
from app.application.utils.booking_reference import generate_booking_reference, is_booking_reference
from app.application.utils.payment_validation import validate_payment_details
from app.core.config import settings
from app.domain.entities.booking_state import (
    TIME_SLOTS,
    BookingSession,
    BookingState,
    Confirming,
    Idle,
    Payment,
    SlotSelection,
)
from app.domain.entities.payment import ChargeResult, PaymentDetails, PaymentMethod
from app.domain.entities.station import Station


@dataclass(frozen=True)
class BookingResult:
    action: str
    state: BookingState
    message: str | None = None


class BookingWorkflow:
    """
    Slot reservation and payment for one station at a time.

    Idle -> SlotSelection -> Payment -> Confirming -> Idle. Confirming returns to
    Idle on its own after the auto-close delay. Events that a state does not
    define raise BookingTransitionError; unmet preconditions (no slot, bad
    payment details, no free chargers) return a result and leave the state as is.
    """

    def __init__(
        self,
        payment_gateway: PaymentGatewayPort,
        scheduler: SchedulerPort,
        directory: StationDirectoryPort | None = None,
        units_per_hour: float | None = None,
        auto_close_seconds: float | None = None,
        default_duration_hours: int | None = None,
        min_duration_hours: int | None = None,
        max_duration_hours: int | None = None,
        reference_factory: Callable[[], str] = generate_booking_reference,
    ) -> None:
        self._gateway = payment_gateway
        self._scheduler = scheduler
        self._directory = directory
        self._units_per_hour = settings.ENERGY_UNITS_PER_HOUR if units_per_hour is None else units_per_hour
        self._auto_close_seconds = (
            settings.BOOKING_AUTO_CLOSE_SECONDS if auto_close_seconds is None else auto_close_seconds
        )
        self._default_duration = (
            settings.BOOKING_DEFAULT_DURATION_HOURS if default_duration_hours is None else default_duration_hours
        )
        self._min_duration = settings.BOOKING_MIN_DURATION_HOURS if min_duration_hours is None else min_duration_hours
        self._max_duration = settings.BOOKING_MAX_DURATION_HOURS if max_duration_hours is None else max_duration_hours
        self._reference_factory = reference_factory

        self._state: BookingState = Idle()
        self._timer: ScheduledHandle | None = None
        self._lock = threading.RLock()
        self._logger = logging.getLogger(__name__)

    @property
    def state(self) -> BookingState:
        return self._state

    @property
    def units_per_hour(self) -> float:
        return self._units_per_hour

    @property
    def can_proceed(self) -> bool:
        state = self._state
        return isinstance(state, SlotSelection) and state.session.slot is not None

    def quote(self) -> float | None:
        """Live cost for the open session, or the charged amount once confirmed."""
        state = self._state
        if isinstance(state, Idle):
            return None
        if isinstance(state, Confirming):
            return state.amount
        try:
            return self._cost(state.session)
        except InvalidArgument:
            return None

    def open(self, station: Station) -> BookingResult:
        with self._lock:
            self._require("open", Idle)
            if not station.is_bookable:
                self._logger.warning(
                    "Booking refused, station not bookable",
                    extra={"station_id": station.id, "reason": station.status.value},
                )
                return BookingResult(
                    action="unavailable",
                    state=self._state,
                    message="No chargers are available at this station right now",
                )
            session = BookingSession(
                session_token=uuid.uuid4().hex,
                station=station,
                duration_hours=self._default_duration,
                payment_method=PaymentMethod.card,
            )
            return self._transition("opened", SlotSelection(session=session))

    def choose_slot(self, slot: str) -> BookingResult:
        with self._lock:
            state = self._require("choose_slot", SlotSelection)
            if slot not in TIME_SLOTS:
                raise InvalidArgument(f"Unknown time slot: {slot!r}")
            return self._transition("slot_chosen", SlotSelection(session=state.session.with_changes(slot=slot)))

    def increment_duration(self) -> BookingResult:
        with self._lock:
            state = self._require("increment_duration", SlotSelection)
            hours = min(self._max_duration, state.session.duration_hours + 1)
            return self._set_duration(state, hours)

    def decrement_duration(self) -> BookingResult:
        with self._lock:
            state = self._require("decrement_duration", SlotSelection)
            hours = max(self._min_duration, state.session.duration_hours - 1)
            return self._set_duration(state, hours)

    def set_duration(self, hours: int) -> BookingResult:
        with self._lock:
            state = self._require("set_duration", SlotSelection)
            if isinstance(hours, bool) or not isinstance(hours, int):
                raise InvalidArgument(f"Duration must be whole hours, got {hours!r}")
            if not self._min_duration <= hours <= self._max_duration:
                raise InvalidArgument(
                    f"Duration must be between {self._min_duration} and {self._max_duration} hours"
                )
            return self._set_duration(state, hours)

    def proceed_to_payment(self) -> BookingResult:
        with self._lock:
            state = self._require("proceed_to_payment", SlotSelection)
            if state.session.slot is None:
                return BookingResult(action="blocked", state=state, message="Select a time slot first")
            return self._transition("payment_started", Payment(session=state.session))

    def choose_payment_method(self, method: PaymentMethod) -> BookingResult:
        with self._lock:
            state = self._require("choose_payment_method", Payment)
            session = state.session.with_changes(payment_method=PaymentMethod(method))
            return self._transition("method_chosen", Payment(session=session))

    def back(self) -> BookingResult:
        with self._lock:
            state = self._require("back", SlotSelection, Payment)
            if isinstance(state, Payment):
                return self._transition("back", SlotSelection(session=state.session))
            return self._teardown("closed")

    def submit_payment(self, details: PaymentDetails) -> BookingResult:
        with self._lock:
            state = self._require("submit_payment", Payment)
            session = state.session

            error = validate_payment_details(session.payment_method, details)
            if error:
                return self._transition("invalid_details", Payment(session=session, error=error))

            try:
                amount = self._cost(session)
            except InvalidArgument as e:
                self._logger.warning("Cost calculation refused", extra={"station_id": session.station.id, "error": str(e)})
                return BookingResult(action="blocked", state=state, message=str(e))

            if not self._still_bookable(session.station):
                return self._transition(
                    "unavailable",
                    Payment(session=session, error="No chargers are available at this station right now"),
                )

            result = self._charge(session, amount, details)
            if not result.success:
                self._logger.warning(
                    "Payment failed",
                    extra={
                        "station_id": session.station.id,
                        "amount": amount,
                        "method": session.payment_method.value,
                        "reason": result.error,
                    },
                )
                return self._transition(
                    "payment_failed",
                    Payment(session=session, error=result.error or "Payment failed, please try again"),
                )

            booking_id = (
                result.booking_reference
                if is_booking_reference(result.booking_reference)
                else self._reference_factory()
            )
            confirmed = self._transition(
                "confirmed",
                Confirming(
                    session=session,
                    booking_id=booking_id,
                    amount=amount,
                    transaction_id=result.transaction_id,
                ),
            )
            token = session.session_token
            self._timer = self._scheduler.schedule(self._auto_close_seconds, lambda: self.auto_close(token))
            return confirmed

    def close(self) -> BookingResult:
        with self._lock:
            if isinstance(self._state, Idle):
                return BookingResult(action="closed", state=self._state)
            return self._teardown("closed")

    def auto_close(self, session_token: str) -> BookingResult:
        """Timer callback. Ignored unless the confirmed session it was armed for is still current."""
        with self._lock:
            state = self._state
            if not isinstance(state, Confirming) or state.session.session_token != session_token:
                self._logger.debug("Stale auto-close ignored")
                return BookingResult(action="ignored", state=state)
            self._timer = None
            return self._teardown("auto_closed")

    def _set_duration(self, state: SlotSelection, hours: int) -> BookingResult:
        return self._transition("duration_changed", SlotSelection(session=state.session.with_changes(duration_hours=hours)))

    def _cost(self, session: BookingSession) -> float:
        return charging_cost(session.duration_hours, session.station.price_per_unit, self._units_per_hour)

    def _still_bookable(self, station: Station) -> bool:
        if self._directory is None:
            return station.is_bookable
        try:
            live = self._directory.get_station(station.id)
        except StationDirectoryError as e:
            self._logger.error("Availability re-check failed", extra={"station_id": station.id, "error": str(e)})
            return False
        return live is not None and live.is_bookable

    def _charge(self, session: BookingSession, amount: float, details: PaymentDetails) -> ChargeResult:
        try:
            return self._gateway.submit_charge(
                amount=amount,
                method=session.payment_method,
                details=details,
                description=f"{session.station.name} {session.slot} x{session.duration_hours}h",
            )
        except PaymentGatewayError as e:
            self._logger.error("Error submitting charge", extra={"station_id": session.station.id, "error": str(e)})
            return ChargeResult.failed("Payment could not be processed, please try again")

    def _require(self, event: str, *allowed: type):
        if not isinstance(self._state, allowed):
            raise BookingTransitionError(f"Cannot {event} while {self._state.name}")
        return self._state

    def _teardown(self, action: str) -> BookingResult:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        return self._transition(action, Idle())

    def _transition(self, action: str, new_state: BookingState) -> BookingResult:
        previous = self._state
        self._state = new_state
        session = getattr(new_state, "session", None) or getattr(previous, "session", None)
        self._logger.info(
            "Booking transition",
            extra={
                "action": action,
                "state": f"{previous.name}->{new_state.name}",
                "station_id": session.station.id if session else None,
                "booking_id": getattr(new_state, "booking_id", None),
            },
        )
        message = new_state.error if isinstance(new_state, Payment) else None
        return BookingResult(action=action, state=new_state, message=message)
