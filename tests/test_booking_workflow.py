"""
Tests for the booking workflow state machine.
"""

from __future__ import annotations

import pytest

from app.application.exceptions import BookingTransitionError, InvalidArgument, PaymentGatewayError
from app.application.ports.payment_gateway import PaymentGatewayPort
from app.application.use_cases.booking import BookingWorkflow
from app.application.utils.booking_reference import is_booking_reference
from app.domain.entities.booking_state import TIME_SLOTS, Confirming, Idle, Payment, SlotSelection
from app.domain.entities.payment import ChargeResult, PaymentDetails, PaymentMethod
from app.domain.entities.station import AvailabilityStatus
from app.infrastructure.directory.static_directory import StaticStationDirectory
from app.infrastructure.payments.mock_gateway import MockPaymentGateway
from app.infrastructure.scheduling.manual_scheduler import ManualScheduler

CARD = PaymentDetails(
    card_number="4111 1111 1111 1111",
    expiry="12/30",
    cvv="123",
    cardholder_name="Asha Rao",
)


class _ExplodingGateway(PaymentGatewayPort):
    def submit_charge(self, amount, method, details, description=None):
        raise PaymentGatewayError("connection reset")


class _ReferenceGateway(PaymentGatewayPort):
    def submit_charge(self, amount, method, details, description=None):
        return ChargeResult.ok(transaction_id="txn_1", booking_reference="CEABC12345")


def _workflow(gateway=None, directory=None):
    scheduler = ManualScheduler()
    workflow = BookingWorkflow(
        payment_gateway=gateway or MockPaymentGateway(),
        scheduler=scheduler,
        directory=directory,
        units_per_hour=25,
        auto_close_seconds=3.0,
        default_duration_hours=2,
        min_duration_hours=1,
        max_duration_hours=8,
    )
    return workflow, scheduler


def _to_payment(workflow, station, slot="10:00 AM"):
    workflow.open(station)
    workflow.choose_slot(slot)
    return workflow.proceed_to_payment()


def test_happy_path_returns_to_idle_after_delay(make_station):
    workflow, scheduler = _workflow()
    station = make_station(price_per_unit=10.8)

    opened = workflow.open(station)
    assert isinstance(opened.state, SlotSelection)
    assert opened.state.session.duration_hours == 2
    assert opened.state.session.payment_method == PaymentMethod.card
    assert workflow.can_proceed is False

    workflow.choose_slot("02:00 PM")
    workflow.increment_duration()
    assert workflow.quote() == pytest.approx(810.0)
    assert workflow.can_proceed is True

    assert isinstance(workflow.proceed_to_payment().state, Payment)

    result = workflow.submit_payment(CARD)
    assert result.action == "confirmed"
    assert isinstance(result.state, Confirming)
    assert result.state.amount == pytest.approx(810.0)
    assert is_booking_reference(result.state.booking_id)

    assert scheduler.advance(2.9) == 0
    assert isinstance(workflow.state, Confirming)
    assert scheduler.advance(0.1) == 1
    assert isinstance(workflow.state, Idle)
    assert workflow.quote() is None


def test_open_refuses_station_without_free_chargers(make_station):
    workflow, _ = _workflow()
    full = make_station(available_chargers=0)
    offline = make_station(id="B", status=AvailabilityStatus.offline)

    assert workflow.open(full).action == "unavailable"
    assert workflow.open(offline).action == "unavailable"
    assert isinstance(workflow.state, Idle)


def test_proceed_without_slot_is_blocked(make_station):
    workflow, _ = _workflow()
    workflow.open(make_station())

    result = workflow.proceed_to_payment()

    assert result.action == "blocked"
    assert isinstance(result.state, SlotSelection)


def test_unknown_slot_rejected(make_station):
    workflow, _ = _workflow()
    workflow.open(make_station())
    with pytest.raises(InvalidArgument):
        workflow.choose_slot("11:30 PM")
    assert len(TIME_SLOTS) == 12
    assert TIME_SLOTS[0] == "09:00 AM" and TIME_SLOTS[-1] == "08:00 PM"


def test_duration_clamped_to_bounds(make_station):
    workflow, _ = _workflow()
    workflow.open(make_station())

    for _ in range(10):
        workflow.increment_duration()
    assert workflow.state.session.duration_hours == 8

    for _ in range(10):
        workflow.decrement_duration()
    assert workflow.state.session.duration_hours == 1

    workflow.set_duration(5)
    assert workflow.state.session.duration_hours == 5
    with pytest.raises(InvalidArgument):
        workflow.set_duration(9)


def test_back_from_payment_keeps_slot_and_duration(make_station):
    workflow, _ = _workflow()
    workflow.open(make_station())
    workflow.choose_slot("05:00 PM")
    workflow.set_duration(4)
    workflow.proceed_to_payment()

    result = workflow.back()

    assert isinstance(result.state, SlotSelection)
    assert result.state.session.slot == "05:00 PM"
    assert result.state.session.duration_hours == 4


def test_back_from_slot_selection_closes(make_station):
    workflow, _ = _workflow()
    workflow.open(make_station())
    assert isinstance(workflow.back().state, Idle)


def test_invalid_details_do_not_advance(make_station):
    gateway = MockPaymentGateway()
    workflow, _ = _workflow(gateway=gateway)
    _to_payment(workflow, make_station())

    result = workflow.submit_payment(PaymentDetails(card_number="1234", expiry="1/2", cvv="", cardholder_name=""))

    assert result.action == "invalid_details"
    assert isinstance(result.state, Payment)
    assert result.state.error == "Enter a valid card number"
    assert gateway.charges == []


def test_declined_charge_returns_to_payment_with_error(make_station):
    gateway = MockPaymentGateway(declined_methods={PaymentMethod.upi})
    workflow, scheduler = _workflow(gateway=gateway)
    _to_payment(workflow, make_station(), slot="09:00 AM")
    workflow.choose_payment_method(PaymentMethod.upi)

    result = workflow.submit_payment(PaymentDetails(upi_id="asha@okbank"))

    assert result.action == "payment_failed"
    assert isinstance(result.state, Payment)
    assert result.message == "Payment declined by issuer"
    assert result.state.session.slot == "09:00 AM"
    assert result.state.session.payment_method == PaymentMethod.upi
    assert scheduler.pending == 0

    workflow.choose_payment_method(PaymentMethod.card)
    assert workflow.state.error is None
    assert workflow.submit_payment(CARD).action == "confirmed"


def test_gateway_exception_is_reported_as_failure(make_station):
    workflow, _ = _workflow(gateway=_ExplodingGateway())
    _to_payment(workflow, make_station())

    result = workflow.submit_payment(CARD)

    assert result.action == "payment_failed"
    assert isinstance(result.state, Payment)
    assert "try again" in result.state.error


def test_availability_rechecked_before_charging(make_station):
    station = make_station(id="S1")
    directory = StaticStationDirectory([station])
    gateway = MockPaymentGateway()
    workflow, _ = _workflow(gateway=gateway, directory=directory)
    _to_payment(workflow, station)

    directory.replace_catalog([make_station(id="S1", available_chargers=0)])
    result = workflow.submit_payment(CARD)

    assert result.action == "unavailable"
    assert isinstance(result.state, Payment)
    assert gateway.charges == []


def test_gateway_booking_reference_preferred(make_station):
    workflow, _ = _workflow(gateway=_ReferenceGateway())
    _to_payment(workflow, make_station())

    result = workflow.submit_payment(CARD)

    assert result.state.booking_id == "CEABC12345"
    assert result.state.transaction_id == "txn_1"


def test_close_during_confirming_cancels_timer(make_station):
    workflow, scheduler = _workflow()
    station = make_station()
    _to_payment(workflow, station)
    workflow.submit_payment(CARD)
    assert scheduler.pending == 1

    assert isinstance(workflow.close().state, Idle)
    assert scheduler.pending == 0

    # A new booking must not be dismissed by the old timer.
    workflow.open(station)
    assert scheduler.advance(5) == 0
    assert isinstance(workflow.state, SlotSelection)


def test_stale_auto_close_is_ignored(make_station):
    workflow, _ = _workflow()
    workflow.open(make_station())
    result = workflow.auto_close("not-the-current-session")
    assert result.action == "ignored"
    assert isinstance(workflow.state, SlotSelection)


def test_events_outside_their_state_raise(make_station):
    workflow, _ = _workflow()
    with pytest.raises(BookingTransitionError):
        workflow.submit_payment(CARD)
    with pytest.raises(BookingTransitionError):
        workflow.choose_slot("09:00 AM")
    with pytest.raises(BookingTransitionError):
        workflow.back()

    _to_payment(workflow, make_station())
    with pytest.raises(BookingTransitionError):
        workflow.choose_slot("09:00 AM")
    with pytest.raises(BookingTransitionError):
        workflow.open(make_station(id="B"))

    workflow.submit_payment(CARD)
    with pytest.raises(BookingTransitionError):
        workflow.back()
    with pytest.raises(BookingTransitionError):
        workflow.submit_payment(CARD)


def test_session_keeps_station_captured_at_open(make_station):
    workflow, _ = _workflow()
    station = make_station(id="A", price_per_unit=10.0)
    workflow.open(station)
    workflow.choose_slot("09:00 AM")

    # Whatever is selected elsewhere later, the session still points at A.
    assert workflow.state.session.station is station
    assert workflow.quote() == pytest.approx(500.0)


def test_explicit_zero_rate_is_not_replaced_by_default(make_station):
    gateway = MockPaymentGateway()
    workflow = BookingWorkflow(payment_gateway=gateway, scheduler=ManualScheduler(), units_per_hour=0)
    assert workflow.units_per_hour == 0

    _to_payment(workflow, make_station())
    assert workflow.quote() is None

    result = workflow.submit_payment(CARD)
    assert result.action == "blocked"
    assert isinstance(result.state, Payment)
    assert gateway.charges == []


def test_explicit_duration_bounds_are_kept(make_station):
    workflow = BookingWorkflow(
        payment_gateway=MockPaymentGateway(),
        scheduler=ManualScheduler(),
        default_duration_hours=1,
        min_duration_hours=1,
        max_duration_hours=1,
    )
    workflow.open(make_station())
    workflow.increment_duration()
    assert workflow.state.session.duration_hours == 1
