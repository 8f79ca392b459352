#!/usr/bin/env python3
"""
Interactive local booking harness (no HTTP).

Usage:
  python3 scripts/booking_local.py

What it does:
- Lists stations from the bundled catalog through the same filter use case the API uses
- Lets you select a station and walk the booking workflow with the mock payment gateway
- Uses a manual scheduler, so the auto-close after confirmation happens on /wait
"""

from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.application.exceptions import BookingTransitionError, InvalidArgument, StationNotFound
from app.application.use_cases.booking import BookingResult, BookingWorkflow
from app.application.use_cases.cost import format_amount
from app.application.use_cases.filter_stations import FilterStationsUseCase, default_criteria
from app.application.use_cases.selection import SelectionUseCase
from app.core.config import settings
from app.domain.entities.booking_state import TIME_SLOTS, Confirming, Payment
from app.domain.entities.filter_criteria import FilterCriteria
from app.domain.entities.payment import PaymentDetails, PaymentMethod
from app.infrastructure.directory.static_directory import StaticStationDirectory
from app.infrastructure.payments.mock_gateway import MockPaymentGateway
from app.infrastructure.scheduling.manual_scheduler import ManualScheduler

HELP = """Commands:
  /list [text]            -> filter stations (optional search text)
  /type <label|all>       -> charger type filter
  /radius <km>            -> max distance
  /select <id>            -> toggle selection
  /book                   -> open booking for the selected station
  /slot <n>               -> choose slot by number (1-12)
  /plus, /minus           -> change duration
  /pay                    -> go to payment
  /method <card|upi|wallet>
  /card <number> <MM/YY> <cvv> <name...>
  /upi <id>  /wallet <id>
  /back, /close
  /wait                   -> let the auto-close timer run
  /quit"""


def _print_result(workflow: BookingWorkflow, result: BookingResult) -> None:
    state = result.state
    print(f"[{result.action}] state={state.name}")
    if result.message:
        print(f"  ! {result.message}")
    session = getattr(state, "session", None)
    if session is None:
        return
    print(f"  station: {session.station.name}")
    print(f"  slot: {session.slot or '-'}  duration: {session.duration_hours}h  method: {session.payment_method.value}")
    cost = workflow.quote()
    if cost is not None:
        print(f"  total: {format_amount(cost)}")
    if isinstance(state, Confirming):
        print(f"  booking id: #{state.booking_id}")
    if isinstance(state, Payment) and state.error:
        print(f"  error: {state.error}")


def main() -> None:
    directory = StaticStationDirectory()
    scheduler = ManualScheduler()
    finder = FilterStationsUseCase(directory=directory)
    selection = SelectionUseCase(clear_on_filter_miss=settings.SELECTION_CLEAR_ON_FILTER_MISS)
    workflow = BookingWorkflow(payment_gateway=MockPaymentGateway(), scheduler=scheduler, directory=directory)
    selection.subscribe(lambda s: print(f"(selected: {s.name if s else 'none'})"))

    criteria = default_criteria()
    query = ""
    print("\nLocal Booking Harness")
    print("-" * 60)
    print(HELP)

    while True:
        try:
            line = input("\n> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            return
        if not line:
            continue

        cmd, _, arg = line.partition(" ")
        cmd = cmd.lower()
        arg = arg.strip()

        try:
            if cmd in ("/quit", "/exit"):
                print("Bye!")
                return
            if cmd == "/help":
                print(HELP)
            elif cmd == "/list":
                query = arg
                result = finder.execute(query, criteria)
                selection.reconcile(result.stations)
                print(f"{len(result.stations)} Stations Found")
                if result.empty:
                    print("(no stations match these filters)")
                for s in result.stations:
                    marker = "*" if selection.selected and selection.selected.id == s.id else " "
                    print(
                        f" {marker} [{s.id}] {s.name} - {s.distance_km} km - {s.status_label} - "
                        f"{s.available_chargers}/{s.total_chargers} - {settings.CURRENCY_SYMBOL}{s.price_per_unit}/kWh"
                    )
            elif cmd == "/type":
                criteria = FilterCriteria(
                    charger_type=arg or "all",
                    availability=criteria.availability,
                    amenities=criteria.amenities,
                    max_distance_km=criteria.max_distance_km,
                )
            elif cmd == "/radius":
                criteria = FilterCriteria(
                    charger_type=criteria.charger_type,
                    availability=criteria.availability,
                    amenities=criteria.amenities,
                    max_distance_km=float(arg),
                )
            elif cmd == "/select":
                selection.toggle(finder.get_station(arg))
            elif cmd == "/book":
                if selection.selected is None:
                    print("Select a station first")
                else:
                    _print_result(workflow, workflow.open(selection.selected))
                    print("  slots: " + ", ".join(f"{i}) {slot}" for i, slot in enumerate(TIME_SLOTS, 1)))
            elif cmd == "/slot":
                _print_result(workflow, workflow.choose_slot(TIME_SLOTS[int(arg) - 1]))
            elif cmd == "/plus":
                _print_result(workflow, workflow.increment_duration())
            elif cmd == "/minus":
                _print_result(workflow, workflow.decrement_duration())
            elif cmd == "/pay":
                _print_result(workflow, workflow.proceed_to_payment())
            elif cmd == "/method":
                _print_result(workflow, workflow.choose_payment_method(PaymentMethod(arg)))
            elif cmd == "/card":
                number, expiry, cvv, *name = arg.split()
                details = PaymentDetails(card_number=number, expiry=expiry, cvv=cvv, cardholder_name=" ".join(name))
                _print_result(workflow, workflow.submit_payment(details))
            elif cmd == "/upi":
                _print_result(workflow, workflow.submit_payment(PaymentDetails(upi_id=arg)))
            elif cmd == "/wallet":
                _print_result(workflow, workflow.submit_payment(PaymentDetails(wallet_id=arg)))
            elif cmd == "/back":
                _print_result(workflow, workflow.back())
            elif cmd == "/close":
                _print_result(workflow, workflow.close())
            elif cmd == "/wait":
                scheduler.advance(settings.BOOKING_AUTO_CLOSE_SECONDS)
                print(f"state={workflow.state.name}")
            else:
                print("Unknown command, try /help")
        except (BookingTransitionError, InvalidArgument, StationNotFound, ValueError, IndexError) as e:
            print(f"ERROR: {e}")


if __name__ == "__main__":
    main()
