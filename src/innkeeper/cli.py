"""CLI entry point for innkeeper."""
from __future__ import annotations

import logging
from datetime import date
from typing import Any, Callable, Dict, Optional

import click

from innkeeper import __version__
from innkeeper.config import get_config
from innkeeper.models import parse_date, format_money, to_money
from innkeeper.rendering import (
    render_booking,
    render_payment,
    render_reservation,
    render_reservations,
    render_result,
    render_rooms,
    render_search,
)
from innkeeper.services import PersistencePolicy
from innkeeper import tools

logger = logging.getLogger(__name__)

MENU_OPTIONS = (
    "Search Available Rooms",
    "Book a Room",
    "Cancel Reservation",
    "View Booking Details",
    "Simulate Payment",
    "View All Rooms (Admin)",
    "View All Reservations (Admin)",
    "Exit",
)
EXIT_CHOICE = len(MENU_OPTIONS)


def _emit(result: Dict[str, Any], renderer: Callable[[Dict[str, Any]], str]) -> None:
    """Echoes a tool result, or fails the command with its error message."""
    if "error" in result:
        raise click.ClickException(result["error"])
    click.echo(renderer(result))
    if result.get("warning"):
        click.echo(f"Warning: {result['warning']}", err=True)


def _save_if_manual() -> None:
    """Flushes rooms and reservations when the ledger does not save on its own."""
    if tools.get_ledger().policy is PersistencePolicy.MANUAL:
        result = tools.save_all()
        if "error" in result:
            raise click.ClickException(result["error"])


@click.group()
@click.version_option(version=__version__)
@click.option("--log-level", default=None, help="Overrides LOG_LEVEL for this run.")
def main(log_level: Optional[str]) -> None:
    """Innkeeper - hotel room inventory and reservations.

    Search rooms by date range and category, book them, pay to confirm
    and cancel, against the storage named by DATABASE_URL.
    """
    level = (log_level or get_config().get_log_level()).upper()
    logging.basicConfig(format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", level=level)


@main.command()
def rooms() -> None:
    """List every room in the catalog."""
    _emit(tools.list_rooms(), lambda r: render_rooms(r["rooms"]))


@main.command()
@click.argument("check_in")
@click.argument("check_out")
@click.option("--category", "-c", default=None, help="Standard, Deluxe or Suite.")
def search(check_in: str, check_out: str, category: Optional[str]) -> None:
    """Search rooms free from CHECK_IN to CHECK_OUT (YYYY-MM-DD)."""
    _emit(tools.search_available_rooms(check_in, check_out, category), render_search)


@main.command()
@click.argument("room_id")
@click.argument("guest_name")
@click.argument("check_in")
@click.argument("check_out")
def book(room_id: str, guest_name: str, check_in: str, check_out: str) -> None:
    """Book ROOM_ID for GUEST_NAME; the reservation stays pending until paid."""
    _emit(tools.book_room(room_id, guest_name, check_in, check_out), render_booking)
    _save_if_manual()


@main.command()
@click.argument("reservation_id")
@click.argument("amount")
@click.pass_context
def pay(ctx: click.Context, reservation_id: str, amount: str) -> None:
    """Pay AMOUNT for RESERVATION_ID."""
    result = tools.pay_reservation(reservation_id, amount)
    _emit(result, render_payment)
    _save_if_manual()
    if not result["payment"]["success"]:
        ctx.exit(2)


@main.command()
@click.argument("reservation_id")
def cancel(reservation_id: str) -> None:
    """Cancel RESERVATION_ID, pending or confirmed."""
    _emit(tools.cancel_reservation(reservation_id), lambda r: r["message"])
    _save_if_manual()


@main.command()
@click.argument("reservation_id")
def show(reservation_id: str) -> None:
    """Show the details of RESERVATION_ID."""
    _emit(tools.get_reservation(reservation_id), lambda r: render_reservation(r["reservation"]))


@main.command()
def reservations() -> None:
    """List all reservations in creation order."""
    _emit(tools.list_reservations(), lambda r: render_reservations(r["reservations"]))


@main.command("set-flag")
@click.argument("room_id")
@click.option("--available/--unavailable", default=True, help="Advisory flag value.")
def set_flag(room_id: str, available: bool) -> None:
    """Set the advisory availability flag of ROOM_ID (booking ignores it)."""
    _emit(tools.set_room_flag(room_id, available), lambda r: render_rooms([r["room"]]))
    _save_if_manual()


# ------------------------------------
# Interactive menu
# ------------------------------------
def _prompt_date(label: str) -> date:
    while True:
        raw = click.prompt(f"{label} (YYYY-MM-DD)", type=str)
        try:
            return parse_date(raw)
        except ValueError:
            click.echo("Invalid date format. Please use YYYY-MM-DD.")


def _menu_search() -> None:
    category = click.prompt(
        "Enter desired room category (Standard, Deluxe, Suite) or leave blank for all",
        default="",
        show_default=False,
    )
    check_in = _prompt_date("Enter desired check-in date")
    check_out = _prompt_date("Enter desired check-out date")
    result = tools.search_available_rooms(check_in.isoformat(), check_out.isoformat(), category or None)
    click.echo(render_result(result, render_search))


def _menu_book() -> None:
    room_id = click.prompt("Enter room number to book")
    guest_name = click.prompt("Enter guest name")
    check_in = _prompt_date("Enter check-in date")
    check_out = _prompt_date("Enter check-out date")
    result = tools.book_room(room_id, guest_name, check_in.isoformat(), check_out.isoformat())
    click.echo(render_result(result, render_booking))


def _menu_cancel() -> None:
    reservation_id = click.prompt("Enter Reservation ID to cancel")
    click.echo(render_result(tools.cancel_reservation(reservation_id), lambda r: r["message"]))


def _menu_show() -> None:
    reservation_id = click.prompt("Enter Reservation ID to view details")
    result = tools.get_reservation(reservation_id)
    click.echo(render_result(
        result,
        lambda r: "\n--- Booking Details ---\n" + render_reservation(r["reservation"]) + "\n-----------------------",
    ))


def _menu_pay() -> None:
    reservation_id = click.prompt("Enter Reservation ID for payment")
    lookup = tools.get_reservation(reservation_id)
    if "error" in lookup:
        click.echo(f"Error: {lookup['error']}")
        return

    reservation = lookup["reservation"]
    if reservation["is_confirmed"]:
        click.echo(f"Reservation {reservation['reservation_id']} is already confirmed. No payment needed.")
        return

    click.echo(f"Reservation total: {format_money(to_money(reservation['total_price']))}")
    amount = click.prompt("Enter amount to pay")
    click.echo(render_result(tools.pay_reservation(reservation["reservation_id"], amount), render_payment))


MENU_ACTIONS: Dict[int, Callable[[], None]] = {
    1: _menu_search,
    2: _menu_book,
    3: _menu_cancel,
    4: _menu_show,
    5: _menu_pay,
    6: lambda: click.echo(render_result(tools.list_rooms(), lambda r: render_rooms(r["rooms"]))),
    7: lambda: click.echo(render_result(tools.list_reservations(), lambda r: render_reservations(r["reservations"]))),
}


@main.command()
def menu() -> None:
    """Interactive numbered menu; data is saved on exit."""
    hotel = get_config().get_hotel_display_name()
    while True:
        click.echo(f"\n--- {hotel} Reservation Menu ---")
        for number, label in enumerate(MENU_OPTIONS, start=1):
            click.echo(f"{number}. {label}")
        choice = click.prompt("Enter your choice", type=int)

        if choice == EXIT_CHOICE:
            result = tools.save_all()
            if "error" in result:
                click.echo(f"Error: {result['error']}")
            click.echo("Exiting Hotel Reservation System. Goodbye!")
            return

        action = MENU_ACTIONS.get(choice)
        if action is None:
            click.echo(f"Invalid choice. Please enter a number between 1 and {EXIT_CHOICE}.")
            continue
        action()


if __name__ == "__main__":
    main()
