"""
Telegram bot channel: the reservation operations as chat commands.

Replies are plain text built by the same rendering helpers as the CLI.
Tool calls run in a worker thread so storage I/O never blocks the event loop.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional

from telegram import Update
from telegram.ext import Application, CommandHandler, ContextTypes

from innkeeper.config import get_config
from innkeeper.exceptions import ChannelError
from innkeeper.rendering import (
    render_booking,
    render_payment,
    render_reservation,
    render_reservations,
    render_result,
    render_rooms,
    render_search,
)
from innkeeper.tools import (
    book_room,
    cancel_reservation,
    get_reservation,
    list_reservations,
    list_rooms,
    pay_reservation,
    save_all,
    search_available_rooms,
)

logger = logging.getLogger(__name__)

# Telegram rejects messages longer than this
MAX_MESSAGE_LENGTH = 4096

USAGE = {
    "search": "Usage: /search CHECK_IN CHECK_OUT [CATEGORY]\nExample: /search 2030-05-01 2030-05-04 Deluxe",
    "book": "Usage: /book ROOM CHECK_IN CHECK_OUT GUEST NAME\nExample: /book 101 2030-05-01 2030-05-04 Jane Doe",
    "pay": "Usage: /pay RESERVATION_ID AMOUNT\nExample: /pay AB12CD34 300",
    "cancel": "Usage: /cancel RESERVATION_ID",
    "show": "Usage: /show RESERVATION_ID",
}


# --- HELPERS ---

def split_message(text: str, limit: int = MAX_MESSAGE_LENGTH) -> List[str]:
    """Splits long replies on line boundaries so each chunk fits in one message."""
    chunks: List[str] = []
    current = ""
    for line in text.splitlines(keepends=True):
        while len(line) > limit:
            if current:
                chunks.append(current)
                current = ""
            chunks.append(line[:limit])
            line = line[limit:]
        if len(current) + len(line) > limit:
            chunks.append(current)
            current = ""
        current += line
    if current:
        chunks.append(current)
    return [chunk.rstrip("\n") for chunk in chunks] or [""]


async def _reply(update: Update, text: str) -> None:
    if not update.message:
        return
    for chunk in split_message(text):
        await update.message.reply_text(chunk)


async def _run_tool(func: Callable[..., Dict[str, Any]], *args: Any) -> Dict[str, Any]:
    return await asyncio.to_thread(func, *args)


def _args(context: ContextTypes.DEFAULT_TYPE) -> List[str]:
    return list(context.args or [])


# --- HANDLERS ---

async def start_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    hotel = get_config().get_hotel_display_name()
    welcome = (
        f"Welcome to {hotel}!\n\n"
        "Commands:\n"
        "/rooms - list all rooms\n"
        "/search CHECK_IN CHECK_OUT [CATEGORY] - find free rooms\n"
        "/book ROOM CHECK_IN CHECK_OUT GUEST NAME - book a room\n"
        "/pay RESERVATION_ID AMOUNT - pay to confirm a booking\n"
        "/show RESERVATION_ID - booking details\n"
        "/cancel RESERVATION_ID - cancel a booking\n"
        "/reservations - list all reservations\n\n"
        "Dates use the YYYY-MM-DD format."
    )
    await _reply(update, welcome)


async def rooms_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    result = await _run_tool(list_rooms)
    await _reply(update, render_result(result, lambda r: render_rooms(r["rooms"])))


async def search_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    args = _args(context)
    if len(args) not in (2, 3):
        await _reply(update, USAGE["search"])
        return
    category: Optional[str] = args[2] if len(args) == 3 else None
    result = await _run_tool(search_available_rooms, args[0], args[1], category)
    await _reply(update, render_result(result, render_search))


async def book_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    args = _args(context)
    if len(args) < 4:
        await _reply(update, USAGE["book"])
        return
    room_id, check_in, check_out = args[:3]
    guest_name = " ".join(args[3:])
    result = await _run_tool(book_room, room_id, guest_name, check_in, check_out)
    await _reply(update, render_result(result, render_booking))


async def pay_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    args = _args(context)
    if len(args) != 2:
        await _reply(update, USAGE["pay"])
        return
    result = await _run_tool(pay_reservation, args[0], args[1])
    await _reply(update, render_result(result, render_payment))


async def cancel_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    args = _args(context)
    if len(args) != 1:
        await _reply(update, USAGE["cancel"])
        return
    result = await _run_tool(cancel_reservation, args[0])
    await _reply(update, render_result(result, lambda r: r["message"]))


async def show_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    args = _args(context)
    if len(args) != 1:
        await _reply(update, USAGE["show"])
        return
    result = await _run_tool(get_reservation, args[0])
    await _reply(update, render_result(result, lambda r: render_reservation(r["reservation"])))


async def reservations_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    result = await _run_tool(list_reservations)
    await _reply(update, render_result(result, lambda r: render_reservations(r["reservations"])))


async def error_handler(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
    logger.error(f"Telegram handler error: {context.error}", exc_info=context.error)
    if isinstance(update, Update) and update.message:
        await update.message.reply_text("Sorry, something went wrong. Please try again.")


COMMANDS = {
    "start": start_command,
    "rooms": rooms_command,
    "search": search_command,
    "book": book_command,
    "pay": pay_command,
    "cancel": cancel_command,
    "show": show_command,
    "reservations": reservations_command,
}


def create_telegram_app() -> Application:
    config = get_config()
    token = config.get_telegram_bot_token()
    if not token:
        raise ChannelError("TELEGRAM_BOT_TOKEN environment variable is not set.")

    app = Application.builder().token(token).build()
    for name, handler in COMMANDS.items():
        app.add_handler(CommandHandler(name, handler))
    app.add_error_handler(error_handler)
    return app


async def run_telegram_bot(application: Application) -> None:
    """Polls until cancelled, then shuts down and saves everything."""
    logger.info("Starting Telegram bot...")
    await application.initialize()
    await application.start()
    await application.updater.start_polling(drop_pending_updates=True)
    try:
        await asyncio.Event().wait()
    finally:
        logger.info("Stopping Telegram bot...")
        await application.updater.stop()
        await application.stop()
        await application.shutdown()
        result = save_all()
        if "error" in result:
            logger.error(result["error"])
