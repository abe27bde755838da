"""Telegram bot interface for Laia.

Every Telegram chat gets its own Session, so a clarification question asked
in one chat never swallows a message from another.

Requires telegram_credentials.py with TELEGRAM_TOKEN from @BotFather.
If not configured, start_telegram() logs a message and returns without error.
"""

import asyncio
import threading
import time

from telegram import Update
from telegram.ext import ApplicationBuilder, ContextTypes, MessageHandler, filters

from laia.commands.parse import TYPED, Deferred, Executed, NeedsParameter, Utterance
from laia.session import Session

SESSION_IDLE_SECONDS = 6 * 60 * 60

_sessions = {}  # chat_id -> (Session, last message time)
_sessions_lock = threading.Lock()


def _log(msg):
    print(msg, flush=True)


def session_for(chat_id, locale, now=None):
    """The chat's Session, created on first use. Evicts chats idle too long."""
    now = time.monotonic() if now is None else now
    with _sessions_lock:
        for other, (session, last_seen) in list(_sessions.items()):
            if now - last_seen > SESSION_IDLE_SECONDS:
                session.leave()
                del _sessions[other]
        entry = _sessions.get(chat_id)
        session = entry[0] if entry else Session(locale)
        _sessions[chat_id] = (session, now)
        return session


def reply_text(outcome):
    """What to send back for an outcome (None: send nothing)."""
    if isinstance(outcome, Executed):
        return outcome.response
    if isinstance(outcome, NeedsParameter):
        return outcome.question
    if isinstance(outcome, Deferred):
        return outcome.search_url
    return None


def _make_handler(orchestrator, locale):

    async def _handle_message(update: Update, context: ContextTypes.DEFAULT_TYPE):
        text = update.message.text
        if not text:
            return

        user = update.message.from_user
        username = user.first_name or user.username or "unknown"
        source = f"[Telegram:{username}]"
        _log(f"  {source} \"{text}\"")

        session = session_for(update.effective_chat.id, locale)
        # resolve() may block on the AI call; keep the event loop free
        outcome = await asyncio.to_thread(
            orchestrator.resolve, Utterance(text, TYPED, locale), session, source)

        reply = reply_text(outcome)
        _log(f"  Response: \"{reply}\"")
        if reply:
            await update.message.reply_text(reply)

    return _handle_message


async def _run_bot_async(token, orchestrator, locale):
    app = ApplicationBuilder().token(token).build()
    app.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND,
                                   _make_handler(orchestrator, locale)))

    await app.initialize()
    await app.updater.start_polling(drop_pending_updates=True)
    await app.start()
    _log("Telegram bot started.")

    # Block forever (until thread is killed as daemon)
    stop_event = asyncio.Event()
    await stop_event.wait()


def _run_bot(token, orchestrator, locale):
    """Run the Telegram bot (blocking). Meant to be called in a thread."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    loop.run_until_complete(_run_bot_async(token, orchestrator, locale))


def start_telegram(orchestrator, locale):
    """Start the Telegram bot in a background daemon thread.

    Returns True if started, False if skipped (no token).
    """
    try:
        from laia.telegram_credentials import TELEGRAM_TOKEN as token
    except ImportError:
        _log("No telegram_credentials.py; Telegram disabled.")
        return False

    t = threading.Thread(target=_run_bot, args=(token, orchestrator, locale), daemon=True)
    t.start()
    return True
