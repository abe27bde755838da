"""Laia console chat.

Reads lines from the terminal and resolves each one like a chat message.
A line starting with "~" is treated as dictated (voice-origin) text, so the
normalizer runs on it exactly as it would on speech-to-text output.

Usage:
    python -m laia
"""

from laia.commands.orchestrator import Orchestrator
from laia.commands.parse import TYPED, VOICE, Deferred, Executed, NeedsParameter, Utterance
from laia.launcher import MemoryLauncher
from laia.session import Session
from laia.settings import Settings

_APPS = ["Spotify", "WhatsApp", "Instagram", "Telegram", "Calendar", "Camera", "Maps"]


def log(msg):
    print(msg, flush=True)


def main():
    settings = Settings.load()
    launcher = MemoryLauncher(apps=_APPS, open_browser=True)
    orchestrator = Orchestrator(launcher, settings)
    session = Session(settings.locale)

    # Start Telegram bot (if token is configured)
    try:
        from laia.telegram_bot import start_telegram
        start_telegram(orchestrator, settings.locale)
    except Exception as e:
        log(f"Telegram bot failed to start: {e}")

    log(f"Language: {settings.locale}  AI: {'on' if orchestrator.ai.configured else 'off'}")
    log(f"Custom commands: {len(settings.custom_commands)}")
    log("Type a message (\"~\" prefix = dictated, Ctrl-D to quit).\n")

    while True:
        try:
            line = input("> ")
        except (EOFError, KeyboardInterrupt):
            log("\nShutting down.")
            break

        origin = TYPED
        if line.startswith("~"):
            origin, line = VOICE, line[1:]
        outcome = orchestrator.resolve(Utterance(line, origin, settings.locale), session)

        if isinstance(outcome, Executed):
            log(f"  {outcome.response}")
        elif isinstance(outcome, NeedsParameter):
            log(f"  {outcome.question}")
        elif isinstance(outcome, Deferred):
            log(f"  (searching the web: {outcome.search_url})")
            launcher.open_url(outcome.search_url)


if __name__ == "__main__":
    main()
