import pytest

from laia import telegram_bot
from laia.commands.parse import Deferred, Executed, NeedsParameter, Unhandled
from laia.telegram_bot import SESSION_IDLE_SECONDS, reply_text, session_for


@pytest.fixture(autouse=True)
def no_sessions(monkeypatch):
    monkeypatch.setattr(telegram_bot, "_sessions", {})


def test_reply_text():
    assert reply_text(Executed("Nota creada: llet")) == "Nota creada: llet"
    assert reply_text(NeedsParameter("Què s'ha d'anotar?")) == "Què s'ha d'anotar?"
    assert reply_text(Deferred("https://www.google.com/search?q=x")) == (
        "https://www.google.com/search?q=x")
    assert reply_text(Unhandled) is None


def test_one_session_per_chat():
    first = session_for(1001, "ca")
    assert session_for(1001, "ca") is first
    assert session_for(1002, "ca") is not first


def test_idle_sessions_are_dropped():
    old = session_for(1001, "ca", now=0)
    busy = session_for(1002, "ca", now=0)
    session_for(1002, "ca", now=SESSION_IDLE_SECONDS - 10)

    session_for(1003, "ca", now=SESSION_IDLE_SECONDS + 1)
    assert set(telegram_bot._sessions) == {1002, 1003}
    assert old.generation == 1
    assert session_for(1001, "ca", now=SESSION_IDLE_SECONDS + 2) is not old
    assert session_for(1002, "ca", now=SESSION_IDLE_SECONDS + 3) is busy
