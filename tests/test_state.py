import pytest

from laia.commands.parse import Command
from laia.commands.state import (
    NEVER_EXPIRES, CommandStateManager, ExpiryPolicy, NoPendingCommand)
from laia.session import Session


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


def note():
    return Command("create_note", required=("text",))


def test_idle_session():
    state = CommandStateManager()
    assert not state.has_active(Session())


def test_open_and_fill():
    state = CommandStateManager()
    session = Session()
    state.open(session, note(), "text")
    assert state.has_active(session)

    cmd = state.fill(session, "comprar llet")
    assert cmd.slots == {"text": "comprar llet"}
    assert cmd.complete
    assert session.pending is None
    assert not state.has_active(session)


def test_fill_without_pending():
    with pytest.raises(NoPendingCommand):
        CommandStateManager().fill(Session(), "comprar llet")


def test_open_replaces_previous():
    state = CommandStateManager()
    session = Session()
    state.open(session, note(), "text")
    state.open(session, Command("open_app", required=("app",)), "app")
    assert session.pending.command.name == "open_app"
    assert state.fill(session, "Spotify").slots == {"app": "Spotify"}
    assert session.pending is None


def test_cancel():
    state = CommandStateManager()
    session = Session()
    state.open(session, note(), "text")
    state.cancel(session)
    assert not state.has_active(session)
    # cancelling an idle session is harmless
    state.cancel(session)


def test_never_expires_by_default():
    clock = FakeClock()
    state = CommandStateManager(NEVER_EXPIRES, clock=clock)
    session = Session()
    state.open(session, note(), "text")
    session.turn += 1000
    clock.now += 10 ** 6
    assert state.has_active(session)


def test_expiry_by_turns():
    state = CommandStateManager(ExpiryPolicy(max_turns=2))
    session = Session()
    session.turn = 5
    state.open(session, note(), "text")
    session.turn = 7
    assert state.has_active(session)
    session.turn = 8
    assert not state.has_active(session)
    assert session.pending is None


def test_expiry_by_time():
    clock = FakeClock()
    state = CommandStateManager(ExpiryPolicy(max_seconds=60), clock=clock)
    session = Session()
    state.open(session, note(), "text")
    clock.now += 60
    assert state.has_active(session)
    clock.now += 1
    assert not state.has_active(session)


def test_session_leave():
    state = CommandStateManager()
    session = Session()
    state.open(session, note(), "text")
    generation = session.generation
    session.leave()
    assert not state.has_active(session)
    assert session.generation == generation + 1


def test_session_record():
    session = Session()
    session.record("apunta llet", "Nota creada: llet")
    assert session.transcript == [
        {"role": "user", "content": "apunta llet"},
        {"role": "assistant", "content": "Nota creada: llet"},
    ]
