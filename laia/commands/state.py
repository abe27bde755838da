"""Pending-command state machine.

    Idle --(match missing a required slot)--> AwaitingParameter
    AwaitingParameter --(next utterance fills the slot)--> Idle
    AwaitingParameter --(cancel, new command, expiry)--> Idle

A session holds at most one pending command; open() replaces any older one.
"""

import time
from dataclasses import dataclass

from laia.session import PendingCommand


class NoPendingCommand(RuntimeError):
    """fill() was called on a session with nothing pending."""


@dataclass(frozen=True)
class ExpiryPolicy:
    """How long a clarification question stays open. None means forever."""
    max_turns: int = None
    max_seconds: float = None


NEVER_EXPIRES = ExpiryPolicy()


class CommandStateManager:

    def __init__(self, expiry=NEVER_EXPIRES, clock=time.monotonic):
        self.expiry = expiry
        self._clock = clock

    def has_active(self, session):
        """True if the session is waiting for a slot value. Expired entries are dropped."""
        pending = session.pending
        if pending is None:
            return False
        if self._expired(session, pending):
            session.pending = None
            return False
        return True

    def open(self, session, command, slot):
        session.pending = PendingCommand(
            command=command,
            requested_slot=slot,
            opened_at_turn=session.turn,
            opened_at=self._clock(),
        )

    def fill(self, session, value):
        """Consume value as the missing slot. Returns the updated Command and goes Idle."""
        pending = session.pending
        if pending is None:
            raise NoPendingCommand("no pending command to fill")
        session.pending = None
        command = pending.command
        command.slots[pending.requested_slot] = value
        return command

    def cancel(self, session):
        session.pending = None

    def _expired(self, session, pending):
        if (self.expiry.max_turns is not None
                and session.turn - pending.opened_at_turn > self.expiry.max_turns):
            return True
        if (self.expiry.max_seconds is not None
                and self._clock() - pending.opened_at > self.expiry.max_seconds):
            return True
        return False
