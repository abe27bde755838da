"""Per-conversation state.

A Session owns the single pending command (if any) and the transcript that is
sent to the AI as context. Sessions share nothing, so every chat window or
Telegram chat gets its own.
"""

import threading
from dataclasses import dataclass


@dataclass
class PendingCommand:
    command: object         # the incomplete Command
    requested_slot: str
    opened_at_turn: int
    opened_at: float        # time.monotonic() when the question was asked


class Session:

    def __init__(self, locale="ca"):
        self.locale = locale
        self.pending = None       # PendingCommand or None
        self.transcript = []      # [{"role": "user"|"assistant", "content": str}, ...]
        self.turn = 0
        self.generation = 0
        # Serializes resolve() for this session
        self.lock = threading.Lock()

    def record(self, user_text, reply):
        """Append one exchange to the transcript."""
        self.transcript.append({"role": "user", "content": user_text})
        self.transcript.append({"role": "assistant", "content": reply})

    def leave(self):
        """The user navigated away: drop pending state and abandon in-flight calls.

        Does not take self.lock, so it can run while resolve() is blocked on
        the AI; resolve() notices the generation change and drops the answer.
        """
        self.pending = None
        self.generation += 1

    def __repr__(self):
        pending = self.pending.command.name if self.pending else None
        return f"Session(locale={self.locale!r}, turn={self.turn}, pending={pending!r})"
