"""Ask for missing slots and accept the answers.

resolve(command, session) either asks the clarifying question for the first
missing slot (opening a pending command) or executes the command.

accept(session, text) consumes a follow-up utterance as the pending slot's
value. Values that can't be right for the slot are rejected; depending on the
slot, the pending command survives the rejection (the user can still answer)
or is dropped.
"""

import re

from laia.commands.parse import Executed, NeedsParameter, Unhandled
from laia.commands.phrases import CANCEL_PHRASES, CANCELLED, GENERIC_QUESTION, QUESTIONS, fold

_URL_RE = re.compile(r"^(?:[a-z][a-z0-9+.-]*://)?[\w-]+(?:\.[\w-]+)+(?:[/?#]\S*)?$", re.IGNORECASE)


def _non_blank(value):
    return bool(value.strip())


def _short(max_words):
    def check(value):
        return _non_blank(value) and len(value.split()) <= max_words
    return check


def url_like(value):
    """True if value looks like a web address (scheme optional)."""
    return _URL_RE.match(value.strip()) is not None


# slot -> (validator, keep pending when rejected)
_SLOT_POLICIES = {
    "url": (url_like, True),
    "app": (_short(4), False),
    "tag": (_short(6), False),
}
_DEFAULT_POLICY = (_non_blank, True)


def question_for(command):
    questions = QUESTIONS.get(command.name, GENERIC_QUESTION)
    return questions.get(command.locale, questions["en"])


def is_cancel(text, locale):
    phrases = CANCEL_PHRASES.get(locale, CANCEL_PHRASES["en"])
    t = fold(text).rstrip(".!")
    return any(t == fold(p) for p in phrases)


class ParameterResolver:

    def __init__(self, state, executor):
        self.state = state
        self.executor = executor

    def resolve(self, command, session):
        """NeedsParameter for an incomplete command, else execute it."""
        slot = command.missing_slot
        if slot is not None:
            self.state.open(session, command, slot)
            return NeedsParameter(question_for(command))
        return Executed(self.executor.execute(command))

    def accept(self, session, text, locale):
        """Treat text as the answer to the pending question.

        Returns Executed/NeedsParameter when consumed, or Unhandled when the
        value was rejected and the utterance should go through the rule tables.
        """
        pending = session.pending
        if is_cancel(text, locale):
            self.state.cancel(session)
            return Executed(CANCELLED.get(locale, CANCELLED["en"]))

        valid, keep = _SLOT_POLICIES.get(pending.requested_slot, _DEFAULT_POLICY)
        if not valid(text):
            if not keep:
                self.state.cancel(session)
            return Unhandled

        command = self.state.fill(session, text.strip())
        return self.resolve(command, session)
