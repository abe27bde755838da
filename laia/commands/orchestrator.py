"""Command resolution: one utterance in, one outcome out.

The stages run in a fixed order and the first one that handles the utterance
decides the outcome:

    1. pending   - answer to an open clarification question
    2. rules     - enhanced tier, then custom + legacy tier
    3. future    - question past the model's knowledge cutoff -> web search
    4. ai        - ask the model; no key, failure or an unsure answer -> web search

Every stage returns a StageResult: HANDLED with an outcome, UNHANDLED to pass
the utterance on, or ERROR (logged, then treated like UNHANDLED). If nothing
handles it the user still gets a web search, never an error.
"""

import os
from dataclasses import dataclass
from datetime import datetime

from laia.commands import build_tiers
from laia.commands.ai_fallback import AIFallbackClient, Answered
from laia.commands.executor import Executor, search_url
from laia.commands.future import is_beyond_cutoff
from laia.commands.normalize import normalize
from laia.commands.params import ParameterResolver
from laia.commands.parse import (
    VOICE, Deferred, Executed, NeedsParameter, Unhandled, locale_of)
from laia.commands.phrases import UNCERTAINTY_PHRASES, contains_any
from laia.commands.rules import match_tiers
from laia.commands.state import NEVER_EXPIRES, CommandStateManager
from laia.settings import Settings

HANDLED = "handled"
UNHANDLED = "unhandled"
ERROR = "error"

# Request log: lives next to the laia package directory
LOG_PATH = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), "laia.log")


@dataclass
class StageResult:
    status: str
    outcome: object = Unhandled
    detail: str = ""


@dataclass(frozen=True)
class Turn:
    text: str      # what the rules see (normalized if dictated)
    raw: str       # what the user said, for the AI, search and transcript
    locale: str


def _log(msg):
    print(msg, flush=True)


def _describe(outcome):
    if isinstance(outcome, Executed):
        return f"Executed {outcome.response!r}"
    if isinstance(outcome, NeedsParameter):
        return f"NeedsParameter {outcome.question!r}"
    if isinstance(outcome, Deferred):
        return f"Deferred {outcome.search_url}"
    return "Unhandled"


# --- Stages ---

class PendingStage:
    name = "pending"

    def __init__(self, state, params):
        self.state = state
        self.params = params

    def run(self, turn, session):
        if not self.state.has_active(session):
            return StageResult(UNHANDLED)
        slot = session.pending.requested_slot
        outcome = self.params.accept(session, turn.text, turn.locale)
        if outcome is Unhandled:
            return StageResult(UNHANDLED, detail=f"rejected {slot}={turn.text!r}")
        return StageResult(HANDLED, outcome, f"filled {slot}")


class RuleStage:
    name = "rules"

    def __init__(self, tiers, state, params):
        self.tiers = tiers
        self.state = state
        self.params = params

    def run(self, turn, session):
        cmd = match_tiers(self.tiers, turn.text, turn.locale)
        if cmd is None:
            return StageResult(UNHANDLED)
        # A new command always replaces a stale question
        self.state.cancel(session)
        slots = ", ".join(f"{k}={v!r}" for k, v in cmd.slots.items())
        return StageResult(HANDLED, self.params.resolve(cmd, session),
                           f"{cmd.tier}.{cmd.name} {slots}".rstrip())


class FutureKnowledgeStage:
    name = "future"

    def run(self, turn, session):
        if is_beyond_cutoff(turn.raw, turn.locale):
            return StageResult(HANDLED, Deferred(search_url(turn.raw)), "beyond cutoff")
        return StageResult(UNHANDLED)


class AIStage:
    name = "ai"

    def __init__(self, ai):
        self.ai = ai

    def run(self, turn, session):
        fallback = Deferred(search_url(turn.raw))
        if not self.ai.configured:
            return StageResult(HANDLED, fallback, "no API key")

        messages = session.transcript + [{"role": "user", "content": turn.raw}]
        result = self.ai.ask(messages, turn.locale)
        if not isinstance(result, Answered):
            return StageResult(HANDLED, fallback, f"AI failed: {result.reason}")

        phrases = UNCERTAINTY_PHRASES.get(turn.locale, UNCERTAINTY_PHRASES["en"])
        hit = contains_any(result.text, phrases)
        if hit is not None:
            return StageResult(HANDLED, fallback, f"AI unsure ({hit!r})")
        return StageResult(HANDLED, Executed(result.text), "AI answered")


# --- Orchestrator ---

class Orchestrator:

    def __init__(self, launcher, settings=None, ai=None, expiry=NEVER_EXPIRES,
                 tiers=None, log_path=LOG_PATH):
        self.launcher = launcher
        self.settings = settings if settings is not None else Settings()
        self.tiers = tiers if tiers is not None else build_tiers(self.settings)
        self.state = CommandStateManager(expiry)
        self.executor = Executor(launcher, self.settings, match=self.match)
        self.params = ParameterResolver(self.state, self.executor)
        if ai is None:
            ai = AIFallbackClient.from_credentials(self.settings.ai_model)
        self.ai = ai
        self.log_path = log_path
        self.stages = [
            PendingStage(self.state, self.params),
            RuleStage(self.tiers, self.state, self.params),
            FutureKnowledgeStage(),
            AIStage(self.ai),
        ]

    def match(self, text, locale):
        """Rule-table lookup only (no pending state, no AI)."""
        return match_tiers(self.tiers, text, locale)

    def resolve(self, utterance, session, source=None):
        """Resolve one utterance for one session. Calls for a session are serialized.

        Args:
            utterance: the Utterance to resolve.
            session: the conversation it belongs to.
            source: tag for the request log, e.g. "[Telegram:Joe]".

        Returns Executed, NeedsParameter, Deferred, or Unhandled (blank input,
        or the session was left while the request was in flight).
        """
        raw = utterance.text.strip()
        locale = locale_of(utterance.locale)
        text = normalize(raw, locale) if utterance.origin == VOICE else raw
        if not text:
            return Unhandled

        turn = Turn(text=text, raw=raw, locale=locale)
        source = source or f"[{utterance.origin}:{locale}]"

        with session.lock:
            session.turn += 1
            generation = session.generation
            stage_name, result = self._run_stages(turn, session)

            if session.generation != generation:
                self._log_request(source, turn, stage_name, "abandoned", Unhandled)
                return Unhandled

            outcome = result.outcome
            if isinstance(outcome, Executed):
                session.record(raw, outcome.response)
            elif isinstance(outcome, NeedsParameter):
                session.record(raw, outcome.question)

        self._log_request(source, turn, stage_name, result.detail, outcome)

        if (isinstance(outcome, Executed) and utterance.origin == VOICE
                and self.settings.voice_response):
            self.launcher.speak(outcome.response, locale)
        return outcome

    def _run_stages(self, turn, session):
        for stage in self.stages:
            try:
                result = stage.run(turn, session)
            except Exception as e:
                result = StageResult(ERROR, detail=f"{type(e).__name__}: {e}")
            if result.status == HANDLED:
                return stage.name, result
            if result.status == ERROR:
                _log(f"  [{stage.name}] error: {result.detail}")
        return "fallback", StageResult(HANDLED, Deferred(search_url(turn.raw)), "no stage handled it")

    def _log_request(self, source, turn, stage_name, detail, outcome):
        """Append a compact 2-line entry to the log file."""
        if not self.log_path:
            return
        ts = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        text = turn.raw if turn.raw == turn.text else f"{turn.raw}  (as {turn.text!r})"
        line = f"  -> {stage_name}: {_describe(outcome)}"
        if detail:
            line += f"  [{detail}]"
        try:
            with open(self.log_path, "a", encoding="utf-8") as f:
                f.write(f"{ts} {source}  {text}\n{line}\n")
        except OSError:
            pass
