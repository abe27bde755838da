"""Value objects passed through the command pipeline.

A rule match produces a Command (possibly missing a slot). The orchestrator
turns each utterance into exactly one outcome: Executed, NeedsParameter,
Deferred or Unhandled.
"""

from dataclasses import dataclass, field

VOICE = "voice"
TYPED = "typed"

LOCALES = ("ca", "es", "en")
DEFAULT_LOCALE = "ca"

ENHANCED = "enhanced"
LEGACY = "legacy"
CUSTOM = "custom"


def locale_of(tag):
    """Map a language tag like 'ca-ES' or 'en_US' to one of LOCALES."""
    if not tag:
        return DEFAULT_LOCALE
    short = tag.replace("_", "-").split("-")[0].lower()
    return short if short in LOCALES else DEFAULT_LOCALE


@dataclass(frozen=True)
class Utterance:
    text: str
    origin: str = TYPED     # VOICE or TYPED
    locale: str = DEFAULT_LOCALE


@dataclass
class Command:
    name: str               # e.g. "create_note", "open_app", "weather"
    slots: dict = field(default_factory=dict)
    tier: str = ENHANCED    # ENHANCED, LEGACY or CUSTOM
    locale: str = DEFAULT_LOCALE
    required: tuple = ()    # slot names that must be filled before execution

    @property
    def missing_slot(self):
        for name in self.required:
            if not self.slots.get(name):
                return name
        return None

    @property
    def complete(self):
        return self.missing_slot is None


# --- Outcomes ---

@dataclass(frozen=True)
class Executed:
    response: str


@dataclass(frozen=True)
class NeedsParameter:
    question: str


@dataclass(frozen=True)
class Deferred:
    search_url: str


@dataclass(frozen=True)
class _Unhandled:
    def __repr__(self):
        return "Unhandled"


Unhandled = _Unhandled()
