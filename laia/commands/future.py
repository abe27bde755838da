"""Questions the AI cannot know the answer to.

The model's training data stops at KNOWLEDGE_CUTOFF_YEAR. Anything that names
a later year, or uses a phrase that points past the cutoff ("després de 2023",
"after november 2023"), goes straight to a web search without calling the model.
"""

import re

from laia.commands.parse import DEFAULT_LOCALE
from laia.commands.phrases import FUTURE_INDICATORS, contains_any

KNOWLEDGE_CUTOFF_YEAR = 2023

_YEAR_RE = re.compile(r"(?<!\d)(19\d\d|2\d\d\d)(?!\d)")


def years_in(text):
    """All four-digit years (1900-2999) mentioned in text, in order."""
    return [int(y) for y in _YEAR_RE.findall(text)]


def is_beyond_cutoff(text, locale=DEFAULT_LOCALE, cutoff_year=KNOWLEDGE_CUTOFF_YEAR):
    """True if text asks about something after the model's knowledge cutoff."""
    if any(year > cutoff_year for year in years_in(text)):
        return True
    phrases = FUTURE_INDICATORS.get(locale, FUTURE_INDICATORS[DEFAULT_LOCALE])
    return contains_any(text, phrases) is not None
