"""Canonicalize dictated text before it reaches the rule tables.

Only voice-origin utterances go through normalize(); typed text is matched as
the user wrote it. Dictation engines make different mistakes than keyboards:
they split or mishear command verbs ("a punta"), spell out numbers, insert
hesitation sounds, and add sentence punctuation.

normalize() is pure and idempotent: normalize(normalize(x)) == normalize(x).
"""

import re
import unicodedata

from laia.commands.parse import DEFAULT_LOCALE

# Hesitation sounds only; real words are never removed
_FILLERS = {
    "ca": ["eh", "ehm", "hmm", "mmm", "mm", "uh"],
    "es": ["eh", "ehm", "em", "hmm", "mmm", "mm", "uh"],
    "en": ["uh", "uhm", "um", "umm", "er", "erm", "hmm", "mmm", "mm"],
}

# Misheard command verbs, corrected at the start of the utterance only
_HOMOPHONES = {
    "ca": [
        (r"a\s+punt[ae]'?m", "apunta"),
        (r"a\s+punta", "apunta"),
        (r"a\s+notar?", "anota"),
        (r"a\s+fegeix", "afegeix"),
        (r"afageix", "afegeix"),
        (r"afegiex", "afegeix"),
        (r"in\s+sereix", "insereix"),
        (r"cancel[·.•]?la", "cancel·la"),
        (r"cancela", "cancel·la"),
        (r"quin\s+tems", "quin temps"),
    ],
    "es": [
        (r"a\s+punta", "apunta"),
        (r"apuntame", "apunta"),
        (r"a\s+[nñ]ade", "añade"),
        (r"anade", "añade"),
        (r"in\s+serta", "inserta"),
        (r"que\s+tiempo", "qué tiempo"),
    ],
    "en": [
        (r"right\s+down", "write down"),
        (r"ad\b", "add"),
        (r"at(?=\s+\S+\s+to\s+(?:the|my)\s+list)", "add"),
        (r"take\s+a\s+node", "take a note"),
    ],
}

# Spelled-out numbers; words that double as common non-numbers are left out
# ("un"/"una"/"one" are articles, Catalan "nou" also means "new")
_NUMBERS = {
    "ca": {
        "dos": "2", "dues": "2", "tres": "3", "quatre": "4", "cinc": "5",
        "sis": "6", "vuit": "8", "deu": "10", "onze": "11", "dotze": "12",
        "tretze": "13", "catorze": "14", "quinze": "15", "vint": "20",
        "trenta": "30", "quaranta": "40", "cinquanta": "50", "cent": "100",
    },
    "es": {
        "dos": "2", "tres": "3", "cuatro": "4", "cinco": "5", "seis": "6",
        "siete": "7", "ocho": "8", "nueve": "9", "diez": "10", "once": "11",
        "doce": "12", "trece": "13", "catorce": "14", "quince": "15",
        "veinte": "20", "treinta": "30", "cuarenta": "40", "cincuenta": "50",
        "cien": "100",
    },
    "en": {
        "two": "2", "three": "3", "four": "4", "five": "5", "six": "6",
        "seven": "7", "eight": "8", "nine": "9", "ten": "10", "eleven": "11",
        "twelve": "12", "thirteen": "13", "fourteen": "14", "fifteen": "15",
        "twenty": "20", "thirty": "30", "forty": "40", "fifty": "50",
        "hundred": "100",
    },
}

_APOSTROPHE_RE = re.compile(r"[’‘`´]")
_ELA_GEMINADA_RE = re.compile(r"l[.•∙・]l", re.IGNORECASE)
# Dictated addresses ("mail.live.com") keep their dots
_HOSTNAME_RE = re.compile(
    r"://|^www\.|/|\.[^.]*\.|\.(?:com|cat|org|net|es|eu|io|dev|info|edu|gov|co|uk|fr|de|it)$",
    re.IGNORECASE)
_TRAILING_RE = re.compile(r"[\s.,;:!…]+$")
_LEADING_RE = re.compile(r"^[\s.,;:…\-]+")
_SPACE_RE = re.compile(r"\s+")


def _compile_tables():
    tables = {}
    for locale in _FILLERS:
        fillers = re.compile(
            r"(?<![\w'])(?:" + "|".join(map(re.escape, _FILLERS[locale]))
            + r")(?![\w'])[,.]?", re.IGNORECASE)
        homophones = [(re.compile(r"^" + pat + r"(?![\w·])", re.IGNORECASE), repl)
                      for pat, repl in _HOMOPHONES[locale]]
        numbers = re.compile(
            r"(?<![\w'·-])(" + "|".join(map(re.escape, _NUMBERS[locale]))
            + r")(?![\w'·-])", re.IGNORECASE)
        tables[locale] = (fillers, homophones, numbers, _NUMBERS[locale])
    return tables


_TABLES = _compile_tables()


def _repair_ela_geminada(m):
    word = m.group(0)
    if _HOSTNAME_RE.search(word.rstrip(".,;:!?…")):
        return word
    return _ELA_GEMINADA_RE.sub(lambda g: g.group(0)[0] + "·" + g.group(0)[-1], word)


def normalize(text, locale=DEFAULT_LOCALE):
    """Return the canonical form of dictated text for rule matching."""
    fillers, homophones, numbers, number_words = _TABLES.get(locale, _TABLES[DEFAULT_LOCALE])

    t = unicodedata.normalize("NFC", text)
    t = _APOSTROPHE_RE.sub("'", t)
    t = re.sub(r"\S+", _repair_ela_geminada, t)
    t = fillers.sub(" ", t)
    t = _SPACE_RE.sub(" ", t)
    t = _LEADING_RE.sub("", t)
    t = _TRAILING_RE.sub("", t)

    for pat, repl in homophones:
        m = pat.match(t)
        if m:
            t = repl + t[m.end():]
            break

    t = numbers.sub(lambda m: number_words[m.group(1).lower()], t)
    return t
