"""Locale-keyed phrase data used by the pipeline.

Kept as plain data so a new locale or an extra phrase is a one-line change.
All containment checks go through fold() so that case and typographic
apostrophes never decide a match.
"""

import re

# Clarifying questions, by command name
QUESTIONS = {
    "create_note": {
        "ca": "Què s'ha d'anotar?",
        "es": "¿Qué hay que apuntar?",
        "en": "What should I note?",
    },
    "add_to_list": {
        "ca": "Què s'ha d'afegir?",
        "es": "¿Qué hay que añadir?",
        "en": "What should I add?",
    },
    "create": {
        "ca": "Què s'ha de crear?",
        "es": "¿Qué hay que crear?",
        "en": "What should I create?",
    },
    "insert": {
        "ca": "Què s'ha d'inserir?",
        "es": "¿Qué hay que insertar?",
        "en": "What should I insert?",
    },
    "open_app": {
        "ca": "Quina aplicació vols obrir?",
        "es": "¿Qué aplicación quieres abrir?",
        "en": "Which app should I open?",
    },
    "open_url": {
        "ca": "Quina adreça vols obrir?",
        "es": "¿Qué dirección quieres abrir?",
        "en": "Which address should I open?",
    },
    "web_search": {
        "ca": "Què vols cercar?",
        "es": "¿Qué quieres buscar?",
        "en": "What should I search for?",
    },
    "run_tag": {
        "ca": "Quina etiqueta vols executar?",
        "es": "¿Qué etiqueta quieres ejecutar?",
        "en": "Which tag should I run?",
    },
}

GENERIC_QUESTION = {
    "ca": "Què més necessito saber?",
    "es": "¿Qué más necesito saber?",
    "en": "What else do I need to know?",
}

# Whole-utterance replies that abandon a pending question
CANCEL_PHRASES = {
    "ca": ["cancel·la", "cancel·lar", "deixa-ho", "deixa-ho estar", "res", "oblida-ho"],
    "es": ["cancela", "cancelar", "déjalo", "olvídalo", "nada"],
    "en": ["cancel", "never mind", "nevermind", "forget it", "nothing"],
}

CANCELLED = {
    "ca": "D'acord, cancel·lat.",
    "es": "De acuerdo, cancelado.",
    "en": "OK, cancelled.",
}

# A model answer containing any of these is treated as "doesn't know"
UNCERTAINTY_PHRASES = {
    "ca": [
        "no tinc informació", "no puc ajudar", "no sé", "no estic segur",
        "no disposo", "no tinc accés",
    ],
    "es": [
        "no tengo información", "no puedo ayudar", "no sé", "no estoy segur",
        "no dispongo", "no tengo acceso",
    ],
    "en": [
        "i don't have", "i can't", "i don't know", "i'm not sure",
        "i do not have", "i cannot",
    ],
}

# Phrases that place a question after the model's knowledge cutoff; bare
# years are caught separately by future.years_in()
FUTURE_INDICATORS = {
    "ca": [
        "després de novembre de 2023", "després de 2023", "després del 2023",
        "després de novembre", "despres de novembre de 2023", "despres de 2023",
        "despres del 2023",
    ],
    "es": [
        "después de noviembre de 2023", "después de 2023", "después del 2023",
        "despues de noviembre de 2023", "despues de 2023", "despues del 2023",
    ],
    "en": ["after november 2023", "after 2023"],
}

_APOSTROPHES = re.compile(r"[’‘`´]")
_SPACES = re.compile(r"\s+")


def fold(text):
    """Lowercase, straighten apostrophes, collapse whitespace."""
    return _SPACES.sub(" ", _APOSTROPHES.sub("'", text)).strip().casefold()


def contains_any(text, phrases):
    """Return the first phrase contained in text (after folding both), or None."""
    folded = fold(text)
    for phrase in phrases:
        if fold(phrase) in folded:
            return phrase
    return None
