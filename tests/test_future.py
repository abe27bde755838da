import pytest

from laia.commands.future import KNOWLEDGE_CUTOFF_YEAR, is_beyond_cutoff, years_in


def test_years_in():
    assert years_in("del 1999 al 2026") == [1999, 2026]
    assert years_in("truca al 932026123") == []
    assert years_in("a les 5") == []


@pytest.mark.parametrize("text, locale", [
    ("què ha passat el 2026", "ca"),
    ("qui va guanyar el 2024", "ca"),
    ("qué pasó en 2025", "es"),
    ("who won in 2030", "en"),
    ("què ha passat després de 2023", "ca"),
    ("Qué ocurrió DESPUÉS DE 2023", "es"),
    ("what happened after November 2023", "en"),
    ("qué pasó despues del 2023", "es"),
])
def test_beyond_cutoff(text, locale):
    assert is_beyond_cutoff(text, locale)


@pytest.mark.parametrize("text, locale", [
    ("què va passar el 1992", "ca"),
    ("qué pasó en 2023", "es"),
    ("who wrote Hamlet", "en"),
    ("quina és la capital de França", "ca"),
])
def test_within_cutoff(text, locale):
    assert not is_beyond_cutoff(text, locale)


def test_phrases_are_per_locale():
    assert is_beyond_cutoff("after 2023", "en")
    assert not is_beyond_cutoff("after 2023", "ca")


@pytest.mark.parametrize("text, locale", [
    ("what should I cook this week", "en"),
    ("què faig aquest any per Nadal", "ca"),
    ("últimas noticias de mi equipo", "es"),
])
def test_relative_time_is_not_past_cutoff(text, locale):
    assert not is_beyond_cutoff(text, locale)


def test_custom_cutoff():
    assert KNOWLEDGE_CUTOFF_YEAR == 2023
    assert not is_beyond_cutoff("el 2026", "ca", cutoff_year=2030)
    assert is_beyond_cutoff("el 2026", "ca", cutoff_year=2025)
