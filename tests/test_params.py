import pytest

from laia.commands.executor import Executor
from laia.commands.params import ParameterResolver, is_cancel, question_for
from laia.commands.parse import Command, Executed, NeedsParameter, Unhandled
from laia.commands.state import CommandStateManager
from laia.launcher import MemoryLauncher
from laia.session import Session
from laia.settings import Settings


@pytest.fixture
def launcher():
    return MemoryLauncher(apps=["Spotify"])


@pytest.fixture
def resolver(launcher, tmp_path):
    executor = Executor(launcher, Settings(tmp_path / "settings.json"))
    return ParameterResolver(CommandStateManager(), executor)


def incomplete(name, slot, locale="ca"):
    return Command(name, {}, locale=locale, required=(slot,))


@pytest.mark.parametrize("name, locale, question", [
    ("create_note", "ca", "Què s'ha d'anotar?"),
    ("create_note", "es", "¿Qué hay que apuntar?"),
    ("create_note", "en", "What should I note?"),
    ("open_app", "ca", "Quina aplicació vols obrir?"),
    ("web_search", "en", "What should I search for?"),
    ("play_media", "es", "¿Qué más necesito saber?"),
])
def test_question_for(name, locale, question):
    assert question_for(incomplete(name, "x", locale)) == question


@pytest.mark.parametrize("text, locale", [
    ("cancel·la", "ca"), ("Deixa-ho estar.", "ca"), ("déjalo", "es"),
    ("Never mind", "en"), ("cancel!", "en"),
])
def test_is_cancel(text, locale):
    assert is_cancel(text, locale)


def test_cancel_must_be_whole_utterance():
    assert not is_cancel("cancel·la la reunió", "ca")
    assert not is_cancel("res de res", "ca")


def test_incomplete_command_asks(resolver):
    session = Session()
    outcome = resolver.resolve(incomplete("create_note", "text"), session)
    assert outcome == NeedsParameter("Què s'ha d'anotar?")
    assert session.pending.requested_slot == "text"


def test_complete_command_runs(resolver, launcher):
    outcome = resolver.resolve(Command("open_app", {"app": "Spotify"}, required=("app",)), Session())
    assert outcome == Executed("Obrint Spotify")
    assert launcher.launched == ["Spotify"]


def test_accept_fills_and_runs(resolver, launcher):
    session = Session()
    resolver.resolve(incomplete("create_note", "text"), session)
    assert resolver.accept(session, "  comprar pa ", "ca") == Executed("Nota creada: comprar pa")
    assert launcher.notes[0].text == "comprar pa"
    assert session.pending is None


def test_accept_cancel(resolver, launcher):
    session = Session("en")
    resolver.resolve(incomplete("create_note", "text", "en"), session)
    assert resolver.accept(session, "forget it", "en") == Executed("OK, cancelled.")
    assert session.pending is None
    assert launcher.notes == []


@pytest.mark.parametrize("value", ["vilaweb.cat", "https://example.com/path?q=1", "www.bbc.co.uk"])
def test_url_values_accepted(resolver, launcher, value):
    session = Session()
    resolver.resolve(incomplete("open_url", "url"), session)
    assert isinstance(resolver.accept(session, value, "ca"), Executed)
    assert len(launcher.opened) == 1


def test_bad_url_keeps_question(resolver):
    session = Session()
    resolver.resolve(incomplete("open_url", "url"), session)
    assert resolver.accept(session, "quin temps fa", "ca") is Unhandled
    assert session.pending is not None


def test_long_app_name_drops_question(resolver):
    session = Session()
    resolver.resolve(incomplete("open_app", "app"), session)
    assert resolver.accept(session, "no sé quina vull obrir ara mateix", "ca") is Unhandled
    assert session.pending is None


def test_blank_value_rejected(resolver):
    session = Session()
    resolver.resolve(incomplete("create_note", "text"), session)
    assert resolver.accept(session, "   ", "ca") is Unhandled
    assert session.pending is not None
