import json

import pytest

from laia.commands.custom import (
    CustomCommandRule, CustomRuleTable, compile_rules, find_conflicts, validate_pattern)
from laia.settings import DEFAULT_LOCATION, Settings


def test_defaults(tmp_path):
    settings = Settings.load(tmp_path / "missing.json")
    assert settings.language == "ca-ES"
    assert settings.locale == "ca"
    assert settings.voice_response is False
    assert settings.weather_location == DEFAULT_LOCATION
    assert settings.custom_commands == []


def test_save_and_load(tmp_path):
    path = tmp_path / "data" / "settings.json"
    settings = Settings(path)
    settings.language = "es-ES"
    settings.voice_response = True
    settings.add_custom_command("feina", r"\bmode feina\b", "open_app", "Slack")
    settings.save()

    assert not path.with_suffix(".tmp").exists()
    loaded = Settings.load(path)
    assert loaded.locale == "es"
    assert loaded.voice_response is True
    assert loaded.custom_commands == [
        CustomCommandRule("feina", r"\bmode feina\b", "open_app", "Slack", True)]


def test_file_format(tmp_path):
    path = tmp_path / "settings.json"
    settings = Settings(path)
    settings.add_custom_command("diari", "llegir el diari", "open_url", "vilaweb.cat")
    settings.save()
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["customCommands"] == [{
        "name": "diari", "pattern": "llegir el diari", "action": "open_url",
        "actionData": "vilaweb.cat", "enabled": True,
    }]


def test_corrupt_file_gives_defaults(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("{not json")
    settings = Settings.load(path)
    assert settings.language == "ca-ES"


def test_entries_without_pattern_are_dropped(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"customCommands": [
        {"name": "sense patró", "action": "open_app"},
        {"pattern": "hola", "action": "search", "actionData": "hola"},
    ]}))
    settings = Settings.load(path)
    assert [r.name for r in settings.custom_commands] == ["hola"]


@pytest.mark.parametrize("pattern", ["", "   ", "(obre", ".*", "a?"])
def test_invalid_patterns_rejected(tmp_path, pattern):
    settings = Settings(tmp_path / "settings.json")
    with pytest.raises(ValueError):
        settings.add_custom_command("x", pattern, "open_app", "Spotify")
    assert settings.custom_commands == []


def test_unknown_action_rejected(tmp_path):
    settings = Settings(tmp_path / "settings.json")
    with pytest.raises(ValueError):
        settings.add_custom_command("x", "hola", "reboot", "")


def test_validate_pattern():
    assert validate_pattern(r"\bposa música\b") is None
    assert validate_pattern("[") is not None
    assert validate_pattern("x*") == "pattern matches empty text"


def test_update_and_delete(tmp_path):
    settings = Settings(tmp_path / "settings.json")
    settings.add_custom_command("música", "posa música", "open_app", "Spotify")
    settings.update_custom_command("música", action_data="YouTube Music")
    assert settings.custom_commands[0].action_data == "YouTube Music"

    with pytest.raises(ValueError):
        settings.update_custom_command("música", pattern="(")
    with pytest.raises(KeyError):
        settings.update_custom_command("no existeix", enabled=False)

    settings.delete_custom_command("música")
    assert settings.custom_commands == []


def test_broken_rules_are_skipped(capsys):
    rules = [
        CustomCommandRule("trencada", "(obre", "open_app", "Spotify"),
        CustomCommandRule("apagada", "hola", "open_app", "Spotify", enabled=False),
        CustomCommandRule("estranya", "adeu", "reboot", ""),
        CustomCommandRule("bona", "posa música", "open_app", "Spotify"),
    ]
    compiled = compile_rules(rules)
    assert [c.rule.name for c in compiled] == ["bona"]
    out = capsys.readouterr().out
    assert "trencada" in out and "estranya" in out


def test_table_follows_settings(tmp_path):
    settings = Settings(tmp_path / "settings.json")
    table = CustomRuleTable(settings)
    assert table.match("posa música", "ca") is None

    settings.add_custom_command("música", "posa música", "open_app", "Spotify")
    cmd = table.match("ara posa MÚSICA", "en")
    assert cmd.name == "custom"
    assert cmd.tier == "custom"
    assert cmd.locale == "en"
    assert cmd.slots == {"rule": "música", "action": "open_app", "data": "Spotify"}

    settings.update_custom_command("música", enabled=False)
    assert table.match("posa música", "ca") is None


def test_update_rejects_unknown_fields(tmp_path):
    settings = Settings(tmp_path / "settings.json")
    settings.add_custom_command("m", "posa música", "open_app", "Spotify")
    version = settings.version
    with pytest.raises(ValueError):
        settings.update_custom_command("m", actionData="WhatsApp")
    assert settings.custom_commands[0].action_data == "Spotify"
    assert settings.version == version


@pytest.mark.parametrize("pattern, locale, expected", [
    ("obre spotify", "ca", ["open_app"]),
    (r"^obre\s+spotify$", "ca", ["open_app"]),
    (r"\bposa música\b", "ca", []),
    ("open spotify", "en", ["open_app"]),
    ("pren nota", "ca", ["create_note"]),
    ("mode (feina|casa)", "ca", []),
])
def test_find_conflicts(pattern, locale, expected):
    assert find_conflicts(pattern, locale) == expected


def test_find_conflicts_invalid_pattern():
    assert find_conflicts("(obre", "ca") == []


def test_add_reports_conflicts(tmp_path, capsys):
    settings = Settings(tmp_path / "settings.json")
    assert settings.add_custom_command("spotify", "obre spotify", "open_app", "Spotify") == [
        "open_app"]
    assert "shadowed" in capsys.readouterr().out
    # saved all the same
    assert [r.name for r in settings.custom_commands] == ["spotify"]

    assert settings.update_custom_command("spotify", pattern="musica a tope") == []
