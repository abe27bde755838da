"""User settings, persisted as JSON in data/settings.json.

Holds the pieces of launcher configuration the command pipeline reads:
language, whether spoken requests get spoken answers, the default weather
location, the AI model, and the user's custom voice commands.

Every edit bumps `version`, which is how the compiled custom-command table
knows to recompile.
"""

import dataclasses
import json
from pathlib import Path

from laia.commands.custom import (
    ACTIONS, CustomCommandRule, find_conflicts, validate_pattern)
from laia.commands.parse import locale_of

_DATA_DIR = Path(__file__).resolve().parent.parent / "data"
SETTINGS_PATH = _DATA_DIR / "settings.json"

DEFAULT_LOCATION = {"name": "Barcelona", "latitude": 41.3874, "longitude": 2.1686}

_RULE_FIELDS = {f.name for f in dataclasses.fields(CustomCommandRule)}


def _log(msg):
    print(msg, flush=True)


class Settings:

    def __init__(self, path=None):
        self.path = Path(path) if path is not None else SETTINGS_PATH
        self.language = "ca-ES"
        self.voice_response = False
        self.weather_location = dict(DEFAULT_LOCATION)
        self.ai_model = None   # None: use the client's default
        self.custom_commands = []
        self.version = 0

    @property
    def locale(self):
        return locale_of(self.language)

    # --- Persistence ---

    @classmethod
    def load(cls, path=None):
        """Read settings from disk; a missing or unreadable file gives defaults."""
        settings = cls(path)
        settings.reload()
        return settings

    def reload(self):
        if not self.path.exists():
            return
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError):
            return
        self.language = data.get("language", self.language)
        self.voice_response = bool(data.get("voiceResponse", self.voice_response))
        self.weather_location = data.get("weatherLocation", self.weather_location)
        self.ai_model = data.get("aiModel", self.ai_model)
        self.custom_commands = []
        for entry in data.get("customCommands", []):
            try:
                self.custom_commands.append(CustomCommandRule.from_dict(entry))
            except KeyError:
                continue
        self.version += 1

    def save(self):
        """Write settings atomically (temp file, then rename)."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = {
            "language": self.language,
            "voiceResponse": self.voice_response,
            "weatherLocation": self.weather_location,
            "aiModel": self.ai_model,
            "customCommands": [r.to_dict() for r in self.custom_commands],
        }
        tmp = self.path.with_suffix(".tmp")
        tmp.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
        tmp.replace(self.path)

    # --- Custom command editing ---

    def add_custom_command(self, name, pattern, action, action_data, enabled=True):
        """Validate and append a custom command. Raises ValueError if it can't work.

        Returns the built-in commands that understand the same words (see
        find_conflicts); the command is saved anyway, but those utterances
        will never reach it.
        """
        problem = validate_pattern(pattern)
        if problem is not None:
            raise ValueError(f"invalid pattern {pattern!r}: {problem}")
        if action not in ACTIONS:
            raise ValueError(f"unknown action {action!r}")
        rule = CustomCommandRule(name, pattern, action, action_data, enabled)
        self.custom_commands.append(rule)
        self.version += 1
        return self._conflicts(rule)

    def update_custom_command(self, name, **changes):
        """Change fields of a custom command; returns its conflicts like add_custom_command."""
        rule = self._find(name)
        unknown = set(changes) - _RULE_FIELDS
        if unknown:
            raise ValueError(f"unknown custom command field(s): {', '.join(sorted(unknown))}")
        if "pattern" in changes:
            problem = validate_pattern(changes["pattern"])
            if problem is not None:
                raise ValueError(f"invalid pattern {changes['pattern']!r}: {problem}")
        if "action" in changes and changes["action"] not in ACTIONS:
            raise ValueError(f"unknown action {changes['action']!r}")
        for key, value in changes.items():
            setattr(rule, key, value)
        self.version += 1
        return self._conflicts(rule)

    def delete_custom_command(self, name):
        self.custom_commands.remove(self._find(name))
        self.version += 1

    def _conflicts(self, rule):
        conflicts = find_conflicts(rule.pattern, self.locale)
        if conflicts:
            _log(f"Custom command {rule.name!r} is shadowed by: {', '.join(conflicts)}")
        return conflicts

    def _find(self, name):
        for rule in self.custom_commands:
            if rule.name == name:
                return rule
        raise KeyError(name)
