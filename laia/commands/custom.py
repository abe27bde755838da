"""User-authored voice commands.

Each custom command is a regular expression searched (case-insensitively)
anywhere in the utterance, plus an action:

    open_app  -> launch the app named by action_data
    open_url  -> open action_data as a URL
    search    -> web search for action_data
    custom    -> run action_data as if the user had said it

Patterns are validated when the user saves them (validate_pattern) and
compiled once per settings version; a pattern that still fails to compile is
skipped with a log line and the rest of the table keeps working.
"""

import re
from dataclasses import dataclass

from laia.commands import enhanced
from laia.commands.parse import CUSTOM, Command
from laia.commands.rules import RuleTable

ACTIONS = ("open_app", "open_url", "search", "custom")


@dataclass
class CustomCommandRule:
    name: str
    pattern: str
    action: str = "open_url"
    action_data: str = ""
    enabled: bool = True

    @classmethod
    def from_dict(cls, d):
        return cls(
            name=d.get("name", d.get("pattern", "")),
            pattern=d["pattern"],
            action=d.get("action", "open_url"),
            action_data=d.get("actionData", d.get("action_data", "")),
            enabled=d.get("enabled", True),
        )

    def to_dict(self):
        return {
            "name": self.name,
            "pattern": self.pattern,
            "action": self.action,
            "actionData": self.action_data,
            "enabled": self.enabled,
        }


def validate_pattern(pattern):
    """Return None if pattern is usable, else a short description of the problem."""
    if not pattern or not pattern.strip():
        return "empty pattern"
    try:
        compiled = re.compile(pattern, re.IGNORECASE)
    except re.error as e:
        return str(e)
    if compiled.search(""):
        return "pattern matches empty text"
    return None


_REGEX_ANCHORS_RE = re.compile(r"\\[bBAZ]|[\^$]|\(\?[a-zA-Z]+\)")
_REGEX_SYNTAX = set("[](){}|*+?.")


def _plain_text(pattern):
    """The phrase a simple pattern spells, or "" if it uses real regex syntax."""
    t = _REGEX_ANCHORS_RE.sub("", pattern)
    t = re.sub(r"\\s[+*]?", " ", t)
    if _REGEX_SYNTAX & set(re.sub(r"\\.", "", t)):
        return ""
    t = re.sub(r"\\(.)", r"\1", t)
    return " ".join(t.split())


def find_conflicts(pattern, locale, tables=None):
    """Built-in commands that would answer before this custom pattern could.

    Custom commands run after the enhanced tier, so an enhanced rule that
    understands the same words shadows the custom command. Checked both
    ways: each rule against the pattern read as a phrase, and the pattern
    against the phrases each rule spells out. Returns command names in rule
    order ([] for an unusable pattern).
    """
    if validate_pattern(pattern) is not None:
        return []
    regex = re.compile(pattern, re.IGNORECASE)
    phrase = _plain_text(pattern)
    if tables is None:
        tables = [enhanced.build_table()]

    conflicts = []
    for table in tables:
        for rule in table.rules(locale):
            if rule.command in conflicts:
                continue
            if ((phrase and rule.match(phrase, locale, table.tier) is not None)
                    or any(regex.search(e) for e in rule.examples())):
                conflicts.append(rule.command)
    return conflicts


def _log(msg):
    print(msg, flush=True)


class _CompiledRule:

    def __init__(self, rule, regex):
        self.rule = rule
        self.regex = regex

    def match(self, text, locale, tier):
        if self.regex.search(text) is None:
            return None
        return Command(
            name="custom",
            slots={
                "rule": self.rule.name,
                "action": self.rule.action,
                "data": self.rule.action_data,
            },
            tier=tier,
            locale=locale,
        )


def compile_rules(rules):
    """Compile enabled rules in order, skipping (and logging) broken ones."""
    compiled = []
    for rule in rules:
        if not rule.enabled:
            continue
        problem = validate_pattern(rule.pattern)
        if problem is None and rule.action not in ACTIONS:
            problem = f"unknown action {rule.action!r}"
        if problem is not None:
            _log(f"Skipping custom command {rule.name!r}: {problem}")
            continue
        compiled.append(_CompiledRule(rule, re.compile(rule.pattern, re.IGNORECASE)))
    return compiled


class CustomRuleTable(RuleTable):
    """Custom commands from Settings, recompiled whenever the settings change.

    Custom commands are not tied to a language; the same rules apply in
    every locale.
    """

    tier = CUSTOM

    def __init__(self, settings):
        self.settings = settings
        self._compiled = []
        self._version = None

    def rules(self, locale):
        if self._version != self.settings.version:
            self._compiled = compile_rules(self.settings.custom_commands)
            self._version = self.settings.version
        return self._compiled
