"""Rule tables: ordered, per-locale pattern -> Command mappings.

Each tier is a RuleTable. Within a tier and locale the rules are tried in
list order and the first match wins, so two rules that both match the same
text never compete: the earlier one is the answer. Tiers are tried in the
order the orchestrator lists them, and a match in one tier stops the search.
"""

from laia.commands.parse import Command
from laia.commands.template import TemplatePattern


class Rule:
    """Templates that produce one command, plus the slots it cannot run without.

    checks maps a slot name to a predicate; a template whose captured value
    fails it does not match, so "ves a la platja" is not taken for a URL.
    """

    def __init__(self, command, templates, required=(), defaults=None, greedy=False,
                 checks=None):
        self.command = command
        self.templates = [TemplatePattern(t, greedy=greedy) for t in templates]
        self.required = tuple(required)
        self.defaults = defaults or {}
        self.checks = checks or {}

    def match(self, text, locale, tier):
        for tmpl in self.templates:
            slots = tmpl.match(text)
            if slots is not None and self._passes(slots):
                return Command(
                    name=self.command,
                    slots={**self.defaults, **slots},
                    tier=tier,
                    locale=locale,
                    required=self.required,
                )
        return None

    def examples(self):
        """Example phrases spelled out by the templates, for conflict checks."""
        return [e for tmpl in self.templates for e in tmpl.examples()]

    def _passes(self, slots):
        return all(check(slots[name]) for name, check in self.checks.items()
                   if name in slots)

    def __repr__(self):
        return f"Rule({self.command!r}, {len(self.templates)} templates)"


class RuleTable:
    """One tier of rules. Subclasses decide where the rules come from."""

    tier = None

    def rules(self, locale):
        raise NotImplementedError

    def match(self, text, locale):
        """Return the Command of the first matching rule, or None."""
        for rule in self.rules(locale):
            cmd = rule.match(text, locale, self.tier)
            if cmd is not None:
                return cmd
        return None


class StaticRuleTable(RuleTable):
    """Rules fixed at import time, keyed by locale."""

    def __init__(self, tier, rules_by_locale):
        self.tier = tier
        self._rules = {locale: list(rules) for locale, rules in rules_by_locale.items()}

    def rules(self, locale):
        return self._rules.get(locale, [])


class ChainedRuleTable(RuleTable):
    """Several tables consulted in order as if they were one tier."""

    def __init__(self, *tables):
        self.tables = list(tables)

    def match(self, text, locale):
        for table in self.tables:
            cmd = table.match(text, locale)
            if cmd is not None:
                return cmd
        return None


def match_tiers(tiers, text, locale):
    """Try each tier in order; the first tier with a match decides."""
    for table in tiers:
        cmd = table.match(text, locale)
        if cmd is not None:
            return cmd
    return None
