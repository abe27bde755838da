"""Template-based pattern matching for rule tables.

Converts patterns like "afegeix $item a la llista [de la compra|]" into
compiled regex, matches against input text, and returns extracted slots.

Syntax:
    [alt1|alt2|alt3]  - matches any of the alternatives (an empty one is allowed)
    $name             - captures text into a named slot (non-greedy)
    literal text      - matches literally (case-insensitive, flexible whitespace)

Literal vowels, n and c also match their accented forms, so "que" matches
"què" and "anade" matches "añade"; dictation and keyboards disagree on accents
far more often than on letters. Apostrophes match both ' and ’.

Examples:
    >>> p = TemplatePattern("[apunta|anota] $text")
    >>> p.match("Apunta comprar llet")
    {'text': 'comprar llet'}
    >>> p.match("què ha passat") is None
    True
"""

import re

# Base letter -> every form it should match
_FOLDS = {
    "a": "aàáâä",
    "e": "eèéêë",
    "i": "iìíîï",
    "o": "oòóôö",
    "u": "uùúûü",
    "n": "nñ",
    "c": "cç",
}
_BASE = {}
for _base, _forms in _FOLDS.items():
    for _ch in _forms:
        _BASE[_ch] = _base

_APOSTROPHES = "'’"


class TemplatePattern:
    """A compiled template pattern that can match text and extract named slots."""

    def __init__(self, template, greedy=False):
        self.template = template
        self._regex, self._group_map = _compile(template, greedy)

    @property
    def slots(self):
        """Names of the slots this template can capture."""
        return set(self._group_map.values())

    def match(self, text):
        """Match text against this pattern. Returns dict of slots or None."""
        m = self._regex.match(text.strip().rstrip("?!.,;:"))
        if m is None:
            return None
        result = {}
        for group_num, slot in self._group_map.items():
            value = m.group(group_num)
            if value is not None:
                result[slot] = value.strip()
        return result

    def examples(self, slot_text="x"):
        """Every phrase the template spells out, with slot_text in each slot."""
        return [" ".join(e.split()) for e in _expand(self.template, slot_text)]

    def __repr__(self):
        return f"TemplatePattern({self.template!r})"


# --- Compilation internals ---

def _literal(ch):
    """Regex for one literal template character."""
    if ch in _APOSTROPHES:
        return "['’]"
    base = _BASE.get(ch.lower())
    if base is not None:
        return "[" + _FOLDS[base] + "]"
    return re.escape(ch)


class _Compiler:
    """Stateful compiler that tracks capturing group numbers."""

    def __init__(self, greedy=False):
        self.greedy = greedy
        self.group_count = 0
        self.group_map = {}  # group_number -> slot name

    def compile_template(self, template):
        """Compile a full template string. Returns (regex_str, group_map)."""
        regex_str = self._compile_fragment(template)
        return '^' + regex_str + '$', self.group_map

    def _compile_fragment(self, fragment):
        parts = []
        i = 0
        s = fragment
        while i < len(s):
            if s[i] == '[':
                depth = 1
                j = i + 1
                while j < len(s) and depth > 0:
                    if s[j] == '[':
                        depth += 1
                    elif s[j] == ']':
                        depth -= 1
                    j += 1
                if depth:
                    raise ValueError(f"unbalanced '[' in template {fragment!r}")
                alts = _split_alternatives(s[i+1:j-1])
                alt_patterns = [self._compile_fragment(alt) for alt in alts]
                parts.append('(?:' + '|'.join(alt_patterns) + ')')
                i = j
            elif s[i] == '$':
                m = re.match(r'\$([a-zA-Z_]\w*)', s[i:])
                if m:
                    self.group_count += 1
                    self.group_map[self.group_count] = m.group(1)
                    capture = '.+' if self.greedy else '.+?'
                    parts.append(f'({capture})')
                    i += m.end()
                else:
                    parts.append(re.escape(s[i]))
                    i += 1
            elif s[i] in ' \t':
                while i < len(s) and s[i] in ' \t':
                    i += 1
                parts.append(r'\s+')
            else:
                parts.append(_literal(s[i]))
                i += 1
        return ''.join(parts)


def _split_alternatives(text):
    """Split on top-level | characters, respecting nested brackets."""
    alts = []
    depth = 0
    current = []
    for ch in text:
        if ch == '[':
            depth += 1
        elif ch == ']':
            depth -= 1
        elif ch == '|' and depth == 0:
            alts.append(''.join(current))
            current = []
            continue
        current.append(ch)
    alts.append(''.join(current))
    return alts


def _compile(template, greedy=False):
    """Compile a template string to a (compiled_regex, group_map) tuple."""
    compiler = _Compiler(greedy)
    pattern_str, group_map = compiler.compile_template(template)
    return re.compile(pattern_str, re.IGNORECASE), group_map


def _expand(fragment, slot_text):
    results = [""]
    i = 0
    s = fragment
    while i < len(s):
        if s[i] == '[':
            depth = 1
            j = i + 1
            while j < len(s) and depth > 0:
                if s[j] == '[':
                    depth += 1
                elif s[j] == ']':
                    depth -= 1
                j += 1
            options = [e for alt in _split_alternatives(s[i+1:j-1])
                       for e in _expand(alt, slot_text)]
            results = [r + o for r in results for o in options]
            i = j
            continue
        m = re.match(r'\$([a-zA-Z_]\w*)', s[i:]) if s[i] == '$' else None
        if m:
            results = [r + slot_text for r in results]
            i += m.end()
        else:
            results = [r + s[i] for r in results]
            i += 1
    return results
