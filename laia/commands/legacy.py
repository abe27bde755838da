"""Legacy command tier: the launcher's original one-shot shortcuts.

These predate slot filling. Every rule needs its argument in the same
utterance, and a few only recognise a prefix and ignore the rest
("quin temps fa ara mateix" is still a weather request). They are consulted
after the enhanced tier, so anything the enhanced tier also understands never
reaches them; what remains are the infinitive verb forms, media playback, navigation
and phone calls.

The user's custom commands are evaluated in this tier as well, ahead of the
built-in shortcuts (see build_table).
"""

from laia.commands.parse import LEGACY
from laia.commands.rules import ChainedRuleTable, Rule, StaticRuleTable

_CA = [
    Rule("forecast", ["quin temps farà[ $rest|]"], greedy=True),
    Rule("weather", ["quin temps fa[ $rest|]"], greedy=True),
    Rule("open_app", ["[obrir|obre] $app"], required=["app"], greedy=True),
    Rule("web_search", ["[cercar|buscar] $query"], required=["query"], greedy=True),
    Rule("play_media", ["[reprodueix|posa] $query"], required=["query"], greedy=True),
    Rule("navigate", ["[navega fins a|navegar fins a|guia'm fins a|guia'm a|com arribo a] $destination"],
         required=["destination"], greedy=True),
    Rule("call", ["[truca|trucar] [a la |al |a |]$contact"], required=["contact"], greedy=True),
    Rule("create_note", ["[apunta|afegeix] $text"], required=["text"], greedy=True),
]

_ES = [
    Rule("forecast", ["qué tiempo hará[ $rest|]"], greedy=True),
    Rule("weather", ["qué tiempo hace[ $rest|]"], greedy=True),
    Rule("open_app", ["[abrir|abre] $app"], required=["app"], greedy=True),
    Rule("web_search", ["[buscar|busca en google] $query"], required=["query"], greedy=True),
    Rule("play_media", ["[reproduce|pon] $query"], required=["query"], greedy=True),
    Rule("navigate", ["[navega a|navegar a|llévame a|cómo llego a] $destination"],
         required=["destination"], greedy=True),
    Rule("call", ["[llama|llamar] [a la |al |a |]$contact"], required=["contact"], greedy=True),
    Rule("create_note", ["[apunta|añade] $text"], required=["text"], greedy=True),
]

_EN = [
    Rule("forecast", ["forecast[ $rest|]"], greedy=True),
    Rule("weather", ["[weather|what's the weather like][ $rest|]"], greedy=True),
    Rule("open_app", ["[open up|start] $app"], required=["app"], greedy=True),
    Rule("web_search", ["[find|search the web for] $query"], required=["query"], greedy=True),
    Rule("play_media", ["play $query"], required=["query"], greedy=True),
    Rule("navigate", ["[navigate to|directions to|take me to|how do I get to] $destination"],
         required=["destination"], greedy=True),
    Rule("call", ["[call|phone|ring] $contact"], required=["contact"], greedy=True),
    Rule("create_note", ["[note|add] $text"], required=["text"], greedy=True),
]

LEGACY_RULES = {"ca": _CA, "es": _ES, "en": _EN}


def build_table(custom_table=None):
    """The legacy tier, with the user's custom commands (if any) tried first."""
    builtin = StaticRuleTable(LEGACY, LEGACY_RULES)
    if custom_table is None:
        return builtin
    table = ChainedRuleTable(custom_table, builtin)
    table.tier = LEGACY
    return table
