"""Enhanced command tier: multi-turn commands with slot filling.

A bare verb ("apunta", "obre") matches a rule without its slot; the resulting
incomplete Command makes the assistant ask for the missing value instead of
guessing.

Handles (ca):
    "apunta comprar llet"          -> create_note text="comprar llet"
    "apunta"                       -> create_note (asks "Què s'ha d'anotar?")
    "afegeix pa a la llista de la compra"
                                   -> add_to_list item="pa" list="compra"
    "crea una nota reunió a les 5" -> create text="reunió a les 5"
    "insereix trucar al metge"     -> insert text="trucar al metge"
    "obre la web vilaweb.cat"      -> open_url url="vilaweb.cat"
    "obre Spotify"                 -> open_app app="Spotify"
    "cerca restaurants a Girona"   -> web_search query=...
    "quin temps fa a Girona"       -> weather place="Girona"
    "quin temps farà demà"         -> forecast
    "executa l'etiqueta feina"     -> run_tag tag="feina"

Order matters: longer forms come before the bare verb, and "obre la web"
before "obre $app".

URL slots only accept address-shaped text, so "ves a la platja" matches no
open_url rule.
"""

from laia.commands.params import url_like
from laia.commands.parse import ENHANCED
from laia.commands.rules import Rule, StaticRuleTable

_CA = [
    Rule("create_note", [
        "[apunta'm|anota'm|apunta|anota] $text",
        "pren nota[ de|] $text",
        "[apunta'm|anota'm|apunta|anota|pren nota]",
    ], required=["text"]),
    Rule("add_to_list", [
        "afegeix $item a la llista",
        "afegeix $item a la llista [de la |de l'|de |]$list",
        "afegeix $item",
        "afegeix",
    ], required=["item"]),
    Rule("create", [
        "crea [una |]nota $text",
        "crea [una |]nota",
        "crea $text",
        "crea",
    ], required=["text"]),
    Rule("insert", [
        "insereix $text",
        "insereix",
    ], required=["text"]),
    Rule("open_url", [
        "[obre la web|obre la pàgina web|obre la pàgina|ves a la web|ves a] $url",
        "[obre la web|obre la pàgina web|obre la pàgina|ves a la web]",
    ], required=["url"], checks={"url": url_like}),
    Rule("open_app", [
        "[obre|obri] [l'aplicació |l'app |]$app",
        "[obre|obri]",
    ], required=["app"]),
    Rule("web_search", [
        "[cerca|busca] $query",
        "[cerca|busca]",
    ], required=["query"]),
    Rule("forecast", [
        "quin temps farà[ demà|][ a $place|]",
        "[quina és la |]previsió del temps[ per a demà|][ a $place|]",
        "plourà[ demà|][ a $place|]",
    ]),
    Rule("weather", [
        "quin temps fa[ avui|][ a $place|]",
        "quina temperatura fa[ avui|][ a $place|]",
        "com està el temps[ avui|][ a $place|]",
    ]),
    Rule("run_tag", [
        "executa [l'etiqueta |l'ordre |]$tag",
        "executa",
    ], required=["tag"]),
]

_ES = [
    Rule("create_note", [
        "[apúntame|apunta|anota] $text",
        "toma nota[ de|] $text",
        "[apúntame|apunta|anota|toma nota]",
    ], required=["text"]),
    Rule("add_to_list", [
        "[añade|agrega] $item a la lista",
        "[añade|agrega] $item a la lista [de la |de |]$list",
        "[añade|agrega] $item",
        "[añade|agrega]",
    ], required=["item"]),
    Rule("create", [
        "crea [una |]nota $text",
        "crea [una |]nota",
        "crea $text",
        "crea",
    ], required=["text"]),
    Rule("insert", [
        "inserta $text",
        "inserta",
    ], required=["text"]),
    Rule("open_url", [
        "[abre la web|abre la página web|abre la página|ve a la web|ve a] $url",
        "[abre la web|abre la página web|abre la página|ve a la web]",
    ], required=["url"], checks={"url": url_like}),
    Rule("open_app", [
        "abre [la aplicación |la app |]$app",
        "abre",
    ], required=["app"]),
    Rule("web_search", [
        "busca $query",
        "busca",
    ], required=["query"]),
    Rule("forecast", [
        "qué tiempo hará[ mañana|][ en $place|]",
        "[cuál es la |]previsión del tiempo[ para mañana|][ en $place|]",
        "lloverá[ mañana|][ en $place|]",
    ]),
    Rule("weather", [
        "qué tiempo hace[ hoy|][ en $place|]",
        "qué temperatura hace[ hoy|][ en $place|]",
        "cómo está el tiempo[ hoy|][ en $place|]",
    ]),
    Rule("run_tag", [
        "ejecuta [la etiqueta |la orden |]$tag",
        "ejecuta",
    ], required=["tag"]),
]

_EN = [
    Rule("create_note", [
        "[take a note|make a note|note down|write down|note][ that|] $text",
        "[take a note|make a note|note down|write down|note]",
    ], required=["text"]),
    Rule("add_to_list", [
        "[add|put] $item [to|on] [the |my |]list",
        "[add|put] $item [to|on] [the |my |]$list list",
        "add $item",
        "add",
    ], required=["item"]),
    Rule("create", [
        "create [a |]note $text",
        "create [a |]note",
        "create $text",
        "create",
    ], required=["text"]),
    Rule("insert", [
        "insert $text",
        "insert",
    ], required=["text"]),
    Rule("open_url", [
        "[open the website|open website|open the page|go to|visit] $url",
        "[open the website|open website|open the page]",
    ], required=["url"], checks={"url": url_like}),
    Rule("open_app", [
        "[open|launch] [the |]$app[ app|]",
        "[open|launch]",
    ], required=["app"]),
    Rule("web_search", [
        "[search for|search|look up|google] $query",
        "[search for|search|look up]",
    ], required=["query"]),
    Rule("forecast", [
        "[what's|what is] the[ weather|] forecast[ for tomorrow|][ in $place|]",
        "what will the weather be[ like|][ tomorrow|][ in $place|]",
        "will it rain[ tomorrow|][ in $place|]",
    ]),
    Rule("weather", [
        "[what's|what is|how's|how is] the weather[ like|][ today|][ in $place|]",
        "[what's|what is] the temperature[ today|][ in $place|]",
    ]),
    Rule("run_tag", [
        "run [the |]tag $tag",
        "run [the |]tag",
    ], required=["tag"]),
]

ENHANCED_RULES = {"ca": _CA, "es": _ES, "en": _EN}


def build_table():
    return StaticRuleTable(ENHANCED, ENHANCED_RULES)
