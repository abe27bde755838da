"""Carry out complete commands against the launcher.

execute(command) returns the confirmation text shown (and maybe spoken) to
the user. Failures of the launcher or the weather service come back as a
localized apology, never as an exception; only an unknown command name
raises, since that means the rule tables and this module disagree.
"""

import re
import urllib.parse

from laia.commands import weather

SEARCH_URL = "https://www.google.com/search?q={}"
_VIDEO_URL = "https://www.youtube.com/results?search_query={}"
_MAPS_URL = "https://www.google.com/maps/dir/?api=1&destination={}"
_PHONE_RE = re.compile(r"^\+?\d[\d\s().-]{2,}$")

_RESPONSES = {
    "note_created": {
        "ca": "Nota creada: {text}",
        "es": "Nota creada: {text}",
        "en": "Note created: {text}",
    },
    "list_added": {
        "ca": "He afegit {item} a la llista.",
        "es": "He añadido {item} a la lista.",
        "en": "Added {item} to the list.",
    },
    "list_added_named": {
        "ca": "He afegit {item} a la llista {list}.",
        "es": "He añadido {item} a la lista {list}.",
        "en": "Added {item} to the {list} list.",
    },
    "inserted": {
        "ca": "He inserit \"{text}\" a l'última nota.",
        "es": "He insertado \"{text}\" en la última nota.",
        "en": "Inserted \"{text}\" into the latest note.",
    },
    "no_note": {
        "ca": "No hi ha cap nota on inserir-ho.",
        "es": "No hay ninguna nota donde insertarlo.",
        "en": "There is no note to insert into.",
    },
    "opening": {
        "ca": "Obrint {target}",
        "es": "Abriendo {target}",
        "en": "Opening {target}",
    },
    "app_not_found": {
        "ca": "No he trobat l'aplicació {app}.",
        "es": "No he encontrado la aplicación {app}.",
        "en": "I couldn't find the app {app}.",
    },
    "open_failed": {
        "ca": "No he pogut obrir {target}.",
        "es": "No he podido abrir {target}.",
        "en": "I couldn't open {target}.",
    },
    "searching": {
        "ca": "Cercant {query}",
        "es": "Buscando {query}",
        "en": "Searching for {query}",
    },
    "playing": {
        "ca": "Reproduint {query}",
        "es": "Reproduciendo {query}",
        "en": "Playing {query}",
    },
    "navigating": {
        "ca": "Navegant fins a {destination}",
        "es": "Navegando hasta {destination}",
        "en": "Navigating to {destination}",
    },
    "calling": {
        "ca": "Trucant {contact}",
        "es": "Llamando a {contact}",
        "en": "Calling {contact}",
    },
    "contact_not_found": {
        "ca": "No he trobat el contacte {contact}.",
        "es": "No he encontrado el contacto {contact}.",
        "en": "I couldn't find the contact {contact}.",
    },
    "weather_failed": {
        "ca": "No he pogut obtenir el temps.",
        "es": "No he podido obtener el tiempo.",
        "en": "I couldn't get the weather.",
    },
    "place_not_found": {
        "ca": "No he trobat {place}.",
        "es": "No he encontrado {place}.",
        "en": "I couldn't find {place}.",
    },
    "tag_not_found": {
        "ca": "No he trobat l'etiqueta {tag}.",
        "es": "No he encontrado la etiqueta {tag}.",
        "en": "I couldn't find the tag {tag}.",
    },
    "nothing_to_run": {
        "ca": "{name} no conté cap ordre que pugui executar.",
        "es": "{name} no contiene ninguna orden que pueda ejecutar.",
        "en": "{name} doesn't contain a command I can run.",
    },
}


class UnknownCommand(ValueError):
    pass


def search_url(query):
    """Web-search URL for a query, percent-encoded like encodeURIComponent."""
    return SEARCH_URL.format(urllib.parse.quote(query, safe="~()*!.'"))


def _say(key, locale, **kwargs):
    table = _RESPONSES[key]
    return table.get(locale, table["en"]).format(**kwargs)


def _as_url(target):
    if "://" in target or target.startswith(("tel:", "mailto:")):
        return target
    return "https://" + target.replace(" ", "")


class Executor:

    def __init__(self, launcher, settings, match=None):
        """match(text, locale) -> Command | None, used to run tags and custom text."""
        self.launcher = launcher
        self.settings = settings
        self.match = match

    def execute(self, command):
        handler = getattr(self, "_do_" + command.name, None)
        if handler is None:
            raise UnknownCommand(command.name)
        return handler(command.slots, command.locale)

    # --- Notes and lists ---

    def _do_create_note(self, slots, locale):
        self.launcher.create_note(slots["text"])
        return _say("note_created", locale, text=slots["text"])

    _do_create = _do_create_note

    def _do_add_to_list(self, slots, locale):
        item, list_name = slots["item"], slots.get("list")
        self.launcher.add_to_list(item, list_name)
        if list_name:
            return _say("list_added_named", locale, item=item, list=list_name)
        return _say("list_added", locale, item=item)

    def _do_insert(self, slots, locale):
        if not self.launcher.append_to_latest_note(slots["text"]):
            return _say("no_note", locale)
        return _say("inserted", locale, text=slots["text"])

    # --- Apps and links ---

    def _do_open_app(self, slots, locale):
        app = slots["app"]
        if self.launcher.launch_app(app):
            return _say("opening", locale, target=app)
        return _say("app_not_found", locale, app=app)

    def _do_open_url(self, slots, locale):
        return self._open(_as_url(slots["url"]), slots["url"], "opening", locale, target=slots["url"])

    def _do_web_search(self, slots, locale):
        q = slots["query"]
        return self._open(search_url(q), q, "searching", locale, query=q)

    def _do_play_media(self, slots, locale):
        q = slots["query"]
        url = _VIDEO_URL.format(urllib.parse.quote_plus(q))
        return self._open(url, q, "playing", locale, query=q)

    def _do_navigate(self, slots, locale):
        dest = slots["destination"]
        url = _MAPS_URL.format(urllib.parse.quote(dest, safe=""))
        return self._open(url, dest, "navigating", locale, destination=dest)

    def _do_call(self, slots, locale):
        contact = slots["contact"]
        number = contact if _PHONE_RE.match(contact) else self.launcher.find_contact(contact)
        if number is None:
            return _say("contact_not_found", locale, contact=contact)
        url = "tel:" + re.sub(r"[^\d+]", "", number)
        return self._open(url, contact, "calling", locale, contact=contact)

    def _open(self, url, label, key, locale, **kwargs):
        if self.launcher.open_url(url):
            return _say(key, locale, **kwargs)
        return _say("open_failed", locale, target=label)

    # --- Weather ---

    def _do_weather(self, slots, locale, tomorrow=False):
        place = slots.get("place")
        try:
            return weather.weather_report(
                self.settings.weather_location, locale, place=place, tomorrow=tomorrow)
        except weather.PlaceNotFound:
            return _say("place_not_found", locale, place=place)
        except (OSError, ValueError, KeyError, IndexError, TypeError):
            return _say("weather_failed", locale)

    def _do_forecast(self, slots, locale):
        return self._do_weather(slots, locale, tomorrow=True)

    # --- Tags and custom commands ---

    def _do_run_tag(self, slots, locale):
        tag = slots["tag"]
        text = self.launcher.find_tag(tag)
        if text is None:
            return _say("tag_not_found", locale, tag=tag)
        return self._run_text(text, tag, locale)

    def _do_custom(self, slots, locale):
        action, data = slots["action"], slots["data"]
        if action == "open_app":
            return self._do_open_app({"app": data}, locale)
        if action == "open_url":
            return self._do_open_url({"url": data}, locale)
        if action == "search":
            return self._do_web_search({"query": data}, locale)
        return self._run_text(data, slots["rule"], locale)

    def _run_text(self, text, name, locale):
        """Run stored command text (a tag or custom action). One level deep only."""
        cmd = self.match(text, locale) if self.match else None
        if cmd is None or not cmd.complete or cmd.name in ("run_tag", "custom"):
            return _say("nothing_to_run", locale, name=name)
        return self.execute(cmd)
