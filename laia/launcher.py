"""The launcher side of command execution.

The pipeline decides *what* to do; a Launcher does it. The real launcher owns
the note store, the list store, the installed-app index, the contacts, the
link opener and
text-to-speech. MemoryLauncher keeps everything in memory and is what the
console front-end and the tests use.
"""

import webbrowser
from dataclasses import dataclass, field


class Launcher:
    """Interface for the collaborator that carries out commands."""

    def create_note(self, text):
        raise NotImplementedError

    def append_to_latest_note(self, text):
        """Append to the most recent note. Returns False if there is no note."""
        raise NotImplementedError

    def add_to_list(self, item, list_name=None):
        raise NotImplementedError

    def launch_app(self, name):
        """Launch an installed app by (display) name. Returns False if not found."""
        raise NotImplementedError

    def open_url(self, url):
        """Hand a URL to the link opener. Returns False if it could not be opened."""
        raise NotImplementedError

    def find_tag(self, label):
        """Return the command text stored under a tag label, or None."""
        raise NotImplementedError

    def find_contact(self, name):
        """Return the phone number of a contact by (display) name, or None."""
        raise NotImplementedError

    def speak(self, text, locale):
        raise NotImplementedError


@dataclass
class Note:
    text: str
    lines: list = field(default_factory=list)


class MemoryLauncher(Launcher):

    def __init__(self, apps=(), tags=None, contacts=None, open_browser=False):
        self.notes = []
        self.lists = {}
        self.apps = {a.lower(): a for a in apps}
        self.tags = dict(tags or {})
        self.contacts = dict(contacts or {})
        self.launched = []
        self.opened = []
        self.spoken = []
        self.open_browser = open_browser

    def create_note(self, text):
        note = Note(text)
        self.notes.append(note)
        return note

    def append_to_latest_note(self, text):
        if not self.notes:
            return False
        self.notes[-1].lines.append(text)
        return True

    def add_to_list(self, item, list_name=None):
        self.lists.setdefault(list_name or "default", []).append(item)

    def launch_app(self, name):
        app = self.apps.get(name.lower())
        if app is None:
            return False
        self.launched.append(app)
        return True

    def open_url(self, url):
        self.opened.append(url)
        if self.open_browser:
            return webbrowser.open(url)
        return True

    def find_tag(self, label):
        for name, command in self.tags.items():
            if name.lower() == label.lower():
                return command
        return None

    def find_contact(self, name):
        for contact, number in self.contacts.items():
            if contact.lower() == name.lower():
                return number
        return None

    def speak(self, text, locale):
        self.spoken.append((text, locale))
