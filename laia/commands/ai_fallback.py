"""Ask the chat model about anything no rule understood.

ask() never raises for network trouble: a timeout, a refused connection, an
API error or an empty completion all come back as Failed, and the
orchestrator turns Failed into a web search.
"""

from dataclasses import dataclass

import anthropic

from laia.commands.future import KNOWLEDGE_CUTOFF_YEAR

AI_MODEL = "claude-sonnet-4-5-20250929"
AI_MAX_TOKENS = 400
AI_TIMEOUT_SECONDS = 20.0

_LANGUAGE_NAMES = {"ca": "Catalan", "es": "Spanish", "en": "English"}

_PREAMBLE = (
    "You are a helpful assistant. Always respond in {language}, regardless of "
    "the language of the user's input. Your knowledge cutoff date is November "
    "{cutoff}. If a user asks about events or information after November "
    "{cutoff}, politely inform them that your knowledge is limited and suggest "
    "they search online for current information."
)


@dataclass(frozen=True)
class Answered:
    text: str


@dataclass(frozen=True)
class Failed:
    reason: str


def system_preamble(locale):
    language = _LANGUAGE_NAMES.get(locale, "Catalan")
    return _PREAMBLE.format(language=language, cutoff=KNOWLEDGE_CUTOFF_YEAR)


def load_api_key():
    """The Anthropic key from laia/ai_credentials.py, or None if not configured."""
    try:
        from laia.ai_credentials import ANTHROPIC_API_KEY
    except ImportError:
        return None
    return ANTHROPIC_API_KEY or None


class AIFallbackClient:

    def __init__(self, api_key=None, model=AI_MODEL, timeout=AI_TIMEOUT_SECONDS, client=None):
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self._client = client

    @classmethod
    def from_credentials(cls, model=None):
        return cls(api_key=load_api_key(), model=model or AI_MODEL)

    @property
    def configured(self):
        return bool(self.api_key) or self._client is not None

    def _get_client(self):
        if self._client is None:
            self._client = anthropic.Anthropic(
                api_key=self.api_key, timeout=self.timeout, max_retries=1)
        return self._client

    def ask(self, transcript, locale):
        """Send the transcript (ending with the new user turn) to the model.

        transcript: [{"role": "user"|"assistant", "content": str}, ...]
        Returns Answered(text) or Failed(reason).
        """
        if not self.configured:
            return Failed("no API key configured")
        try:
            resp = self._get_client().messages.create(
                model=self.model,
                max_tokens=AI_MAX_TOKENS,
                system=system_preamble(locale),
                messages=list(transcript),
            )
        except anthropic.APITimeoutError:
            return Failed("timed out")
        except anthropic.APIConnectionError as e:
            return Failed(f"connection error: {e}")
        except anthropic.APIStatusError as e:
            return Failed(f"API error {e.status_code}")
        except anthropic.APIError as e:
            return Failed(f"API error: {e}")

        text = "".join(
            getattr(block, "text", "") for block in (resp.content or [])).strip()
        if not text:
            return Failed("empty response")
        return Answered(text)
