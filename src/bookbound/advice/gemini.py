"""Reading advice from the Gemini text-generation API.

Advice is optional and best-effort: every failure (no API key, network
error, bad response) ends in an empty string, and requests are never
retried. The planner never waits on advice to compute a schedule.
"""

import threading
from concurrent.futures import Future
from typing import Optional, Protocol

import requests
from loguru import logger

from ..config import Config

ADVICE_PLACEHOLDER = "Keep turning pages. Every day you read gets you closer to the end."
ADVICE_THREAD_NAME = "bookbound-advice"

PROMPT_TEMPLATE = (
    'I am reading a book titled "{title}". I have {pages_left} pages left and I plan '
    "to read {pace} pages per day. Can you give me a short, motivating reading tip or "
    "an interesting fact about reading habits? Keep it under 100 words."
)


class AdviceError(Exception):
    """Raised inside the client when advice could not be produced."""

    pass


class AdviceProvider(Protocol):
    """Anything that can produce reading advice for a plan snapshot."""

    def fetch_advice(self, title: str, pages_remaining: int, daily_pace: int) -> str:
        ...


class NullAdviceProvider:
    """Provider used when no advice service is configured."""

    def fetch_advice(self, title: str, pages_remaining: int, daily_pace: int) -> str:
        return ""


class GeminiAdviceClient:
    """Client for the Gemini generateContent endpoint."""

    BASE_URL = "https://generativelanguage.googleapis.com/v1beta"

    def __init__(
        self,
        api_key: Optional[str],
        model: str = "gemini-3-flash-preview",
        timeout: float = 10,
        temperature: float = 0.7,
    ):
        """Initialize client.

        Args:
            api_key: Gemini API key
            model: Model name
            timeout: Request timeout in seconds
            temperature: Sampling temperature
        """
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.temperature = temperature
        self._session = requests.Session()
        self._session.headers.update({"Content-Type": "application/json"})

    def build_prompt(self, title: str, pages_remaining: int, daily_pace: int) -> str:
        """Build the advice prompt for a plan snapshot."""
        return PROMPT_TEMPLATE.format(
            title=title or "Untitled",
            pages_left=pages_remaining,
            pace=daily_pace,
        )

    def _post(self, payload: dict) -> dict:
        """Make POST request with error handling."""
        if not self.api_key:
            raise AdviceError("No Gemini API key configured")

        url = f"{self.BASE_URL}/models/{self.model}:generateContent"
        try:
            response = self._session.post(
                url,
                headers={"x-goog-api-key": self.api_key},
                json=payload,
                timeout=self.timeout,
            )
            response.raise_for_status()
            return response.json()
        except requests.exceptions.Timeout:
            raise AdviceError("Request timed out")
        except requests.exceptions.HTTPError as e:
            raise AdviceError(f"HTTP error: {e.response.status_code}")
        except requests.exceptions.RequestException as e:
            raise AdviceError(f"Request failed: {type(e).__name__}")
        except ValueError:
            raise AdviceError("Response was not valid JSON")

    def _extract_text(self, data: dict) -> str:
        """Pull the generated text out of a generateContent response."""
        try:
            parts = data["candidates"][0]["content"]["parts"]
        except (KeyError, IndexError, TypeError):
            raise AdviceError("Unexpected response shape")

        text = "".join(part.get("text", "") for part in parts if isinstance(part, dict))
        return text.strip()

    def fetch_advice(self, title: str, pages_remaining: int, daily_pace: int) -> str:
        """Get a short motivating tip for the current plan.

        Args:
            title: Book title
            pages_remaining: Pages left to read
            daily_pace: Planned pages per day

        Returns:
            Advice text, or an empty string on any failure
        """
        payload = {
            "contents": [
                {
                    "role": "user",
                    "parts": [{"text": self.build_prompt(title, pages_remaining, daily_pace)}],
                }
            ],
            "generationConfig": {"temperature": self.temperature},
        }

        try:
            return self._extract_text(self._post(payload))
        except AdviceError as e:
            logger.warning("Error fetching reading advice: {}", e)
            return ""


def get_advice_provider(config: Config) -> AdviceProvider:
    """Pick the advice provider for the given configuration."""
    if not config.has_advice_config():
        return NullAdviceProvider()
    return GeminiAdviceClient(
        api_key=config.gemini_api_key,
        model=config.advice_model,
        timeout=config.advice_timeout,
    )


def _safe_fetch(provider: AdviceProvider, title: str, pages_remaining: int, daily_pace: int) -> str:
    try:
        return provider.fetch_advice(title, pages_remaining, daily_pace) or ""
    except Exception as e:
        # Third-party providers may raise anything; advice stays optional.
        logger.warning("Advice provider failed: {}", e)
        return ""


def request_advice(
    provider: AdviceProvider,
    title: str,
    pages_remaining: int,
    daily_pace: int,
) -> "Future[str]":
    """Fetch advice on a background daemon thread.

    The thread never keeps the process alive, so a slow request is
    abandoned when the caller stops waiting and exits.

    Args:
        provider: Advice provider
        title: Book title
        pages_remaining: Pages left to read
        daily_pace: Planned pages per day

    Returns:
        A future resolving to the advice text, or "" on failure
    """
    future: "Future[str]" = Future()

    def run() -> None:
        if future.set_running_or_notify_cancel():
            future.set_result(_safe_fetch(provider, title, pages_remaining, daily_pace))

    threading.Thread(target=run, name=ADVICE_THREAD_NAME, daemon=True).start()
    return future
