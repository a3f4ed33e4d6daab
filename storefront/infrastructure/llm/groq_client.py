"""Groq LLM client wrapper."""

from typing import Any, Optional

from groq import Groq
from groq import APIConnectionError, APIError, APITimeoutError, RateLimitError

from storefront.application.exceptions import LLMError
from storefront.config.settings import settings
from storefront.config.logging_config import get_logger

logger = get_logger(__name__)


class GroqClient:
    """
    Single-shot text completion against a Groq hosted model.

    No retries are performed: a failed call raises LLMError once and the
    caller decides what the user sees.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        temperature: Optional[float] = None,
        client: Any = None,
    ):
        """
        Initialize Groq client.

        Args:
            api_key: Groq API key; defaults to settings.groq_api_key
            model: Model name; defaults to settings.groq_model
            timeout_seconds: Per-request timeout; defaults to settings.llm_timeout_seconds
            temperature: Sampling temperature; defaults to settings.llm_temperature
            client: Pre-built Groq SDK client (used by tests)

        Raises:
            ValueError: If no API key is configured
        """
        self.model = model or settings.groq_model
        self.temperature = settings.llm_temperature if temperature is None else temperature
        self.timeout_seconds = settings.llm_timeout_seconds if timeout_seconds is None else timeout_seconds

        if client is not None:
            self.client = client
        else:
            api_key = api_key or settings.groq_api_key
            if not api_key:
                raise ValueError("GROQ_API_KEY not found in environment variables. Please check your .env file.")
            self.client = Groq(api_key=api_key, timeout=self.timeout_seconds, max_retries=0)
        logger.info(f"Groq client initialized with model: {self.model}")

    def generate(self, prompt: str) -> str:
        """
        Send one prompt and return the completion text.

        Args:
            prompt: Fully assembled prompt

        Returns:
            Completion text, stripped

        Raises:
            LLMError: On network, timeout, quota, API or empty-response failures
        """
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                temperature=self.temperature,
                messages=[{"role": "user", "content": prompt}],
            )
        except (APIConnectionError, APITimeoutError, RateLimitError) as e:
            logger.warning(f"Groq transient error: {e}")
            raise LLMError(f"Groq request failed: {e}") from e
        except APIError as e:
            logger.error(f"Groq API error: {e}")
            raise LLMError(f"Groq API error: {e}") from e

        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError, TypeError) as e:
            raise LLMError(f"Malformed Groq response: {e}") from e

        if not content or not content.strip():
            raise LLMError("Groq returned an empty completion")
        return content.strip()


def get_groq_client() -> GroqClient:
    """
    Get Groq client instance.

    Returns:
        GroqClient instance
    """
    return GroqClient()
