"""Chat completion wrapper that produces a code review."""

import logging

from openai import OpenAI

from ..config import DEFAULT_MODEL, ConfigurationError, validate_model_string
from .prompts import REVIEW_SYSTEM_PROMPT

logger = logging.getLogger(__name__)

SUPPORTED_PROVIDERS = ("openai",)


class ReviewGenerationError(RuntimeError):
    """The completion service returned no usable review."""


class CodeReviewer:
    """Generates review text from a prepared prompt."""

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        max_tokens: int = 500,
        temperature: float = 0.1,
        client: OpenAI | None = None,
    ):
        """Initialize the reviewer.

        Args:
            api_key: OpenAI API key
            model: Model identifier (e.g., 'openai:gpt-4o-mini')
            max_tokens: Completion token limit
            temperature: Sampling temperature
            client: Preconfigured OpenAI client, mainly for tests

        Raises:
            ConfigurationError: If the model string or provider is not usable
        """
        provider, model_name = validate_model_string(model)
        if provider not in SUPPORTED_PROVIDERS:
            raise ConfigurationError(
                f"Unsupported provider '{provider}'. "
                f"Supported providers: {', '.join(SUPPORTED_PROVIDERS)}"
            )

        self.model_name = model_name
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.client = client or OpenAI(api_key=api_key)

    def review(self, prompt: str) -> str:
        """Request a single review completion.

        Raises:
            ReviewGenerationError: If the response carries no text
        """
        logger.info("Requesting code review from %s", self.model_name)
        response = self.client.chat.completions.create(
            model=self.model_name,
            messages=[
                {"role": "system", "content": REVIEW_SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            max_tokens=self.max_tokens,
            temperature=self.temperature,
        )

        content = response.choices[0].message.content if response.choices else None
        if not content or not content.strip():
            raise ReviewGenerationError("No response from OpenAI")
        return content.strip()
