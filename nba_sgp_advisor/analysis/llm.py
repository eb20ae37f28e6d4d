"""Claude-backed text generation for parlay advice."""

import anthropic

from nba_sgp_advisor.config import get_settings
from nba_sgp_advisor.data.errors import ConfigurationError
from nba_sgp_advisor.monitoring import get_logger

log = get_logger()


class AnthropicCompletion:
    """Single-turn completion against the Anthropic Messages API."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        max_tokens: int = 1500,
    ):
        """Initialize the completion client.

        Args:
            api_key: Anthropic API key (defaults to ANTHROPIC_API_KEY setting)
            model: Claude model (defaults to ANTHROPIC_MODEL setting)
            max_tokens: Maximum tokens for the response

        Raises:
            ConfigurationError: If no API key provided or found in environment
        """
        settings = get_settings()
        self.api_key = api_key or settings.anthropic_api_key
        if not self.api_key:
            raise ConfigurationError(
                "ANTHROPIC_API_KEY not found in environment or parameter. "
                "Get your API key from https://console.anthropic.com/settings/keys"
            )
        self.model = model or settings.anthropic_model
        self.max_tokens = max_tokens
        self.client = anthropic.AsyncAnthropic(api_key=self.api_key)

    async def complete(self, prompt: str) -> str:
        """Send one user message and return the text of the reply.

        Raises:
            anthropic.APIError: If the API call fails
        """
        response = await self.client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            messages=[{"role": "user", "content": prompt}],
        )
        text = "".join(block.text for block in response.content if block.type == "text")
        log.info(
            "completion_received",
            model=self.model,
            tokens=response.usage.input_tokens + response.usage.output_tokens,
        )
        return text
