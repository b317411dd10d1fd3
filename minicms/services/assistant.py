"""Draft text generation through the OpenAI chat completions API."""

import logging
import os

import httpx

from minicms.config import Settings, get_settings
from minicms.exceptions import GenerationFailedError

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = "Generate engaging 200-word blog post on {title}"


class ContentAssistant:
    """Generates a post body from its title. Failures raise GenerationFailedError; no retries."""

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.api_key = self.settings.openai_api_key
        self.base_url = self.settings.openai_base_url.rstrip("/")
        self.model = self.settings.openai_model
        self.timeout = self.settings.openai_timeout_seconds
        self.transport = transport

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def _verify(self) -> str | bool:
        """TLS verification: custom CA bundle, then the opt-out flag, then system CAs."""
        bundle = self.settings.openai_ca_bundle
        if bundle and os.path.exists(bundle):
            return bundle
        if self.settings.openai_disable_ssl_verify:
            logger.warning("SSL verification is disabled. This should only be used in development!")
            return False
        return True

    async def generate(self, title: str) -> str:
        """Return generated body text for a non-empty title."""
        if not self.is_configured:
            raise GenerationFailedError("OpenAI API key is not configured.")

        payload = {
            "model": self.model,
            "messages": [{"role": "user", "content": PROMPT_TEMPLATE.format(title=title)}],
            "temperature": 0.7,
        }

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, verify=self._verify(), transport=self.transport
            ) as client:
                response = await client.post(
                    f"{self.base_url}/chat/completions",
                    headers={"Authorization": f"Bearer {self.api_key}"},
                    json=payload,
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as e:
            logger.error(f"HTTP error calling OpenAI: {e}")
            raise GenerationFailedError(f"Failed to contact OpenAI: {e}") from e
        except ValueError as e:
            logger.error(f"OpenAI returned invalid JSON: {e}")
            raise GenerationFailedError("OpenAI returned no content.") from e

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            content = None

        if not content or not content.strip():
            raise GenerationFailedError("OpenAI returned no content.")

        return content.strip()
