import logging
import os
from typing import Optional

import httpx

from api.metrics import LLM_REQUESTS_TOTAL
from llm.errors import LLMError, LLMNotConfiguredError, LLMProviderError
from llm.providers.base import LLMProvider

logger = logging.getLogger(__name__)


def build_provider(name: Optional[str] = None) -> LLMProvider:
    """Instantiate the provider named by ``name`` or ``LLM_PROVIDER``."""
    name = (name or os.getenv("LLM_PROVIDER", "gemini")).strip().lower()

    if name == "gemini":
        from llm.providers.gemini_provider import GeminiProvider
        return GeminiProvider()
    if name == "openai":
        from llm.providers.openai_provider import OpenAIProvider
        return OpenAIProvider()
    if name == "ollama":
        from llm.providers.ollama_provider import OllamaProvider
        return OllamaProvider()
    if name == "mock":
        from llm.providers.mock_provider import MockProvider
        return MockProvider()

    raise LLMNotConfiguredError(f"Unknown LLM provider: {name}")


class LLMClient:
    """Thin wrapper around a provider that normalizes failures.

    Anything that goes wrong below the provider boundary comes out as an
    ``LLMError`` subclass, so callers can tell a failed call from a call
    that produced no tasks.
    """

    def __init__(self, provider: Optional[LLMProvider] = None):
        self._provider = provider

    @property
    def provider(self) -> LLMProvider:
        if self._provider is None:
            self._provider = build_provider()
        return self._provider

    @property
    def provider_name(self) -> str:
        return getattr(self.provider, "name", type(self.provider).__name__)

    def complete(self, user: str, system: str = "") -> str:
        provider = self.provider
        name = self.provider_name
        try:
            text = provider.generate(system=system, user=user)
        except LLMError:
            LLM_REQUESTS_TOTAL.labels(provider=name, status="error").inc()
            raise
        except httpx.HTTPStatusError as e:
            LLM_REQUESTS_TOTAL.labels(provider=name, status="error").inc()
            logger.error("LLM provider %s returned %s", name, e.response.status_code)
            raise LLMProviderError(
                f"{name} request failed: {e.response.status_code} {e.response.reason_phrase}"
            ) from e
        except httpx.HTTPError as e:
            LLM_REQUESTS_TOTAL.labels(provider=name, status="error").inc()
            logger.error("LLM provider %s unreachable: %s", name, e)
            raise LLMProviderError(f"{name} request failed: {e}") from e
        except (KeyError, IndexError, TypeError, ValueError) as e:
            LLM_REQUESTS_TOTAL.labels(provider=name, status="error").inc()
            logger.error("Unexpected response shape from %s: %s", name, e)
            raise LLMProviderError(f"{name} returned an unexpected response") from e

        LLM_REQUESTS_TOTAL.labels(provider=name, status="ok").inc()
        return text or ""
