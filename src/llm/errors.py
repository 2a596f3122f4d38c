class LLMError(Exception):
    """Base class for failures talking to a text-generation provider."""


class LLMNotConfiguredError(LLMError):
    """The provider cannot be used (missing API key, unknown provider name)."""


class LLMProviderError(LLMError):
    """The provider was reached but the call failed or returned garbage."""
