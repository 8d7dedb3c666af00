import re
from typing import Any

import anthropic
from anthropic import Anthropic

API_KEY_FORMAT = re.compile(r"^sk-[a-zA-Z0-9\-_]{20,}$")

ERROR_GUIDANCE = {
    "invalid_key": (
        'Make sure you are using a valid Anthropic API key starting with "sk-". '
        "You can create one in the Anthropic console."
    ),
    "rate_limit": (
        "You have made too many requests. Wait 60 seconds before trying again, "
        "or check your account usage limits."
    ),
    "timeout": "The request took too long. Try simplifying your prompt or check your internet connection.",
    "network": "Check your internet connection. If the problem persists, the model service may be experiencing issues.",
    "invalid_response": (
        "The AI returned an unexpected format. Try rephrasing your prompt "
        "to be more specific about what you want."
    ),
    "empty_output": "The AI returned nothing. Try again or rephrase your prompt.",
    "invalid_prompt": "Describe what the page should contain before generating.",
}
DEFAULT_GUIDANCE = "If this problem continues, run again with --log-level DEBUG for more details."


class GenerationError(ValueError):
    def __init__(self, kind: str, message: str, *, retryable: bool = False, raw_text: str = ""):
        super().__init__(f"Generation failure ({kind}): {message}")
        self.kind = kind
        self.message = message
        self.retryable = retryable
        self.raw_text = raw_text


class EmptyModelOutput(GenerationError):
    def __init__(self):
        super().__init__(
            "empty_output",
            "No text content found in model response",
            retryable=True,
        )


def validate_api_key_format(api_key: Any) -> bool:
    if not api_key or not isinstance(api_key, str):
        return False
    return API_KEY_FORMAT.match(api_key.strip()) is not None


def resolve_client(
    client: Any | None = None,
    api_key: str | None = None,
    timeout: float | None = None,
) -> Any:
    if client is not None:
        return client
    if not api_key:
        raise RuntimeError("api_key is required when client is not provided")
    if timeout is None:
        return Anthropic(api_key=api_key)
    return Anthropic(api_key=api_key, timeout=timeout)


def extract_text(resp) -> str:
    parts = []
    for block in resp.content:
        if hasattr(block, "text") and block.text:
            parts.append(block.text)
    raw_text = "".join(parts)
    if not raw_text.strip():
        raise EmptyModelOutput()
    return raw_text.strip()


def classify_api_error(exc: Exception) -> GenerationError:
    """Map a model client exception onto the generation error taxonomy."""
    if isinstance(exc, anthropic.AuthenticationError):
        return GenerationError(
            "invalid_key",
            "Invalid API key. Please check your Anthropic API key and try again.",
        )
    if isinstance(exc, anthropic.RateLimitError):
        return GenerationError(
            "rate_limit",
            "Rate limit exceeded. Please wait a moment and try again.",
            retryable=True,
        )
    if isinstance(exc, anthropic.APITimeoutError):
        return GenerationError("timeout", "Request timed out. Please try again.", retryable=True)
    if isinstance(exc, anthropic.APIConnectionError):
        return GenerationError(
            "network",
            "Network error. Please check your connection and try again.",
            retryable=True,
        )
    if isinstance(exc, anthropic.APIStatusError):
        if exc.status_code >= 500:
            return GenerationError(
                "network",
                "The model service is temporarily unavailable. Please try again later.",
                retryable=True,
            )
        return GenerationError("unknown", f"API error ({exc.status_code}): {exc.message}")
    return GenerationError("unknown", str(exc) or "An unexpected error occurred. Please try again.")


def error_guidance(kind: str) -> str:
    return ERROR_GUIDANCE.get(kind, DEFAULT_GUIDANCE)
