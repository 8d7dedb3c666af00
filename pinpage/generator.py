import logging
import re
from dataclasses import dataclass
from typing import Any, Sequence

import anthropic

from .llm import GenerationError, classify_api_error, extract_text, resolve_client, validate_api_key_format
from .models import ContentBlock, GenerationConfig
from .parser import parse_response
from .prompts import build_system_prompt, enhance_prompt
from .validation import validate_prompt

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-sonnet-4-5"
DEFAULT_MAX_TOKENS = 4000
DEFAULT_TEMPERATURE = 0.7

CODE_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


@dataclass(frozen=True)
class GenerationResult:
    blocks: list[ContentBlock]
    raw: str
    input_tokens: int = 0
    output_tokens: int = 0

    @property
    def tokens_used(self) -> int:
        return self.input_tokens + self.output_tokens


def _strip_code_fence(raw: str) -> str:
    match = CODE_FENCE_RE.match(raw)
    return match.group(1) if match else raw


def _usage(resp) -> tuple[int, int]:
    usage = getattr(resp, "usage", None)
    if usage is None:
        return 0, 0
    return getattr(usage, "input_tokens", 0) or 0, getattr(usage, "output_tokens", 0) or 0


def generate_blocks(
    user_prompt: str,
    config: GenerationConfig,
    existing_blocks: Sequence[ContentBlock] = (),
    *,
    client: Any | None = None,
    api_key: str | None = None,
    model: str = DEFAULT_MODEL,
    max_tokens: int = DEFAULT_MAX_TOKENS,
    timeout: float | None = None,
) -> GenerationResult:
    if not validate_prompt(user_prompt):
        raise GenerationError("invalid_prompt", "Please enter a description of the page you want.")
    if client is None and not validate_api_key_format(api_key):
        raise GenerationError("invalid_key", "Invalid API key format. Please check your Anthropic API key.")

    resolved_client = resolve_client(client=client, api_key=api_key, timeout=timeout)
    prompt = enhance_prompt(user_prompt, config, existing_blocks)

    logger.info("Requesting components from %s", model)
    try:
        resp = resolved_client.messages.create(
            model=model,
            max_tokens=max_tokens,
            temperature=DEFAULT_TEMPERATURE,
            system=build_system_prompt(),
            messages=[{"role": "user", "content": prompt}],
        )
    except anthropic.APIError as exc:
        raise classify_api_error(exc) from exc

    raw = extract_text(resp)
    blocks = parse_response(_strip_code_fence(raw))
    if not blocks:
        raise GenerationError(
            "invalid_response",
            "Received invalid response from AI. Please try rephrasing your prompt.",
            retryable=True,
            raw_text=raw,
        )

    input_tokens, output_tokens = _usage(resp)
    logger.info("Generated %d blocks using %d tokens", len(blocks), input_tokens + output_tokens)
    return GenerationResult(blocks=blocks, raw=raw, input_tokens=input_tokens, output_tokens=output_tokens)
