"""Turn a raw model completion into content blocks.

``parse_response`` never raises: malformed JSON or a missing ``components``
array yields an empty list, and elements that fail the component schema are
dropped one by one. Each problem is logged at warning level.
"""

import json
import logging
import time
from typing import Any, Callable

from .models import GALLERY_STYLE_KEYS, BlockStyle, ButtonAction, ContentBlock
from .sanitizer import sanitize_html
from .validation import validate_component

logger = logging.getLogger(__name__)

AI_ID_PREFIX = "ai-"

BASE_STYLE_DEFAULTS: dict[str, Any] = {
    "textAlign": "left",
    "fontSize": "16px",
    "color": "#000000",
    "backgroundColor": "transparent",
    "padding": "8px",
    "margin": "8px 0",
    "width": "100%",
    "borderRadius": "0px",
}
KIND_STYLE_DEFAULTS: dict[str, dict[str, Any]] = {
    "heading": {"fontSize": "32px"},
    "gallery": {"galleryColumns": 3, "galleryGap": "16px"},
}
STYLE_KEYS = frozenset(
    {
        "textAlign",
        "fontSize",
        "color",
        "backgroundColor",
        "padding",
        "margin",
        "width",
        "height",
        "borderRadius",
        "galleryColumns",
        "galleryGap",
    }
)


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


def style_defaults(kind: str) -> dict[str, Any]:
    return {**BASE_STYLE_DEFAULTS, **KIND_STYLE_DEFAULTS.get(kind, {})}


def default_style(kind: str) -> BlockStyle:
    return BlockStyle.model_validate(style_defaults(kind))


def merge_style(kind: str, raw_style: dict[str, Any] | None) -> BlockStyle:
    """Back-fill absent style fields with the defaults for ``kind``.

    A field is present when its key exists with a non-null value; present
    values are kept as given. Gallery-only fields are dropped for other kinds.
    """
    overrides = {
        key: value
        for key, value in (raw_style or {}).items()
        if key in STYLE_KEYS and value is not None
    }
    if kind != "gallery":
        overrides = {key: value for key, value in overrides.items() if key not in GALLERY_STYLE_KEYS}
    return BlockStyle.model_validate({**style_defaults(kind), **overrides})


def make_block_id(kind: str, timestamp_ms: int, index: int) -> str:
    return f"{AI_ID_PREFIX}{kind}-{timestamp_ms}-{index}"


def is_ai_block_id(block_id: str) -> bool:
    return block_id.startswith(AI_ID_PREFIX)


def _build_block(raw: dict[str, Any], index: int, timestamp_ms: int) -> ContentBlock | None:
    component = validate_component(raw)
    if component is None:
        logger.warning("Invalid component at index %d: %r", index, raw)
        return None

    content = sanitize_html(component.content) if component.type == "html" else component.content
    action = raw.get("action")
    return ContentBlock(
        id=make_block_id(component.type, timestamp_ms, index),
        kind=component.type,
        content=content,
        style=merge_style(component.type, raw.get("style")),
        action=ButtonAction.model_validate(action) if action is not None else None,
        images=raw.get("images"),
    )


def parse_response(
    response_content: str,
    *,
    now_ms: Callable[[], int] | None = None,
) -> list[ContentBlock]:
    try:
        parsed = json.loads(response_content)
    except (TypeError, ValueError, RecursionError) as exc:
        logger.warning("Failed to parse model response as JSON: %s", exc)
        return []

    components = parsed.get("components") if isinstance(parsed, dict) else None
    if not isinstance(components, list):
        logger.warning("Model response is missing a components array")
        return []

    timestamp_ms = (now_ms or _now_ms)()
    blocks: list[ContentBlock] = []
    for index, raw in enumerate(components):
        block = _build_block(raw, index, timestamp_ms)
        if block is not None:
            blocks.append(block)

    logger.debug("Parsed %d of %d components", len(blocks), len(components))
    return blocks
