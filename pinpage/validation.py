from typing import Any

from pydantic import ValidationError

from .models import RawComponent


def validate_prompt(prompt: Any) -> bool:
    if not isinstance(prompt, str):
        return False
    return len(prompt.replace("\ufeff", "").strip()) > 0


def validate_component(raw: Any) -> RawComponent | None:
    """Return the narrowed component, or None when ``raw`` fails the schema."""
    if not isinstance(raw, dict):
        return None
    try:
        return RawComponent.model_validate(raw)
    except ValidationError:
        return None


def is_valid_component(raw: Any) -> bool:
    return validate_component(raw) is not None
