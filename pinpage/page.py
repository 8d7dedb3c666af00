from collections import Counter
from typing import Collection, Sequence

from .models import ContentBlock
from .parser import is_ai_block_id


def ai_block_ids(blocks: Sequence[ContentBlock]) -> set[str]:
    return {block.id for block in blocks if is_ai_block_id(block.id)}


def replace_ai_blocks(
    blocks: Sequence[ContentBlock],
    previous_ai_ids: Collection[str],
    new_blocks: Sequence[ContentBlock],
) -> list[ContentBlock]:
    """Drop the blocks of an earlier generation and append the new ones.

    Blocks whose id is not in ``previous_ai_ids`` keep their order and values.
    """
    kept = [block for block in blocks if block.id not in previous_ai_ids]
    return [*kept, *new_blocks]


def append_blocks(blocks: Sequence[ContentBlock], new_blocks: Sequence[ContentBlock]) -> list[ContentBlock]:
    return [*blocks, *new_blocks]


def _duplicate_id_warnings(ids: list[str]) -> list[str]:
    counts = Counter(ids)
    return [f"duplicate block id: {block_id}" for block_id, count in counts.items() if count > 1]


def page_warnings(blocks: Sequence[ContentBlock]) -> list[str]:
    warnings = _duplicate_id_warnings([block.id for block in blocks])

    for block in blocks:
        if block.kind == "gallery" and not block.images:
            warnings.append(f"gallery without images: {block.id}")
        if block.kind == "image" and not block.content:
            warnings.append(f"image without URL: {block.id}")
        if block.action is None:
            continue
        if block.kind != "button":
            warnings.append(f"action on non-button block: {block.id}")
        elif block.action.type == "link" and not block.action.value:
            warnings.append(f"link action without URL: {block.id}")
        elif block.action.type == "singleEmoji" and not block.action.emoji:
            warnings.append(f"singleEmoji action without emoji: {block.id}")

    return warnings
