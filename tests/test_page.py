from pinpage.models import ButtonAction, ContentBlock
from pinpage.page import ai_block_ids, append_blocks, page_warnings, replace_ai_blocks
from pinpage.parser import parse_response


def _manual(block_id: str, content: str = "Manual") -> ContentBlock:
    return ContentBlock(id=block_id, kind="paragraph", content=content)


def _generated(now: int, *contents: str) -> list[ContentBlock]:
    raw = '{"components": [%s]}' % ",".join(f'{{"type": "heading", "content": "{c}"}}' for c in contents)
    return parse_response(raw, now_ms=lambda: now)


def test_ai_block_ids_only_collects_generated_blocks():
    blocks = [_manual("m1"), *_generated(1, "A", "B")]

    assert ai_block_ids(blocks) == {"ai-heading-1-0", "ai-heading-1-1"}


def test_regenerate_discards_previous_ai_blocks_and_keeps_manual_order():
    old = _generated(1, "Old A", "Old B")
    blocks = [_manual("m1", "first"), old[0], _manual("m2", "second"), old[1], _manual("m3", "third")]
    new = _generated(2, "New")

    result = replace_ai_blocks(blocks, {block.id for block in old}, new)

    assert [block.id for block in result] == ["m1", "m2", "m3", "ai-heading-2-0"]
    assert [block.content for block in result[:3]] == ["first", "second", "third"]
    assert result[:3] == [blocks[0], blocks[2], blocks[4]]


def test_regenerate_without_manual_blocks_yields_only_new_blocks():
    old = _generated(1, "Old")
    new = _generated(2, "New A", "New B")

    assert replace_ai_blocks(old, ai_block_ids(old), new) == new


def test_regenerate_without_previous_ai_blocks_appends():
    manual = [_manual("m1"), _manual("m2")]
    new = _generated(2, "New")

    assert replace_ai_blocks(manual, set(), new) == [*manual, *new]


def test_append_blocks_keeps_previous_generation():
    first = _generated(1, "A")
    second = _generated(2, "B")

    assert [block.id for block in append_blocks(first, second)] == ["ai-heading-1-0", "ai-heading-2-0"]


def test_page_warnings():
    blocks = [
        _manual("dup"),
        _manual("dup"),
        ContentBlock(id="g", kind="gallery", content=""),
        ContentBlock(id="i", kind="image", content=""),
        ContentBlock(id="b1", kind="button", content="Go", action=ButtonAction(type="link")),
        ContentBlock(id="b2", kind="button", content="Boo", action=ButtonAction(type="singleEmoji")),
        ContentBlock(id="h", kind="heading", content="T", action=ButtonAction(type="confetti")),
    ]

    assert page_warnings(blocks) == [
        "duplicate block id: dup",
        "gallery without images: g",
        "image without URL: i",
        "link action without URL: b1",
        "singleEmoji action without emoji: b2",
        "action on non-button block: h",
    ]


def test_page_warnings_clean_page():
    assert page_warnings([_manual("m1"), *_generated(1, "A")]) == []
