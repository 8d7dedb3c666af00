import json
from pathlib import Path

from pinpage.artifacts import (
    load_page_blocks,
    save_generation_error,
    save_generation_run,
    save_page_blocks,
)
from pinpage.models import ContentBlock
from pinpage.parser import parse_response

RAW = '{"components":[{"type":"heading","content":"Hi"},{"type":"gallery","content":"","images":["a.png"]}]}'


def test_save_generation_run_writes_raw_and_blocks(tmp_path):
    blocks = parse_response(RAW, now_ms=lambda: 7)

    paths = save_generation_run(RAW, blocks, runs_dir=str(tmp_path / "runs"))

    assert Path(paths["raw_path"]).read_text(encoding="utf-8") == RAW
    saved = json.loads(Path(paths["blocks_path"]).read_text(encoding="utf-8"))
    assert [item["id"] for item in saved] == ["ai-heading-7-0", "ai-gallery-7-1"]
    assert saved[1]["style"]["galleryColumns"] == 3
    assert saved[1]["images"] == ["a.png"]


def test_save_generation_error(tmp_path):
    path = save_generation_error("not json", "bad output", "invalid_response", runs_dir=str(tmp_path))

    contents = Path(path).read_text(encoding="utf-8")
    assert contents.startswith("GENERATION_FAILURE\nkind: invalid_response\nerror: bad output")
    assert contents.endswith("---- RAW OUTPUT ----\nnot json")


def test_page_round_trip(tmp_path):
    page = tmp_path / "pages" / "home.json"
    blocks = [
        ContentBlock(id="manual-1", kind="text", content="Hello"),
        *parse_response(RAW, now_ms=lambda: 7),
    ]

    save_page_blocks(page, blocks)

    assert load_page_blocks(page) == blocks


def test_missing_page_is_empty(tmp_path):
    assert load_page_blocks(tmp_path / "nope.json") == []
