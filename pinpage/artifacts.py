import json
import os
import secrets
from datetime import datetime, timezone
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Sequence

from pydantic import TypeAdapter

from .models import ContentBlock

_BLOCK_LIST = TypeAdapter(list[ContentBlock])


def make_timestamp() -> str:
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S_%f")
    return f"{timestamp}_{os.getpid()}_{secrets.token_hex(3)}"


def ensure_runs_dir(path: str = "runs") -> None:
    Path(path).mkdir(parents=True, exist_ok=True)


def _atomic_write(path: Path, content: str) -> None:
    with NamedTemporaryFile("w", encoding="utf-8", dir=path.parent, delete=False) as tmp_file:
        tmp_file.write(content)
        tmp_path = Path(tmp_file.name)
    os.replace(tmp_path, path)


def dump_blocks(blocks: Sequence[ContentBlock], *, indent: int | None = None) -> str:
    return json.dumps(
        [block.to_json_dict() for block in blocks],
        indent=indent,
        ensure_ascii=False,
    )


def save_generation_run(raw: str, blocks: Sequence[ContentBlock], runs_dir: str = "runs") -> dict[str, str]:
    ensure_runs_dir(runs_dir)
    ts = make_timestamp()

    raw_path = Path(runs_dir) / f"raw_{ts}.txt"
    blocks_path = Path(runs_dir) / f"blocks_{ts}.json"

    _atomic_write(raw_path, raw)
    _atomic_write(blocks_path, dump_blocks(blocks))

    return {
        "raw_path": str(raw_path),
        "blocks_path": str(blocks_path),
    }


def save_generation_error(raw: str, error: str, kind: str, runs_dir: str = "runs") -> str:
    ensure_runs_dir(runs_dir)
    ts = make_timestamp()
    err_path = Path(runs_dir) / f"generation_error_{ts}.txt"

    contents = (
        f"GENERATION_FAILURE\n"
        f"kind: {kind}\n"
        f"error: {error}\n\n"
        f"---- RAW OUTPUT ----\n{raw}"
    )
    _atomic_write(err_path, contents)
    return str(err_path)


def load_page_blocks(path: Path) -> list[ContentBlock]:
    """Read a page file; a missing file is an empty page."""
    if not path.exists():
        return []
    return _BLOCK_LIST.validate_json(path.read_text(encoding="utf-8"))


def save_page_blocks(path: Path, blocks: Sequence[ContentBlock]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    _atomic_write(path, dump_blocks(blocks, indent=2))
