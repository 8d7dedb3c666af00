import os
from collections import Counter
from pathlib import Path
from typing import List, Optional, Sequence

import typer
from dotenv import load_dotenv
from pydantic import ValidationError
from rich import print
from rich.markup import escape

from .artifacts import load_page_blocks, save_generation_error, save_generation_run, save_page_blocks
from .generator import DEFAULT_MODEL, generate_blocks
from .llm import GenerationError, error_guidance
from .logging_config import setup_logging
from .models import CONTENT_KINDS, THEME_PREFERENCES, TONES, ContentBlock, GenerationConfig
from .page import ai_block_ids, append_blocks, page_warnings, replace_ai_blocks
from .parser import parse_response
from .prompts import build_system_prompt, enhance_prompt
from .usage import PRICING, estimate_cost, estimate_tokens, format_cost
from .validation import validate_prompt

DEFAULT_TIMEOUT_SECONDS = 30.0

app = typer.Typer()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    log_level: str = typer.Option("WARNING", "--log-level", help="Log level name."),
    json_logs: bool = typer.Option(False, "--json-logs", help="Emit JSON log lines on stdout."),
):
    """Pinpage CLI entrypoint."""
    setup_logging(level=log_level, json_logs=json_logs)
    if ctx.invoked_subcommand is None:
        print(ctx.get_help())
        raise typer.Exit(code=0)


def _resolve_choice(value: str, choices: Sequence[str], label: str) -> str:
    normalized = value.lower()
    if normalized not in choices:
        print(f"[red]Invalid {label}. Use one of: {', '.join(choices)}.[/red]")
        raise typer.Exit(code=2)
    return normalized


def _resolve_config(
    tone: str,
    theme: str,
    prefer: Optional[List[str]],
    max_blocks: Optional[int],
    no_images: bool,
    no_buttons: bool,
) -> GenerationConfig:
    return GenerationConfig(
        tone=_resolve_choice(tone, TONES, "tone"),
        theme_preference=_resolve_choice(theme, THEME_PREFERENCES, "theme"),
        preferred_kinds=[_resolve_choice(kind, CONTENT_KINDS, "component type") for kind in prefer or []],
        max_components=max_blocks,
        include_images=False if no_images else None,
        include_buttons=False if no_buttons else None,
    )


def _read_api_key() -> str:
    load_dotenv()
    api_key = os.getenv("ANTHROPIC_API_KEY")
    if not api_key:
        print("[red]ANTHROPIC_API_KEY not found in environment.[/red]")
        raise typer.Exit(code=1)
    return api_key


def _read_model() -> str:
    return os.getenv("PINPAGE_MODEL") or DEFAULT_MODEL


def _read_timeout() -> float:
    value = os.getenv("PINPAGE_TIMEOUT")
    if not value:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        return float(value)
    except ValueError:
        print(f"[red]PINPAGE_TIMEOUT must be a number of seconds, got '{value}'.[/red]")
        raise typer.Exit(code=2)


def _read_file(file: Path) -> str:
    if not file.exists():
        print("[red]File not found[/red]")
        raise typer.Exit(code=1)
    return file.read_text(encoding="utf-8")


def _read_page(page: Optional[Path]) -> list[ContentBlock]:
    if page is None:
        return []
    try:
        return load_page_blocks(page)
    except ValidationError as exc:
        print(f"[red]Page file {page} is not a valid block list:[/red] {exc}")
        raise typer.Exit(code=1)


def _handle_generation_error(exc: GenerationError) -> None:
    print(f"[red]{exc.message}[/red]")
    print(error_guidance(exc.kind))
    if exc.raw_text:
        error_path = save_generation_error(exc.raw_text, exc.message, exc.kind, runs_dir="runs")
        print(f"Saved error artifact to [bold]{error_path}[/bold].")
    raise typer.Exit(code=1)


def _print_block_warnings(blocks: Sequence[ContentBlock]) -> None:
    warnings = page_warnings(blocks)
    if not warnings:
        return
    print("\n[yellow][bold]Block warnings[/bold][/yellow]")
    for warning in warnings:
        print(f"[yellow]- {escape(warning)}[/yellow]")


def _print_block_summary(blocks: Sequence[ContentBlock]) -> None:
    kind_counts = Counter(block.kind for block in blocks)

    print("[bold]Generated blocks[/bold]")
    print(f"blocks: {len(blocks)}")
    for kind, count in kind_counts.most_common():
        print(f"- {kind}: {count}")

    print("\n[bold]Content[/bold]")
    for index, block in enumerate(blocks, 1):
        preview = block.content if len(block.content) <= 60 else f"{block.content[:57]}..."
        print(f"{index}. " + escape(f"[{block.kind}] {preview}"))


@app.command()
def prompt(
    text: str,
    tone: str = typer.Option("professional", "--tone", help="professional, casual, creative or minimal."),
    theme: str = typer.Option("auto", "--theme", help="light, dark or auto."),
    prefer: Optional[List[str]] = typer.Option(None, "--prefer", help="Preferred component type (repeatable)."),
    max_blocks: Optional[int] = typer.Option(None, "--max-blocks", min=1, help="Maximum number of blocks."),
    no_images: bool = typer.Option(False, "--no-images", help="Ask the model to avoid images and galleries."),
    no_buttons: bool = typer.Option(False, "--no-buttons", help="Ask the model to avoid buttons."),
    system: bool = typer.Option(False, "--system", help="Also print the system prompt."),
):
    """Print the prompts that would be sent to the model."""
    if not validate_prompt(text):
        print(f"[red]{error_guidance('invalid_prompt')}[/red]")
        raise typer.Exit(code=1)
    config = _resolve_config(tone, theme, prefer, max_blocks, no_images, no_buttons)
    system_prompt = build_system_prompt()
    user_prompt = enhance_prompt(text, config)

    if system:
        print("[bold]System prompt[/bold]")
        print(system_prompt)
        print()
    print("[bold]User prompt[/bold]")
    print(user_prompt)
    print(f"\nEstimated prompt tokens: {estimate_tokens(system_prompt) + estimate_tokens(user_prompt)}")


@app.command()
def parse(
    file: Path,
    save: bool = typer.Option(False, "--save", help="Save the parsed blocks under runs/."),
):
    """Parse a saved model response into content blocks."""
    raw = _read_file(file)
    blocks = parse_response(raw)
    if not blocks:
        print("[yellow]No valid components found in response.[/yellow]")
        raise typer.Exit(code=1)

    _print_block_summary(blocks)
    _print_block_warnings(blocks)
    if save:
        paths = save_generation_run(raw, blocks, runs_dir="runs")
        print(f"\nSaved blocks to [bold]{paths['blocks_path']}[/bold]")


@app.command()
def generate(
    text: str,
    tone: str = typer.Option("professional", "--tone", help="professional, casual, creative or minimal."),
    theme: str = typer.Option("auto", "--theme", help="light, dark or auto."),
    prefer: Optional[List[str]] = typer.Option(None, "--prefer", help="Preferred component type (repeatable)."),
    max_blocks: Optional[int] = typer.Option(None, "--max-blocks", min=1, help="Maximum number of blocks."),
    no_images: bool = typer.Option(False, "--no-images", help="Ask the model to avoid images and galleries."),
    no_buttons: bool = typer.Option(False, "--no-buttons", help="Ask the model to avoid buttons."),
    page: Optional[Path] = typer.Option(None, "--page", help="Page file (JSON block list) to extend."),
    regenerate: bool = typer.Option(
        False,
        "--regenerate",
        help="Replace the page's previously generated blocks instead of appending.",
    ),
):
    """Generate content blocks with the model."""
    if not validate_prompt(text):
        print(f"[red]{error_guidance('invalid_prompt')}[/red]")
        raise typer.Exit(code=1)
    config = _resolve_config(tone, theme, prefer, max_blocks, no_images, no_buttons)
    existing = _read_page(page)
    api_key = _read_api_key()
    model = _read_model()

    try:
        result = generate_blocks(
            text,
            config,
            existing,
            api_key=api_key,
            model=model,
            timeout=_read_timeout(),
        )
    except GenerationError as exc:
        _handle_generation_error(exc)

    paths = save_generation_run(result.raw, result.blocks, runs_dir="runs")
    _print_block_summary(result.blocks)

    usage_line = f"\nTokens used: {result.tokens_used}"
    if model in PRICING:
        usage_line += f" (~{format_cost(estimate_cost(model, result.input_tokens, result.output_tokens))})"
    print(usage_line)
    print(f"Saved raw model output to [bold]{paths['raw_path']}[/bold]")

    if page is not None:
        if regenerate:
            merged = replace_ai_blocks(existing, ai_block_ids(existing), result.blocks)
        else:
            merged = append_blocks(existing, result.blocks)
        save_page_blocks(page, merged)
        _print_block_warnings(merged)
        print(f"Updated page [bold]{page}[/bold] ({len(merged)} blocks)")
    else:
        _print_block_warnings(result.blocks)


if __name__ == "__main__":
    app()
