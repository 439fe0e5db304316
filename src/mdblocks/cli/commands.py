"""CLI command implementations"""

import json
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from mdblocks.config import Settings, load_config
from mdblocks.core.blocks import build_block_records, display_name, get_line_range, read_block
from mdblocks.core.outline.parser import parse_markdown_blocks
from mdblocks.core.pipeline import run_outline


log = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None, verbose: bool = False) -> Settings:
    """Load config with standard CLI error handling and configure logging."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level)
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%H:%M:%S", force=True)
    return settings


def _read(path: Path) -> str:
    try:
        return path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        _fail(f"Cannot read {path}", e)


PathArg = Annotated[Path, typer.Argument(help="Markdown file to read")]
StartIndex = Annotated[Optional[int], typer.Option("--start-index", help="Number reported for the first line")]
LineKeys = Annotated[Optional[bool], typer.Option("--line-keys/--no-line-keys", help="Key list items by their longest words")]
WordLen = Annotated[Optional[int], typer.Option("--word-len", help="Word count for line-derived list keys")]
Verbose = Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")]


def outline_cmd(
    path: PathArg,
    start_index: StartIndex = None,
    line_keys: LineKeys = None,
    word_len: WordLen = None,
    verbose: Verbose = False,
    ):
    """Print the block outline of a markdown file as JSON."""
    settings = _settings(overrides={
        "start_index": start_index, "line_keys": line_keys, "list_key_word_len": word_len,
    }, verbose=verbose)
    result = parse_markdown_blocks(_read(path), settings.parse_options())
    log.debug("Outlined %s: %d blocks", path, len(result.blocks))
    typer.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))


def blocks_cmd(
    path: PathArg,
    short: Annotated[bool, typer.Option("--short", help="Show short display names instead of keys")] = False,
    line_keys: LineKeys = None,
    verbose: Verbose = False,
    ):
    """List blocks with their line ranges and sizes."""
    settings = _settings(overrides={"line_keys": line_keys}, verbose=verbose)
    records = build_block_records(
        _read(path),
        source_key=path.name if short else '',
        options=settings.parse_options(),
        parser_config=settings.parser_config,
    )
    if not records:
        typer.echo("No blocks found.")
        raise typer.Exit(1)
    for r in records:
        label = display_name(r.key, r.lines, show_full_path=False) if short else r.key
        typer.echo(f"{r.lines[0]:>5}-{r.lines[1]:<5} {r.size:>7}  {label}")


def read_cmd(
    path: PathArg,
    key: Annotated[str, typer.Argument(help="Block key, e.g. '#Heading#{1}'")],
    line_keys: LineKeys = None,
    verbose: Verbose = False,
    ):
    """Print the content of one block."""
    settings = _settings(overrides={"line_keys": line_keys}, verbose=verbose)
    try:
        content = read_block(_read(path), key, settings.parse_options())
    except KeyError:
        _fail(f"Block not found: {key}")
    typer.echo(content)


def tasks_cmd(
    path: PathArg,
    all_tasks: Annotated[bool, typer.Option("--all", help="Include nested incomplete tasks")] = False,
    verbose: Verbose = False,
    ):
    """Print incomplete tasks as 'line: text'; top-level only unless --all."""
    settings = _settings(verbose=verbose)
    text = _read(path)
    options = settings.parse_options()
    incomplete = parse_markdown_blocks(text, options).tasks.incomplete
    lines = (incomplete.all if all_tasks else incomplete.top) if incomplete else []
    if not lines:
        typer.echo("No incomplete tasks.")
        return
    for n in lines:
        typer.echo(f"{n}: {get_line_range(text, n, n, options.start_index).strip()}")


def extract_cmd(
    path: Annotated[str, typer.Argument(help="File or directory to outline")],
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    line_keys: LineKeys = None,
    verbose: Verbose = False,
    ):
    """Recursively outline markdown files into <slug>.blocks.json."""
    settings = _settings(overrides={"output_dir": out, "line_keys": line_keys}, verbose=verbose)
    output_dir = Path(settings.output_dir)
    try:
        results = run_outline(path, output_dir, settings.parse_options(), settings.parser_config)
    except RuntimeError as e:
        _fail(str(e))
    for src, out_file in results:
        typer.echo(f"  {src} -> {out_file}")
    typer.echo(f"Outlined {len(results)} document(s) to {output_dir}/")
