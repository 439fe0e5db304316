"""Pipeline step functions: outline files and write block JSON"""

import logging
from pathlib import Path

from mdblocks.core.blocks import build_block_records
from mdblocks.core.models import OutlinedDoc, ParseOptions
from mdblocks.core.outline.parser import parse_markdown_blocks
from mdblocks.core.parse import discover_files, parse_frontmatter
from mdblocks.core.utils.slug import slugify


log = logging.getLogger(__name__)


def outline_text(
    text: str,
    path: str,
    options: ParseOptions,
    parser_config: str = 'gfm-like',
    ) -> OutlinedDoc:
    """Outline markdown text that came from path."""
    frontmatter = parse_frontmatter(text).frontmatter
    result = parse_markdown_blocks(text, options)
    slug = frontmatter.get('slug') or slugify(Path(path).stem)
    return OutlinedDoc(
        path=path,
        slug=str(slug),
        frontmatter=frontmatter,
        outline=result,
        blocks=build_block_records(text, result, options=options, parser_config=parser_config),
    )


def outline_file(path: Path, options: ParseOptions, parser_config: str = 'gfm-like') -> OutlinedDoc:
    """Read and outline a single markdown file."""
    return outline_text(path.read_text(encoding='utf-8'), str(path), options, parser_config)


def run_outline(
    path: str,
    output_dir: Path,
    options: ParseOptions,
    parser_config: str = 'gfm-like',
    ) -> list[tuple[Path, Path]]:
    """Outline path (file or directory) and write <slug>.blocks.json files to output_dir.

    Returns (source_path, json_path) pairs.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    results = []
    for p in discover_files(Path(path)):
        try:
            doc = outline_file(p, options, parser_config)
            out_file = output_dir / f"{doc.slug}.blocks.json"
            out_file.write_text(doc.model_dump_json(indent=2), encoding='utf-8')
        except Exception as e:
            raise RuntimeError(f"Failed to outline {p}: {e}") from e
        log.info("Outlined %s: %d blocks -> %s", p, len(doc.outline.blocks), out_file)
        results.append((p, out_file))
    return results
