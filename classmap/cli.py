"""CLI entry point for classmap."""

from __future__ import annotations

import enum
import json
import logging
from pathlib import Path
from typing import Annotated

import typer

from classmap.discovery import DEFAULT_EXCLUDES, DEFAULT_SOURCE_DIRS, discover_files
from classmap.exceptions import RubySyntaxError
from classmap.graph import build_graph, rank_namespaces
from classmap.languages import LANGUAGES
from classmap.parallel import _DEFAULT_MAX_FILE_SIZE
from classmap.parsing import parse_file
from classmap.ranking import select_namespaces
from classmap.syntax import Body
from classmap.toon import encode
from classmap.walker import build_analysis


class OutputFormat(str, enum.Enum):
    """Supported output encodings."""

    TOON = "toon"
    TEXT = "text"


def _cache_is_fresh(cache: Path, root: Path, files: list[tuple[Path, str]]) -> bool:
    """Check if cache file exists and is newer than all discovered source files."""
    if not cache.is_file():
        return False
    cache_mtime = cache.stat().st_mtime
    try:
        return all((root / rel).stat().st_mtime < cache_mtime for rel, _ in files)
    except OSError:
        return False


def _cache_header(options: dict[str, object]) -> str:
    """Render the output options as the cache file's first line."""
    return "# classmap " + json.dumps(options, sort_keys=True)


def _read_cache(
    cache: Path, root: Path, files: list[tuple[Path, str]], header: str
) -> str | None:
    """Return cached output if fresh and written with the same options."""
    if not _cache_is_fresh(cache, root, files):
        return None
    first_line, _, output = cache.read_text("utf-8").partition("\n")
    if first_line != header:
        return None
    return output


def _filter_by_size(
    root: Path, files: list[tuple[Path, str]], max_size_bytes: int
) -> list[tuple[Path, str]]:
    """Drop files over the size limit, warning for each one."""
    kept: list[tuple[Path, str]] = []
    for rel_path, lang_name in files:
        try:
            size = (root / rel_path).stat().st_size
        except OSError:
            kept.append((rel_path, lang_name))
            continue
        if size > max_size_bytes:
            typer.echo(
                f"Warning: {rel_path}: skipped (>{max_size_bytes} bytes)", err=True
            )
            continue
        kept.append((rel_path, lang_name))
    return kept


def _parse_files_sequential(
    root: Path, files: list[tuple[Path, str]]
) -> list[tuple[str, Body]]:
    """Parse files sequentially, skipping files that fail to parse."""
    trees: list[tuple[str, Body]] = []
    for rel_path, lang_name in files:
        try:
            tree = parse_file(root / rel_path, LANGUAGES[lang_name])
        except (OSError, UnicodeDecodeError, RubySyntaxError) as exc:
            typer.echo(f"Warning: failed to parse {rel_path}: {exc}", err=True)
            continue
        trees.append((rel_path.as_posix(), tree))
    return trees


app = typer.Typer(
    name="classmap",
    help="Extract a class/module dependency graph from a Ruby project.",
    no_args_is_help=False,
)


@app.command()
def main(
    root: Annotated[
        Path,
        typer.Argument(
            help="Project root directory.",
            exists=True,
            file_okay=False,
            resolve_path=True,
        ),
    ] = Path("."),
    source_dirs: Annotated[
        list[str] | None,
        typer.Option(
            "--source-dir",
            "-s",
            help="Directory under root to scan; repeatable (default: app, lib).",
        ),
    ] = None,
    scan_all: Annotated[
        bool,
        typer.Option("--all", help="Scan the whole root instead of source dirs."),
    ] = False,
    excludes: Annotated[
        list[str] | None,
        typer.Option(
            "--exclude",
            "-x",
            help="Gitignore-style pattern to skip; repeatable (default: *_spec.rb).",
        ),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output encoding."),
    ] = OutputFormat.TOON,
    max_namespaces: Annotated[
        int | None,
        typer.Option(
            "--max-namespaces",
            "-n",
            min=1,
            help="Keep only the top-ranked namespaces.",
        ),
    ] = None,
    cache: Annotated[
        Path | None,
        typer.Option(
            "--cache", help="Cache file; reuse if newer than all source files and written with the same options."
        ),
    ] = None,
    max_file_size: Annotated[
        int,
        typer.Option(
            "--max-file-size",
            min=1,
            help="Skip files larger than this many bytes (default: 1MB).",
        ),
    ] = _DEFAULT_MAX_FILE_SIZE,
    fast: Annotated[
        bool,
        typer.Option("--fast", help="Parse files in parallel."),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log every namespace and reference."),
    ] = False,
) -> None:
    """Analyze a project and print its namespace graph to stdout."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )

    scan_dirs = () if scan_all else tuple(source_dirs or DEFAULT_SOURCE_DIRS)
    ignores = DEFAULT_EXCLUDES if excludes is None else tuple(excludes)
    files = discover_files(root, source_dirs=scan_dirs, extra_ignores=ignores)
    if not files:
        typer.echo("No Ruby files found.", err=True)
        raise typer.Exit(1)

    header = _cache_header(
        {
            "root": str(root),
            "source_dirs": list(scan_dirs),
            "excludes": list(ignores),
            "format": output_format.value,
            "max_namespaces": max_namespaces,
            "max_file_size": max_file_size,
        }
    )
    if cache:
        cached = _read_cache(cache, root, files, header)
        if cached is not None:
            typer.echo(cached, nl=False)
            return

    files = _filter_by_size(root, files, max_file_size)
    if not files:
        typer.echo("No Ruby files found (all exceeded size limit).", err=True)
        raise typer.Exit(1)

    if fast:
        from classmap.parallel import parse_files_parallel

        trees = parse_files_parallel(root, files, max_size_bytes=max_file_size)
    else:
        trees = _parse_files_sequential(root, files)

    if not trees:
        typer.echo("No files could be parsed.", err=True)
        raise typer.Exit(1)

    result = build_analysis(trees)
    ranks = rank_namespaces(build_graph(result))
    result = select_namespaces(result, ranks, max_namespaces=max_namespaces)

    if output_format == OutputFormat.TEXT:
        output = "\n".join(result.summary())
    else:
        output = encode(result, repo_name=root.name, ranks=ranks)

    if cache:
        cache.write_text(f"{header}\n{output}\n", "utf-8")
    typer.echo(output)
