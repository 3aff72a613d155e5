"""Parallel file parsing for the --fast flag."""

from __future__ import annotations

import os
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path

import typer

from classmap.exceptions import RubySyntaxError
from classmap.languages import LANGUAGES
from classmap.parsing import parse_file
from classmap.syntax import Body

_DEFAULT_MAX_FILE_SIZE = 1_000_000  # 1 MB


def _parse_file_worker(
    root: Path,
    rel_path: Path,
    lang_name: str,
    max_size_bytes: int,
) -> tuple[Path, Body | None, str | None]:
    """Parse a single file, returning its tree or a warning message.

    Module-level function required for ProcessPoolExecutor pickling.

    Args:
        root: Project root directory.
        rel_path: Relative path to the file.
        lang_name: Language name key in LANGUAGES.
        max_size_bytes: Skip files larger than this.

    Returns:
        Tuple of (rel_path, tree_or_None, warning_or_None).
    """
    abs_path = root / rel_path
    try:
        size = abs_path.stat().st_size
        if size > max_size_bytes:
            return (rel_path, None, f"skipped (>{max_size_bytes} bytes)")
        tree = parse_file(abs_path, LANGUAGES[lang_name])
    except (OSError, UnicodeDecodeError, RubySyntaxError) as exc:
        return (rel_path, None, str(exc))
    return (rel_path, tree, None)


def parse_files_parallel(
    root: Path,
    files: list[tuple[Path, str]],
    *,
    max_size_bytes: int | None = None,
    max_workers: int | None = None,
) -> list[tuple[str, Body]]:
    """Parse files in parallel using ProcessPoolExecutor.

    Args:
        root: Project root directory.
        files: List of (rel_path, lang_name) tuples from discovery.
        max_size_bytes: Skip files larger than this (default 1MB).
        max_workers: Maximum number of worker processes.

    Returns:
        ``(file, tree)`` pairs for successfully parsed files, sorted by path.
    """
    if max_size_bytes is None:
        max_size_bytes = _DEFAULT_MAX_FILE_SIZE
    if max_workers is None:
        max_workers = max(1, min(os.cpu_count() or 1, len(files)))

    parsed: list[tuple[Path, Body]] = []
    with ProcessPoolExecutor(max_workers=max_workers) as executor:
        futures = {
            executor.submit(
                _parse_file_worker, root, rel_path, lang_name, max_size_bytes
            ): rel_path
            for rel_path, lang_name in files
        }
        for future in as_completed(futures):
            rel_path, tree, warning = future.result()
            if warning or tree is None:
                typer.echo(f"Warning: {rel_path}: {warning}", err=True)
                continue
            parsed.append((rel_path, tree))

    parsed.sort(key=lambda item: item[0])
    return [(rel_path.as_posix(), tree) for rel_path, tree in parsed]
