"""Source file discovery with gitignore support."""

from __future__ import annotations

import os
import subprocess
from collections.abc import Sequence
from pathlib import Path

import pathspec

from classmap.languages import language_for_extension

DEFAULT_SOURCE_DIRS: tuple[str, ...] = ("app", "lib")
DEFAULT_EXCLUDES: tuple[str, ...] = ("*_spec.rb",)

SKIP_DIRS: frozenset[str] = frozenset(
    {
        "node_modules",
        ".git",
        ".hg",
        ".svn",
        ".bundle",
        "vendor",
        "coverage",
    }
)


def _git_ls_files(root: Path) -> set[str] | None:
    """Return the set of git-tracked and untracked-but-not-ignored files.

    Uses ``git ls-files --cached --others --exclude-standard`` to respect
    all gitignore files (root, subdirectory, and global).

    Returns:
        Set of repo-relative file paths, or None if git is unavailable
        or the directory is not a git repository.
    """
    if not (root / ".git").exists():
        return None
    try:
        result = subprocess.run(
            ["git", "ls-files", "--cached", "--others", "--exclude-standard"],
            cwd=root,
            capture_output=True,
            text=True,
            timeout=10,
            check=False,
        )
    except (FileNotFoundError, subprocess.TimeoutExpired):
        return None
    if result.returncode != 0:
        return None
    return set(result.stdout.splitlines())


def discover_files(
    root: Path,
    *,
    source_dirs: Sequence[str] | None = DEFAULT_SOURCE_DIRS,
    extra_ignores: Sequence[str] | None = DEFAULT_EXCLUDES,
) -> list[tuple[Path, str]]:
    """Walk the source directories under root for parseable files.

    Args:
        root: Project root directory.
        source_dirs: Root-relative directories to scan. Missing ones are
            skipped; None or empty scans the whole root.
        extra_ignores: Gitignore-style patterns to exclude (test files by
            default).

    Returns:
        List of (relative_path, language_name) tuples, sorted by path.
    """
    git_files = _git_ls_files(root)
    gitignore = _load_gitignore(root) if git_files is None else None

    extra_spec = None
    if extra_ignores:
        extra_spec = pathspec.PathSpec.from_lines("gitignore", extra_ignores)

    results: list[tuple[Path, str]] = []

    for top in _scan_roots(root, source_dirs):
        for dirpath, dirnames, filenames in os.walk(top, followlinks=False):
            # Prune skip dirs and hidden dirs in-place to prevent descent
            dirnames[:] = sorted(
                d for d in dirnames if d not in SKIP_DIRS and not d.startswith(".")
            )

            rel_dir = Path(dirpath).relative_to(root)

            for fname in sorted(filenames):
                if fname.startswith("."):
                    continue

                full_path = Path(dirpath) / fname
                if full_path.is_symlink():
                    continue

                rel = rel_dir / fname

                if git_files is not None:
                    if rel.as_posix() not in git_files:
                        continue
                elif gitignore and gitignore.match_file(rel.as_posix()):
                    continue

                if extra_spec and extra_spec.match_file(rel.as_posix()):
                    continue

                lang = language_for_extension(Path(fname).suffix)
                if lang is None:
                    continue

                results.append((rel, lang.name))

    return sorted(set(results))


def _scan_roots(root: Path, source_dirs: Sequence[str] | None) -> list[Path]:
    """Resolve the directories to walk, dropping any that do not exist."""
    if not source_dirs:
        return [root]
    return [root / d for d in dict.fromkeys(source_dirs) if (root / d).is_dir()]


def _load_gitignore(root: Path) -> pathspec.PathSpec:
    """Load .gitignore from root, returning a PathSpec matcher."""
    gitignore_path = root / ".gitignore"
    if gitignore_path.is_file():
        lines = gitignore_path.read_text(encoding="utf-8").splitlines()
        return pathspec.PathSpec.from_lines("gitignore", lines)
    return pathspec.PathSpec.from_lines("gitignore", [])
