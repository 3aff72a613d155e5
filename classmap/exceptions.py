"""Custom exceptions for classmap."""

from __future__ import annotations

from pathlib import Path


class ClassmapError(Exception):
    """Base exception for all classmap errors."""


class RubySyntaxError(ClassmapError):
    """Raised when a source file does not parse cleanly."""

    def __init__(self, file: Path | str, line: int) -> None:
        super().__init__(f"syntax error near line {line}")
        self.file = file
        self.line = line
