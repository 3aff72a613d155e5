"""classmap: class/module dependency graphs for Ruby projects."""

__version__ = "0.1.0"
