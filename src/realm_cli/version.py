"""Package version, read by ``--version`` and the packaging metadata."""

__version__: str = "0.1.0"
