"""FileDock: file manager widget kept in sync with a remote file store."""

__version__ = "0.1.0"
