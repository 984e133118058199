"""casefile - investigate what a folder is really made of."""

__version__ = "0.1.0"
