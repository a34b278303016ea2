"""relcut: cut a release from the base branch of a git repository."""

__version__ = "0.1.0"
