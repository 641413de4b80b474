"""Archive the web pages linked from a tree of Markdown documents."""

__version__ = "0.1.0"
