"""rgkit: stateless primitives for running ripgrep."""

__version__ = "1.0.0"
