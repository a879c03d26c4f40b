"""rgsearch: ripgrep operations for automated clients."""

__version__ = "1.0.0"
