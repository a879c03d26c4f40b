"""Terminal CLI for rgsearch."""
