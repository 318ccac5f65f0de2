"""lctrack: spaced-repetition tracker for practice problems."""

__version__ = "0.1.0"
