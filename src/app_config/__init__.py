"""Watch a remote configuration source and run hooks when it changes."""

__version__ = "0.2.0"
