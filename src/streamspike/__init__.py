"""streamspike — sequential text pipeline runner."""

__version__ = "0.1.0"
