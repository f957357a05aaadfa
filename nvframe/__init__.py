"""Frame logic for a graphical editor front end: animation, input translation and settings."""

__version__ = "0.1.0"