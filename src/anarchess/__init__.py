"""Rules engine for a two-player chess variant with standard and anarchy modes."""

__version__ = "0.1.0"
