"""Command-line Minecraft launcher: resolve, download and start a game version."""

__version__ = "0.1.0"
