"""steam-cli: command-line access to Steam catalog data."""

from __future__ import annotations

from steam_cli.version import __version__

__all__: list[str] = ["__version__"]
