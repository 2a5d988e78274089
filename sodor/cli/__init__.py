"""
Sodor command-line interface.

Usage:
    sodor routes <module:Class> [...]
    sodor version
"""

from .. import __version__

__cli_name__ = "sodor"
