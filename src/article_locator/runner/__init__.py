"""
CLI runner module.

Provides commands:
- lookup: Resolve a spreadsheet cell value and open the match
- find: Resolve an explicit article/print version pair
- rebuild: Rescan the document root
- status: Index statistics
- macro: Print the spreadsheet double-click macro
- init-config: Write a default config file
"""

from .main import create_cli, main

__all__ = [
    "create_cli",
    "main",
]
