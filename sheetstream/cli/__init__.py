"""
CLI module for sheetstream.
Contains command handlers following Single Responsibility Principle.
"""

from sheetstream.cli.commands import ConvertCommand, FormatsCommand

__all__ = ["ConvertCommand", "FormatsCommand"]
