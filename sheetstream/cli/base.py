"""
Base command interface following Interface Segregation Principle.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
import argparse
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sheetstream.utils.config import ConfigLoader


class BaseCommand(ABC):
    """
    Abstract base class for CLI commands.

    Subclasses set `name` and `help` and add their own arguments in
    `configure`; `register` wires the subparser back to the command class.
    """

    name: str = ""
    help: str = ""

    def __init__(self, config: ConfigLoader) -> None:
        self._config = config

    @abstractmethod
    def execute(self, args: argparse.Namespace) -> int:
        """
        Execute the command.

        Returns:
            Exit code (0 for success, non-zero for failure).
        """
        ...

    @classmethod
    def configure(cls, parser: argparse.ArgumentParser) -> None:
        """Add command specific arguments. No arguments by default."""

    @classmethod
    def register(cls, subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
        """Register command with argument parser."""
        parser = subparsers.add_parser(cls.name, help=cls.help)
        cls.configure(parser)
        parser.set_defaults(command_class=cls)
