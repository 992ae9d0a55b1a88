"""
Parser interface definitions using Python Protocol.
Defines the contract the batch runner relies on.
"""

from typing import Protocol

from .schemas import ParseResult


class HandParser(Protocol):
    """
    Protocol for hand history parsers.
    A parser recognizes one transcript dialect and turns a single hand into a ParseResult.
    """

    def detect(self, text: str) -> bool:
        """
        Detect if this parser can handle the given text.

        Args:
            text: Raw hand history text

        Returns:
            True if this parser recognizes the format
        """
        ...

    def parse(self, text: str) -> ParseResult:
        """
        Parse one hand.

        Args:
            text: Text of a single hand

        Returns:
            ParseSuccess with the hand and any warnings, or ParseFailure
        """
        ...
