"""
Defines the core data types for the forth evaluator.

This module provides the value range, source tokens, the error hierarchy
and the word table that the evaluator works with.
"""

from collections import UserDict
from dataclasses import dataclass
from typing import List, Optional, Sequence

Value = int

VALUE_MIN = -2**31
VALUE_MAX = 2**31 - 1


def wrap_value(n: int) -> Value:
    """Wraps an arbitrary int into the signed 32-bit range (two's complement)."""
    n &= 0xFFFFFFFF
    if n > VALUE_MAX:
        n -= 1 << 32
    return n


@dataclass(frozen=True)
class Token:
    """One whitespace-delimited atom of source text, with its location."""
    text: str
    offset: int
    line: int
    col: int

    @property
    def word(self) -> str:
        """The case-folded spelling used for operator dispatch."""
        return self.text.lower()

    def loc(self) -> dict:
        return {'line': self.line, 'col': self.col, 'text': self.text}


# =================================================================
# Errors
# =================================================================

class ForthError(Exception):
    """Base class for every evaluation failure."""
    kind = "ForthError"

    def __init__(self, message: str, token: Optional[Token] = None):
        super().__init__(message)
        self.token = token


class DivisionByZero(ForthError):
    kind = "DivisionByZero"


class StackUnderflow(ForthError):
    kind = "StackUnderflow"

    def __init__(self, message: str, token: Optional[Token] = None, *, needed: int = 0, depth: int = 0):
        super().__init__(message, token)
        self.needed = needed
        self.depth = depth


class UnknownWord(ForthError):
    kind = "UnknownWord"


class InvalidWord(ForthError):
    # Malformed word definitions; nothing raises this until definitions exist.
    kind = "InvalidWord"


# =================================================================
# Word table
# =================================================================

class Words(UserDict):
    """Symbol table of user-defined words: name -> stored token spellings.

    Names are case-insensitive, like every other word. The evaluator owns one
    of these but never consults it; it is the storage side of word definitions.
    """

    def _normalize_key(self, key):
        if not isinstance(key, str):
            raise TypeError(f"Word name must be a str, not {type(key)}")
        return key.lower()

    def __setitem__(self, key, value: Sequence[str]):
        if isinstance(value, str):
            raise TypeError("Word body must be a sequence of token spellings, not a str")
        self.data[self._normalize_key(key)] = list(value)

    def __getitem__(self, key) -> List[str]:
        return self.data[self._normalize_key(key)]

    def __delitem__(self, key):
        del self.data[self._normalize_key(key)]

    def __contains__(self, key) -> bool:
        return isinstance(key, str) and key.lower() in self.data
