"""
The forth execution engine.

Arithmetic is a whole-stack fold, not the usual pairwise pop-pop-push:
``+ - * /`` consume every value on the stack and leave a single result,
reducing left to right from the bottom element. ``1 2 3 +`` leaves ``6`` and
``10 3 2 -`` leaves ``(10 - 3) - 2 = 5``. Division truncates toward zero.
Results wrap to the signed 32-bit range.
"""

import os
import re
import sys
from types import MappingProxyType
from typing import Callable, Iterator, List, Mapping, Optional, Tuple

from forth.forth_datatypes import (
    Value, VALUE_MIN, VALUE_MAX, wrap_value, Token, Words,
    DivisionByZero, StackUnderflow, UnknownWord,
)

# Unicode White_Space only; str.isspace also counts the U+001C..U+001F separators.
_TOKEN_RE = re.compile(r'[^\t\n\v\f\r \x85\xa0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000]+')
_LITERAL_RE = re.compile(r'[+-]?[0-9]+')


def tokenize(source: str) -> Iterator[Token]:
    """Splits source on runs of whitespace, tracking line and column (1-based)."""
    line = 1
    line_start = 0
    scanned = 0
    for m in _TOKEN_RE.finditer(source):
        start = m.start()
        newlines = source.count('\n', scanned, start)
        if newlines:
            line += newlines
            line_start = source.rfind('\n', scanned, start) + 1
        scanned = start
        yield Token(m.group(), start, line, start - line_start + 1)


def parse_literal(text: str) -> Optional[Value]:
    """Checked integer parse. Returns None for anything that is not an in-range literal."""
    if not _LITERAL_RE.fullmatch(text):
        return None
    n = int(text)
    if n < VALUE_MIN or n > VALUE_MAX:
        return None
    return n


def _trunc_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


Operation = Tuple[int, Callable[[Token], None]]


class Evaluator:
    """Owns the numeric stack and applies tokens to it."""

    def __init__(self):
        self._stack: List[Value] = []
        # Storage for user-defined words; evaluation does not consult it.
        self.words = Words()
        self._operations: Mapping[str, Operation] = MappingProxyType(self._create_operations())

    def _create_operations(self) -> dict:
        return {
            ':': (0, self._op_noop),
            ';': (0, self._op_noop),
            '+': (2, self._op_add),
            '-': (2, self._op_sub),
            '*': (2, self._op_mul),
            '/': (2, self._op_div),
            'dup': (1, self._op_dup),
            'drop': (1, self._op_drop),
            'swap': (2, self._op_swap),
            'over': (2, self._op_over),
        }

    @property
    def operations(self) -> Mapping[str, Operation]:
        """Read-only view of the dispatch table, keyed by lower-case spelling."""
        return self._operations

    def _dbg(self, *parts):
        if os.environ.get("FORTH_DEBUG"):
            print("[DBG]", *parts, file=sys.stderr)

    def stack(self) -> List[Value]:
        """Returns the stack bottom to top, as a copy."""
        return list(self._stack)

    def eval(self, source: str) -> None:
        """Evaluates source, stopping at the first failing token.

        Tokens before the failure stay applied; the failing token's error is
        raised as a ForthError subclass.
        """
        for token in tokenize(source):
            self._eval_token(token)

    def _eval_token(self, token: Token):
        op = self._operations.get(token.word)
        if op is None:
            n = parse_literal(token.text)
            if n is None:
                raise UnknownWord(f"unknown word {token.text!r}", token)
            self._stack.append(n)
            self._dbg("push", n, self._stack)
            return

        needed, handler = op
        depth = len(self._stack)
        if depth < needed:
            raise StackUnderflow(
                f"{token.word!r} needs {needed} value(s), stack has {depth}",
                token, needed=needed, depth=depth,
            )
        handler(token)
        self._dbg(token.word, self._stack)

    # --- operations ---------------------------------------------------

    def _op_noop(self, token: Token):
        pass

    def _fold(self, fn: Callable[[int, int], int]):
        acc = self._stack[0]
        for n in self._stack[1:]:
            acc = wrap_value(fn(acc, n))
        self._stack = [acc]

    def _op_add(self, token: Token):
        self._fold(lambda a, b: a + b)

    def _op_sub(self, token: Token):
        self._fold(lambda a, b: a - b)

    def _op_mul(self, token: Token):
        self._fold(lambda a, b: a * b)

    def _op_div(self, token: Token):
        # Check every divisor before touching the stack, the top one included.
        if 0 in self._stack[1:]:
            raise DivisionByZero("division by zero", token)
        self._fold(_trunc_div)

    def _op_dup(self, token: Token):
        self._stack.append(self._stack[-1])

    def _op_drop(self, token: Token):
        self._stack.pop()

    def _op_swap(self, token: Token):
        self._stack[-1], self._stack[-2] = self._stack[-2], self._stack[-1]

    def _op_over(self, token: Token):
        self._stack.append(self._stack[-2])
