# forth_runtime.py

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional

from forth.forth_datatypes import (
    ForthError, DivisionByZero, StackUnderflow, UnknownWord, InvalidWord,
)
from forth.forth_interpreter import Evaluator
from forth.forth_printer import Printer
from forth.forth_serialize import serialize, deserialize

Token = Dict[str, Any]


@dataclass
class ExecutionResult:
    """The structured result of a script execution."""
    status: Literal['success', 'error']
    stack: List[int] = field(default_factory=list)
    error_message: Optional[str] = None
    error_token: Optional[Token] = None

    def format_error(self) -> str:
        """Formats an error message with line and column if available."""
        if self.status != 'error':
            return ""
        msg = str(self.error_message or "Unknown error")

        if self.error_token and 'line' in self.error_token:
            line = self.error_token.get('line')
            col = self.error_token.get('col')
            if not msg.startswith("Error on line "):
                col_info = f", col {col}" if col is not None else ""
                return f"Error on line {line}{col_info}: {msg}"
        return msg

    def dump(self, fmt: str = 'json') -> str:
        """Serializes the stack snapshot ('json' or 'yaml')."""
        return serialize(self.stack, fmt=fmt)


class ScriptRunner:
    """Runs forth source against one evaluator and reports structured results."""

    def __init__(self, evaluator: Optional[Evaluator] = None):
        self.evaluator = evaluator if evaluator is not None else Evaluator()
        self.printer = Printer()

    def handle_script(self, source_code: str) -> ExecutionResult:
        """Evaluates source_code. Forth errors become error results; anything else propagates."""
        try:
            self.evaluator.eval(source_code)
        except ForthError as e:
            msg, token = self._format_runtime_error(e, source_code)
            return ExecutionResult(
                status='error',
                stack=self.evaluator.stack(),
                error_message=msg,
                error_token=token,
            )
        return ExecutionResult(status='success', stack=self.evaluator.stack())

    def restore(self, data, fmt: Optional[str] = None, content_type: Optional[str] = None) -> ExecutionResult:
        """Pushes a serialized stack snapshot back onto the stack, bottom first."""
        values = deserialize(data, fmt=fmt, content_type=content_type)
        return self.handle_script(self.printer.pformat(values))

    def _format_runtime_error(self, e: ForthError, source: str) -> tuple[str, Optional[dict]]:
        match e:
            case StackUnderflow():
                msg = f"StackUnderflow: {e}"
                if e.depth:
                    msg = f"{msg}\nStack: {self.printer.pformat(self.evaluator.stack())}"
            case DivisionByZero():
                msg = f"DivisionByZero: {e}\nStack: {self.printer.pformat(self.evaluator.stack())}"
            case UnknownWord() | InvalidWord():
                msg = self.printer.pformat(e)
            case _:
                msg = f"ForthError: {e}"

        token = None
        if e.token is not None:
            token = e.token.loc()
            msg = f"{msg}\n(line {e.token.line}, col {e.token.col})\n{self._source_context(source, e.token.line, e.token.col)}"
        return msg, token

    def _source_context(self, source: str, line: int, col: Optional[int], radius: int = 2) -> str:
        lines = source.split("\n")
        if not line or line < 1 or line > len(lines):
            return ""
        start = max(1, line - radius)
        end = min(len(lines), line + radius)
        width = len(str(end))
        out = []
        for i in range(start, end + 1):
            prefix = ">" if i == line else " "
            ln = str(i).rjust(width)
            content = lines[i - 1]
            out.append(f"{prefix} {ln} | {content}")
            if i == line and col is not None:
                caret = " " * max(col - 1, 0)
                out.append(f"  {' ' * width} | {caret}^")
        return "\n".join(out)
