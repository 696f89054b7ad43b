from forth.forth_datatypes import (
    ForthError, DivisionByZero, StackUnderflow, UnknownWord, InvalidWord, Token, Words,
)
from forth.forth_interpreter import Evaluator
from forth.forth_runtime import ScriptRunner, ExecutionResult

__version__ = '0.1.0'
