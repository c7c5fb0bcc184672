"""
exprc - arithmetic expression compiler front end

Parses integer expressions into an AST and evaluates them while emitting
three-address code, one instruction per arithmetic operation.
"""

__version__ = "0.1.0"
__author__ = "exprc Contributors"
__license__ = "MIT"

from .lexer import Lexer, Token, TokenType
from .parser import Parser, ParserError
from .temps import TempAllocator
from .ir import IRGenerator, IRInstruction
from .compiler import Compiler, CompilationResult

__all__ = [
    'Lexer',
    'Token',
    'TokenType',
    'Parser',
    'ParserError',
    'TempAllocator',
    'IRGenerator',
    'IRInstruction',
    'Compiler',
    'CompilationResult',
]
