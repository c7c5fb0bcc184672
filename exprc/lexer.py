"""
Lexical Analyzer (Lexer) for arithmetic expressions

Converts source text into a stream of tokens for the parser.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, List, Optional


class TokenType(Enum):
    """Token types for the expression lexer"""
    # Literals
    NUMBER = auto()

    # Operators
    PLUS = auto()                # +
    MINUS = auto()               # -
    STAR = auto()                # *
    SLASH = auto()               # /

    # Delimiters
    LPAREN = auto()              # (
    RPAREN = auto()              # )

    # Special
    EOF = auto()


# Single-character punctuators; the expression language has no multi-char ones.
PUNCTUATORS: Dict[str, TokenType] = {
    '+': TokenType.PLUS,
    '-': TokenType.MINUS,
    '*': TokenType.STAR,
    '/': TokenType.SLASH,
    '(': TokenType.LPAREN,
    ')': TokenType.RPAREN,
}


@dataclass
class Token:
    """Represents a lexical token"""
    type: TokenType
    value: str
    line: int
    column: int

    @property
    def number(self) -> int:
        """Integer payload of a NUMBER token"""
        if self.type != TokenType.NUMBER:
            raise ValueError(f"{self.type.name} token has no numeric value")
        return int(self.value, 10)

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {repr(self.value)}, {self.line}:{self.column})"


class LexerError(Exception):
    """Lexer error with line and column information"""
    def __init__(self, message: str, line: int, column: int):
        self.message = message
        self.line = line
        self.column = column
        super().__init__(f"{message} at {line}:{column}")


class Lexer:
    """Lexical analyzer for integer arithmetic expressions"""

    def __init__(self, source: str):
        """Initialize lexer with source code"""
        self.source = source
        self.position = 0
        self.line = 1
        self.column = 1
        self.tokens: List[Token] = []
        self.errors: List[LexerError] = []

    def current_char(self) -> Optional[str]:
        """Get current character without consuming"""
        if self.position >= len(self.source):
            return None
        return self.source[self.position]

    def advance(self) -> Optional[str]:
        """Consume and return current character"""
        if self.position >= len(self.source):
            return None

        char = self.source[self.position]
        self.position += 1

        if char == '\n':
            self.line += 1
            self.column = 1
        else:
            self.column += 1

        return char

    def skip_whitespace(self) -> None:
        """Skip whitespace characters, newlines included"""
        while self.current_char() and self.current_char() in ' \t\r\n':
            self.advance()

    def read_number(self) -> str:
        """Read a decimal integer literal"""
        num_str = ""
        while self.current_char() and self.current_char() in '0123456789':
            num_str += self.advance()
        return num_str

    def tokenize(self) -> List[Token]:
        """Tokenize entire source"""
        self.tokens = []
        self.errors = []

        while self.position < len(self.source):
            self.skip_whitespace()

            if self.position >= len(self.source):
                break

            # Save token start position
            token_line = self.line
            token_column = self.column

            char = self.current_char()

            if char in '0123456789':
                value = self.read_number()
                self.tokens.append(Token(TokenType.NUMBER, value, token_line, token_column))

            elif char in PUNCTUATORS:
                self.advance()
                self.tokens.append(Token(PUNCTUATORS[char], char, token_line, token_column))

            else:
                self.errors.append(LexerError(f"Unexpected character '{char}'", token_line, token_column))
                self.advance()

        # Add EOF token
        self.tokens.append(Token(TokenType.EOF, '', self.line, self.column))

        return self.tokens

    def has_errors(self) -> bool:
        """Check if any lexer errors occurred"""
        return len(self.errors) > 0

    def get_errors(self) -> List[LexerError]:
        """Get all lexer errors"""
        return self.errors
