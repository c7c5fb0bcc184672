"""exprc.parser

Recursive-descent parser for integer arithmetic expressions.

Grammar, lowest precedence first::

    Expression     := Additive
    Additive       := Multiplicative ( ('+' | '-') Multiplicative )*
    Multiplicative := Primary ( ('*' | '/') Primary )*
    Primary        := NUMBER | '(' Expression ')'

Both binary layers are left-associative: each loop iteration wraps the tree
built so far as the left child of the new operator node.

Every operator gets its destination temporary the moment it is recognized,
before its right operand is parsed, so temporaries are numbered in left-to-right
source order rather than in evaluation order. For "9000 + (6 * 4)" the '+'
becomes t0 and the '*' becomes t1.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from exprc.lexer import Token, TokenType
from exprc.ast_nodes import Expression, make_node
from exprc.temps import TempAllocator

logger = logging.getLogger(__name__)


ADDITIVE_OPERATORS = {TokenType.PLUS, TokenType.MINUS}
MULTIPLICATIVE_OPERATORS = {TokenType.STAR, TokenType.SLASH}


class ParserError(Exception):
    """Parser error"""
    def __init__(self, message: str, token: Optional[Token] = None):
        self.message = message
        self.token = token
        if token:
            super().__init__(f"{message} at {token.line}:{token.column}")
        else:
            super().__init__(message)


class Parser:
    """Parser for arithmetic expressions"""

    def __init__(self, tokens: List[Token], temps: Optional[TempAllocator] = None):
        self.tokens: List[Token] = list(tokens)
        if not self.tokens or self.tokens[-1].type != TokenType.EOF:
            last = self.tokens[-1] if self.tokens else None
            line = last.line if last else 1
            column = last.column + len(last.value) if last else 1
            self.tokens.append(Token(TokenType.EOF, '', line, column))
        self.position = 0
        self.current_token: Token = self.tokens[0]
        self.temps = temps if temps is not None else TempAllocator()

    def parse(self) -> Expression:
        """Parse a complete expression; nothing may follow it"""
        expr = self.parse_expression()
        if not self._at(TokenType.EOF):
            raise ParserError("Unexpected token after expression", self.current_token)
        return expr

    def parse_expression(self) -> Expression:
        """Parse one expression starting at the current token"""
        return self._parse_additive()

    def advance(self) -> Token:
        """Move to next token; stays on EOF once it is reached"""
        if self.position < len(self.tokens) - 1:
            self.position += 1
            self.current_token = self.tokens[self.position]
        return self.current_token

    def peek(self, offset: int = 1) -> Optional[Token]:
        """Peek ahead"""
        pos = self.position + offset
        if pos < len(self.tokens):
            return self.tokens[pos]
        return None

    # -----------------
    # Helpers
    # -----------------

    def _at(self, t: TokenType) -> bool:
        return self.current_token.type == t

    def _expect(self, t: TokenType, msg: str) -> Token:
        tok = self.current_token
        if tok.type != t:
            raise ParserError(msg, tok)
        self.advance()
        return tok

    # -----------------
    # Expressions
    # -----------------

    def _parse_additive(self) -> Expression:
        expr = self._parse_multiplicative()
        while self.current_token.type in ADDITIVE_OPERATORS:
            op = self.current_token
            dest = self.temps.new_name()
            self.advance()
            rhs = self._parse_multiplicative()
            expr = make_node(op.type, dest, expr, rhs, line=op.line, column=op.column)
        return expr

    def _parse_multiplicative(self) -> Expression:
        expr = self._parse_primary()
        while self.current_token.type in MULTIPLICATIVE_OPERATORS:
            op = self.current_token
            dest = self.temps.new_name()
            self.advance()
            rhs = self._parse_primary()
            expr = make_node(op.type, dest, expr, rhs, line=op.line, column=op.column)
        return expr

    def _parse_primary(self) -> Expression:
        tok = self.current_token
        if tok.type == TokenType.NUMBER:
            self.advance()
            return make_node(tok.type, tok.number, text=tok.value, line=tok.line, column=tok.column)
        if tok.type == TokenType.LPAREN:
            self.advance()
            expr = self.parse_expression()
            self._expect(TokenType.RPAREN, "')' expected")
            return expr

        logger.debug("primary expression rejected %r", tok)
        raise ParserError("number or '(' expected", tok)
