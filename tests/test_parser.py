"""
Unit tests for the recursive-descent parser
"""

import pytest
from exprc.lexer import Lexer, Token, TokenType
from exprc.parser import Parser, ParserError
from exprc.ast_nodes import BinaryOp, IntLiteral, iter_postorder
from exprc.temps import TempAllocator


def parse(src, temps=None):
    return Parser(Lexer(src).tokenize(), temps=temps).parse()


class TestPrimary:
    """Test literals and grouping"""

    def test_single_number(self):
        ast = parse("42")
        assert isinstance(ast, IntLiteral)
        assert ast.value == 42
        assert ast.text == "42"

    def test_parenthesized_number(self):
        ast = parse("((7))")
        assert isinstance(ast, IntLiteral)
        assert ast.value == 7

    def test_literal_keeps_location(self):
        ast = parse("  5")
        assert (ast.line, ast.column) == (1, 3)


class TestPrecedence:
    """Test operator precedence"""

    def test_mul_binds_tighter_than_add(self):
        ast = parse("2 * 3 + 4")
        assert isinstance(ast, BinaryOp)
        assert ast.operator == '+'
        assert isinstance(ast.left, BinaryOp)
        assert ast.left.operator == '*'
        assert ast.right.value == 4

    def test_mul_on_the_right(self):
        ast = parse("2 + 3 * 4")
        assert ast.operator == '+'
        assert ast.left.value == 2
        assert ast.right.operator == '*'

    def test_parentheses_override_precedence(self):
        ast = parse("(1 + 2) * 3")
        assert ast.operator == '*'
        assert ast.left.operator == '+'
        assert ast.right.value == 3


class TestAssociativity:
    """Test left associativity"""

    def test_subtraction_is_left_associative(self):
        ast = parse("10 - 3 - 2")
        assert ast.operator == '-'
        assert isinstance(ast.left, BinaryOp)
        assert ast.left.left.value == 10
        assert ast.left.right.value == 3
        assert ast.right.value == 2

    def test_division_is_left_associative(self):
        ast = parse("100 / 10 / 5")
        assert ast.left.operator == '/'
        assert ast.right.value == 5


class TestTemporaries:
    """Test destination temporaries assigned during parsing"""

    def test_single_operator(self):
        ast = parse("3 + 4")
        assert ast.destination == "t0"

    def test_numbered_in_source_order(self):
        # '+' is recognized before '*', so it gets t0 even though it is the root
        ast = parse("9000 + (6 * 4)")
        assert ast.destination == "t0"
        assert ast.right.destination == "t1"

    def test_left_chain_numbering(self):
        ast = parse("1 + 2 + 3")
        assert ast.destination == "t1"
        assert ast.left.destination == "t0"

    def test_precedence_numbering(self):
        ast = parse("2 * 3 + 4")
        assert ast.left.destination == "t0"
        assert ast.destination == "t1"

    def test_one_temporary_per_operator(self):
        temps = TempAllocator()
        parse("(1 + 2) * (3 - 4) / 5", temps=temps)
        assert temps.count == 4

    def test_shared_allocator_keeps_counting(self):
        temps = TempAllocator()
        parse("1 + 2", temps=temps)
        ast = parse("3 * 4", temps=temps)
        assert ast.destination == "t1"

    def test_parsing_is_deterministic(self):
        src = "1 * (2 + 3) - 4 / (5 - 6)"
        a = [getattr(n, "destination", None) for n in iter_postorder(parse(src))]
        b = [getattr(n, "destination", None) for n in iter_postorder(parse(src))]
        assert a == b


class TestErrors:
    """Test syntax errors"""

    def test_unterminated_group(self):
        with pytest.raises(ParserError) as exc:
            parse("(1 + 2")
        assert exc.value.message == "')' expected"
        assert exc.value.token.type == TokenType.EOF

    def test_trailing_operator(self):
        with pytest.raises(ParserError) as exc:
            parse("1 +")
        assert exc.value.message == "number or '(' expected"

    def test_empty_input(self):
        with pytest.raises(ParserError):
            parse("")

    def test_leading_operator(self):
        # no unary operators
        with pytest.raises(ParserError) as exc:
            parse("-1")
        assert "at 1:1" in str(exc.value)

    def test_empty_parentheses(self):
        with pytest.raises(ParserError):
            parse("()")

    def test_trailing_tokens(self):
        with pytest.raises(ParserError) as exc:
            parse("1 2")
        assert exc.value.message == "Unexpected token after expression"

    def test_stray_close_paren(self):
        with pytest.raises(ParserError):
            parse("1 + 2)")


class TestCursor:
    """Test the token cursor"""

    def test_advance_stays_on_eof(self):
        p = Parser(Lexer("1").tokenize())
        p.advance()
        assert p.current_token.type == TokenType.EOF
        p.advance()
        assert p.current_token.type == TokenType.EOF

    def test_missing_eof_is_supplied(self):
        p = Parser([Token(TokenType.NUMBER, "8", 1, 1)])
        assert p.parse().value == 8

    def test_peek(self):
        p = Parser(Lexer("1 + 2").tokenize())
        assert p.peek().type == TokenType.PLUS
        assert p.peek(10) is None

    def test_parse_expression_leaves_trailing_tokens(self):
        p = Parser(Lexer("1 + 2 )").tokenize())
        ast = p.parse_expression()
        assert ast.operator == '+'
        assert p.current_token.type == TokenType.RPAREN
