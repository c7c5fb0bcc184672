"""
Abstract Syntax Tree (AST) Node Definitions for arithmetic expressions

A tree is either an integer literal leaf or a binary operation whose result is
bound to a destination temporary. Children are owned by exactly one parent.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple, Union

from exprc.lexer import TokenType


# Token kinds that create an operator node, and the symbol each one emits.
OPERATOR_SYMBOLS: Dict[TokenType, str] = {
    TokenType.PLUS: '+',
    TokenType.MINUS: '-',
    TokenType.STAR: '*',
    TokenType.SLASH: '/',
}


class ASTError(Exception):
    """Malformed node construction"""
    pass


@dataclass
class ASTNode:
    """Base class for all AST nodes"""
    # Location fields (line/column) are required constructor arguments
    # so subclasses' non-default fields don't follow defaults.
    line: int
    column: int


@dataclass
class Expression(ASTNode):
    """Base class for expressions"""

    @property
    def operand_name(self) -> str:
        """Name used when this node appears as an operand in emitted IR"""
        raise NotImplementedError


@dataclass
class IntLiteral(Expression):
    """Integer literal

    ``text`` is the literal as written in the source. It is what the literal
    renders as when used directly as an IR operand.
    """
    value: int
    text: str = ""

    def __post_init__(self) -> None:
        if not self.text:
            self.text = str(self.value)

    @property
    def operand_name(self) -> str:
        return self.text


@dataclass
class BinaryOp(Expression):
    """Binary operation bound to a destination temporary"""
    operator: str  # '+', '-', '*', '/'
    destination: str
    left: Expression
    right: Expression

    @property
    def operand_name(self) -> str:
        return self.destination


def make_node(
    kind: TokenType,
    value: Union[int, str],
    left: Optional[Expression] = None,
    right: Optional[Expression] = None,
    *,
    text: str = "",
    line: int = 1,
    column: int = 1,
) -> Expression:
    """Create a node for token kind ``kind``.

    For ``NUMBER``, ``value`` is the integer payload and there must be no
    children. For an arithmetic operator, ``value`` is the destination name
    and both children are required. The children become owned by the new node.
    """
    if kind == TokenType.NUMBER:
        if left is not None or right is not None:
            raise ASTError("literal node cannot have children")
        return IntLiteral(value=int(value), text=text, line=line, column=column)
    if kind in OPERATOR_SYMBOLS:
        if left is None or right is None:
            raise ASTError(f"operator '{OPERATOR_SYMBOLS[kind]}' needs two operands")
        return BinaryOp(
            operator=OPERATOR_SYMBOLS[kind],
            destination=str(value),
            left=left,
            right=right,
            line=line,
            column=column,
        )
    raise ASTError(f"cannot build a node for {kind.name}")


def iter_postorder(node: Optional[Expression]) -> Iterator[Expression]:
    """Yield every node of the tree exactly once, children before parents"""
    stack: List[Tuple[Expression, bool]] = []
    if node is not None:
        stack.append((node, False))
    while stack:
        current, visited = stack.pop()
        if visited or not isinstance(current, BinaryOp):
            yield current
            continue
        stack.append((current, True))
        for child in (current.right, current.left):
            if child is not None:
                stack.append((child, False))


def dump_ast(node: Expression, indent: int = 0) -> str:
    """Render the tree one node per line, children indented below parents"""
    lines: List[str] = []
    stack: List[Tuple[Expression, int]] = [(node, indent)]
    while stack:
        n, depth = stack.pop()
        pad = "  " * depth
        if isinstance(n, BinaryOp):
            lines.append(f"{pad}{n.destination} ({n.operator})")
            stack.append((n.right, depth + 1))
            stack.append((n.left, depth + 1))
        elif isinstance(n, IntLiteral):
            lines.append(f"{pad}{n.text}")
        else:
            lines.append(f"{pad}<{type(n).__name__}>")
    return "\n".join(lines)
