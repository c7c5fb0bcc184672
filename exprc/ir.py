"""exprc.ir

Evaluation and three-address code for arithmetic expressions.

`IRGenerator.evaluate` walks the tree in postorder: left subtree, right
subtree, then the node itself. Every `BinaryOp` computes its value and emits
exactly one instruction::

    <destination> = <left operand> <op> <right operand>

Operands are the children's `operand_name`: the temporary of an operator child
or the source text of a literal child. Both subtrees are finished before their
parent is emitted, so the instruction stream is in evaluation order and every
temporary is defined before it is used.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from exprc.ast_nodes import BinaryOp, Expression, IntLiteral

logger = logging.getLogger(__name__)


class EvaluationError(Exception):
    """Arithmetic failure during evaluation (division by zero)"""
    pass


@dataclass
class IRInstruction:
    op: str
    result: str
    operand1: str
    operand2: str

    def __str__(self) -> str:
        return f"{self.result} = {self.operand1} {self.op} {self.operand2}"


def format_ir(instructions: List[IRInstruction]) -> str:
    return "\n".join(str(ins) for ins in instructions)


def _c_div(a: int, b: int) -> int:
    """Integer division truncating toward zero, as C does"""
    if b == 0:
        raise EvaluationError("division by zero")
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


_ARITHMETIC: Dict[str, Callable[[int, int], int]] = {
    '+': lambda a, b: a + b,
    '-': lambda a, b: a - b,
    '*': lambda a, b: a * b,
    '/': _c_div,
}


class IRGenerator:
    """Evaluates an expression tree while emitting 3-address code"""

    def __init__(self, sink: Optional[Callable[[str], None]] = None):
        self.instructions: List[IRInstruction] = []
        self.errors: List[str] = []
        # Receives each instruction line as soon as it is emitted.
        self.sink = sink

    def generate(self, ast: Expression) -> List[IRInstruction]:
        """Evaluate ``ast`` from scratch and return the emitted instructions"""
        self.instructions = []
        self.errors = []
        self.evaluate(ast)
        return self.instructions

    def evaluate(self, node: Expression) -> int:
        # Postorder traversal with an explicit stack: a left-associative
        # chain is as deep as its operator count.
        values: List[int] = []
        stack: List[Tuple[Expression, bool]] = [(node, False)]
        while stack:
            current, visited = stack.pop()
            if isinstance(current, IntLiteral):
                values.append(current.value)
                continue
            if not isinstance(current, BinaryOp):
                values.append(self._report(f"Unknown operator/operand {type(current).__name__}"))
                continue
            if not visited:
                if not isinstance(current.left, Expression) or not isinstance(current.right, Expression):
                    values.append(self._report(f"Malformed operator node {current.destination}: missing operand"))
                    continue
                if current.operator not in _ARITHMETIC:
                    values.append(self._report(f"Unknown operator '{current.operator}'"))
                    continue
                # left is popped first
                stack.append((current, True))
                stack.append((current.right, False))
                stack.append((current.left, False))
                continue
            rhs = values.pop()
            lhs = values.pop()
            result = _ARITHMETIC[current.operator](lhs, rhs)
            self._emit(IRInstruction(
                op=current.operator,
                result=current.destination,
                operand1=current.left.operand_name,
                operand2=current.right.operand_name,
            ))
            values.append(result)
        return values.pop()

    def _emit(self, ins: IRInstruction) -> None:
        logger.debug("emit %s", ins)
        self.instructions.append(ins)
        if self.sink is not None:
            self.sink(str(ins))

    def _report(self, message: str) -> int:
        # The subtree yields 0; the caller decides whether the result is usable.
        logger.debug("contained evaluation error: %s", message)
        self.errors.append(message)
        return 0

    def has_errors(self) -> bool:
        return len(self.errors) > 0
