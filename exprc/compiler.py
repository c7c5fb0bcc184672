"""
Main Compiler Driver

Orchestrates the pipeline: lex, parse, then evaluate while emitting IR.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

from exprc.lexer import Lexer, Token
from exprc.parser import Parser
from exprc.ast_nodes import Expression
from exprc.ir import IRGenerator, IRInstruction, format_ir
from exprc.temps import DEFAULT_TEMP_PREFIX, TempAllocator

logger = logging.getLogger(__name__)


@dataclass
class CompilationResult:
    """Result of compiling one expression"""
    success: bool
    source: str = ""
    value: Optional[int] = None
    instructions: List[IRInstruction] = None
    errors: List[str] = None
    ast: Optional[Expression] = None

    def __post_init__(self):
        if self.instructions is None:
            self.instructions = []
        if self.errors is None:
            self.errors = []

    @property
    def ir_text(self) -> str:
        return format_ir(self.instructions)


class Compiler:
    """Main compiler class orchestrating all stages"""

    def __init__(
        self,
        *,
        continue_temps: bool = False,
        temp_prefix: Optional[str] = None,
        sink: Optional[Callable[[str], None]] = None,
    ):
        # With continue_temps, numbering runs on across expressions
        # (t0, t1 in the first, t2, ... in the next).
        self.continue_temps = continue_temps
        if temp_prefix is None:
            temp_prefix = os.environ.get("EXPRC_TEMP_PREFIX", DEFAULT_TEMP_PREFIX)
        self.temps = TempAllocator(temp_prefix)
        self.sink = sink

    def compile_file(self, source_file: str) -> List[CompilationResult]:
        """Compile every expression line of a file"""
        try:
            with open(source_file, 'r', encoding="utf-8") as f:
                lines = f.read().splitlines()
        except (OSError, UnicodeDecodeError) as e:
            return [CompilationResult(success=False, errors=[f"Failed to read source file: {e}"])]
        return self.compile_lines(lines)

    def compile_lines(self, lines: Iterable[str]) -> List[CompilationResult]:
        """Compile each line; blank lines and '#' comments are skipped"""
        results = []
        for line in lines:
            text = line.strip()
            if not text or text.startswith('#'):
                continue
            results.append(self.compile_code(text))
        return results

    def compile_code(self, source_code: str) -> CompilationResult:
        """Compile a single expression"""
        if not self.continue_temps:
            self.temps.reset()

        # Phase 1: Lexical Analysis
        try:
            tokens = self.get_tokens(source_code)
        except Exception as e:
            return CompilationResult(success=False, source=source_code, errors=[f"Lexical analysis failed: {e}"])

        # Phase 2: Syntax Analysis
        try:
            ast = self.get_ast(tokens)
        except Exception as e:
            return CompilationResult(success=False, source=source_code, errors=[f"Syntax analysis failed: {e}"])

        # Phase 3: Evaluation + IR
        generator = IRGenerator(sink=self.sink)
        try:
            value = generator.evaluate(ast)
        except Exception as e:
            return CompilationResult(
                success=False,
                source=source_code,
                instructions=generator.instructions,
                errors=[f"Evaluation failed: {e}"],
                ast=ast,
            )

        errors = [f"Evaluation failed: {e}" for e in generator.errors]
        logger.debug("%r -> %d (%d instructions)", source_code, value, len(generator.instructions))
        return CompilationResult(
            success=not errors,
            source=source_code,
            value=value,
            instructions=generator.instructions,
            errors=errors,
            ast=ast,
        )

    def get_tokens(self, source_code: str) -> List[Token]:
        """Get tokens from source code"""
        lexer = Lexer(source_code)
        tokens = lexer.tokenize()
        if lexer.has_errors():
            errors = lexer.get_errors()
            raise Exception("\n".join(str(e) for e in errors))
        return tokens

    def get_ast(self, tokens: List[Token]) -> Expression:
        """Get AST from tokens"""
        parser = Parser(tokens, temps=self.temps)
        return parser.parse()
