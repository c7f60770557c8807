"""Tree-walking interpreter for the Spartie language.

The interpreter executes a parsed program (see :mod:`spartie.parser`)
statement by statement against a chain of :class:`Environment` scopes.
The active scope is passed explicitly to every ``execute``/``evaluate``
call; ``current_env`` mirrors it for inspection and is always restored
when a block finishes, whether normally or by an error.

Runtime errors are raised as :class:`SpartieError`. The interpreter never
terminates the process itself; the command line driver decides how to
report an error and which exit status to use.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterable, Iterator, Optional, TextIO, Union

from .ast import (
    Node, Program, PrintStmt, ExprStmt, VarDecl, Block, IfStmt, WhileStmt,
    Logical, Assign, Variable, Literal, Grouping, Unary, Binary,
)
from .environment import Environment
from .errors import ErrorInfo, SpartieError
from .parser import parse_program
from .tokens import Token, TokenType
from .values import divide, format_number, is_number, is_truthy, to_string, values_equal


COMPARISONS = {
    TokenType.GREATER_THAN: lambda a, b: a > b,
    TokenType.GREATER_EQUAL: lambda a, b: a >= b,
    TokenType.LESS_THAN: lambda a, b: a < b,
    TokenType.LESS_EQUAL: lambda a, b: a <= b,
}

ARITHMETIC = {
    TokenType.SUBTRACT: lambda a, b: float(a) - float(b),
    TokenType.MULTIPLY: lambda a, b: float(a) * float(b),
    TokenType.DIVIDE: divide,
}


class Interpreter:
    """Core interpreter that executes Spartie AST."""
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt',
                 strict_reads: bool = False, out: Optional[TextIO] = None):
        self.global_env = Environment()
        self.current_env = self.global_env
        self.strict_reads = strict_reads
        self.out = out
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 else None

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg)

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    # Public API
    def run(self, program: Union[Program, Iterable[Node]]) -> None:
        statements = program.statements if isinstance(program, Program) else program
        self.debug('run: start')
        try:
            for stmt in statements:
                self.execute(stmt, self.global_env)
        except SpartieError as ex:
            self.debug(f'run: error {ex.err!r}')
            raise
        self.debug('run: finished')

    @contextmanager
    def scope(self, env: Environment) -> Iterator[Environment]:
        """Make ``env`` the current scope for the duration of the block."""
        previous = self.current_env
        self.current_env = env
        if self.debug_level >= 3:
            self.debug(f'enter scope depth {env.depth}')
        try:
            yield env
        finally:
            self.current_env = previous
            if self.debug_level >= 3:
                self.debug(f'leave scope depth {env.depth}')

    def execute_block(self, statements: Iterable[Node], env: Environment) -> None:
        with self.scope(env):
            for stmt in statements:
                self.execute(stmt, env)

    def execute(self, node: Node, env: Environment) -> None:
        if isinstance(node, PrintStmt):
            value = self.evaluate(node.expression, env)
            print(to_string(value), file=self.out)
            return
        if isinstance(node, ExprStmt):
            self.evaluate(node.expression, env)
            return
        if isinstance(node, VarDecl):
            value = self.evaluate(node.initializer, env) if node.initializer is not None else None
            # declarations bind into the active scope, so blocks can shadow
            env.define(node.name.text, value)
            if self.debug_level >= 2:
                self.debug(f'declare {node.name.text} = {to_string(value)}')
            return
        if isinstance(node, Block):
            self.execute_block(node.statements, Environment(parent=env))
            return
        if isinstance(node, IfStmt):
            cond = self.evaluate(node.condition, env)
            truthy = is_truthy(cond)
            if self.debug_level >= 3:
                self.debug(f'if condition {to_string(cond)} -> {truthy}')
            if truthy:
                self.execute(node.then_branch, env)
            elif node.else_branch is not None:
                self.execute(node.else_branch, env)
            return
        if isinstance(node, WhileStmt):
            iterations = 0
            while is_truthy(self.evaluate(node.condition, env)):
                self.execute(node.body, env)
                iterations += 1
            if self.debug_level >= 3:
                self.debug(f'while finished after {iterations} iterations')
            return
        raise NotImplementedError(f'execute: unexpected node type {type(node).__name__}')

    def evaluate(self, node: Node, env: Environment) -> Any:
        value = self.evaluate_node(node, env)
        if self.debug_level >= 4:
            self.debug(f'{type(node).__name__} -> {to_string(value)}')
        return value

    def evaluate_node(self, node: Node, env: Environment) -> Any:
        if isinstance(node, Literal):
            return node.value
        if isinstance(node, Grouping):
            return self.evaluate(node.expression, env)
        if isinstance(node, Variable):
            try:
                return env.get(node.name.text, strict=self.strict_reads)
            except SpartieError as ex:
                ex.err.line = node.name.line
                raise
        if isinstance(node, Assign):
            value = self.evaluate(node.value, env)
            env.assign(node.name, value)
            if self.debug_level >= 2:
                self.debug(f'assign {node.name.text} = {to_string(value)}')
            return value
        if isinstance(node, Logical):
            left = self.evaluate(node.left, env)
            if node.operator.type == TokenType.OR:
                if is_truthy(left):
                    return left
            elif not is_truthy(left):
                return left
            return self.evaluate(node.right, env)
        if isinstance(node, Unary):
            right = self.evaluate(node.right, env)
            return self.apply_unary_op(node.operator, right)
        if isinstance(node, Binary):
            left = self.evaluate(node.left, env)
            right = self.evaluate(node.right, env)
            return self.apply_binary_op(node.operator, left, right)
        raise NotImplementedError(f'evaluate: unexpected node type {type(node).__name__}')

    def apply_unary_op(self, operator: Token, operand: Any) -> Any:
        if operator.type == TokenType.NOT and isinstance(operand, bool):
            return not operand
        if operator.type == TokenType.SUBTRACT and is_number(operand):
            return -float(operand)
        raise self.type_error(operator, f'{operator.text}{to_string(operand)}')

    def apply_binary_op(self, operator: Token, a: Any, b: Any) -> Any:
        op = operator.type
        if op == TokenType.ADD:
            if is_number(a) and is_number(b):
                return float(a) + float(b)
            if isinstance(a, str) and isinstance(b, str):
                return a + b
            if is_number(a) and isinstance(b, str):
                return format_number(a) + b
            if isinstance(a, str) and is_number(b):
                return a + format_number(b)
            raise self.type_error(operator, f'{to_string(a)}{operator.text}{to_string(b)}')
        if op == TokenType.EQUIVALENT:
            return values_equal(a, b)
        if op == TokenType.NOT_EQUAL:
            return not values_equal(a, b)
        if op in ARITHMETIC or op in COMPARISONS:
            if not (is_number(a) and is_number(b)):
                raise self.type_error(operator, f'{to_string(a)}{operator.text}{to_string(b)}')
            if op in ARITHMETIC:
                return ARITHMETIC[op](a, b)
            return COMPARISONS[op](a, b)
        raise self.type_error(operator, f'unsupported operator {operator.text}')

    def type_error(self, operator: Token, detail: str) -> SpartieError:
        return SpartieError(ErrorInfo('TypeError', f'Invalid type on line {operator.line} : {detail}', operator.line))


def run_program(source: str, **kwargs) -> Interpreter:
    """Convenience function to parse and run a Spartie program from source."""
    program = parse_program(source)
    interpreter = Interpreter(**kwargs)
    try:
        interpreter.run(program)
    finally:
        interpreter.close()
    return interpreter
