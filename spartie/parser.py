"""Parser for the Spartie language.

Source text is parsed by a Lark LALR parser configured with the grammar
below, and the resulting parse tree is transformed into the AST defined
in :mod:`spartie.ast` by :class:`ASTTransformer`.

Operator terminals are named in the grammar so that they survive into
the parse tree; the transformer turns them into :class:`Token` objects
carrying the operator kind, the source line and the literal text.

The `parse_program` function is the public entry point and returns a
`Program` AST node representing the entire source file.
"""

from __future__ import annotations

from lark import Lark, Transformer, Token as LarkToken
from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedInput, UnexpectedToken

from .ast import (
    Program, PrintStmt, ExprStmt, VarDecl, Block, IfStmt, WhileStmt,
    Logical, Assign, Variable, Literal, Grouping, Unary, Binary,
)
from .errors import ErrorInfo, SpartieError
from .tokens import Token


SPARTIE_GRAMMAR = r"""
    start: declaration*

    ?declaration: var_decl
                | statement

    var_decl: "var" IDENTIFIER ["=" expression] ";"

    ?statement: print_stmt
              | if_stmt
              | while_stmt
              | block
              | expr_stmt

    print_stmt: "print" expression ";"
    if_stmt: "if" "(" expression ")" statement ["else" statement]
    while_stmt: "while" "(" expression ")" statement
    block: "{" declaration* "}"
    expr_stmt: expression ";"

    // Expressions with precedence
    ?expression: assignment
    ?assignment: IDENTIFIER "=" assignment -> assign
               | logic_or
    ?logic_or: logic_and (OR logic_and)*
    ?logic_and: equality (AND equality)*
    ?equality: comparison ((EQUIVALENT | NOT_EQUAL) comparison)*
    ?comparison: term ((GREATER_EQUAL | GREATER_THAN | LESS_EQUAL | LESS_THAN) term)*
    ?term: factor ((ADD | SUBTRACT) factor)*
    ?factor: unary ((MULTIPLY | DIVIDE) unary)*
    ?unary: (NOT | SUBTRACT) unary
          | primary
    primary: NUMBER -> number
            | STRING -> string
            | "true" -> true
            | "false" -> false
            | "null" -> null
            | IDENTIFIER -> variable
            | "(" expression ")" -> grouping

    OR: "or"
    AND: "and"
    EQUIVALENT: "=="
    NOT_EQUAL: "!="
    GREATER_EQUAL: ">="
    GREATER_THAN: ">"
    LESS_EQUAL: "<="
    LESS_THAN: "<"
    ADD: "+"
    SUBTRACT: "-"
    MULTIPLY: "*"
    DIVIDE: "/"
    NOT: "!"

    NUMBER: /\d+(\.\d+)?/
    STRING: /"[^"]*"/
    IDENTIFIER: /[A-Za-z_][A-Za-z0-9_]*/

    COMMENT: /\/\/[^\n]*/
    %import common.WS
    %ignore WS
    %ignore COMMENT
"""


SPARTIE_PARSER = Lark(
    SPARTIE_GRAMMAR,
    parser='lalr',
    propagate_positions=True,
    maybe_placeholders=False,
)


def make_token(token: LarkToken) -> Token:
    """Convert a Lark operator or identifier token into a Spartie Token."""
    if token.type == 'IDENTIFIER':
        return Token.identifier(str(token), token.line)
    return Token.operator(str(token), token.line)


def fold_binary(items, node_type):
    # items alternate operand, operator, operand, ...; fold left-associatively
    left = items[0]
    i = 1
    while i < len(items):
        operator = make_token(items[i])
        right = items[i + 1]
        left = node_type(left, operator, right)
        i += 2
    return left


class ASTTransformer(Transformer):
    """Transforms the raw parse tree into an AST."""

    def start(self, items):
        return Program(statements=tuple(items))

    def var_decl(self, items):
        name = make_token(items[0])
        initializer = items[1] if len(items) > 1 else None
        return VarDecl(name=name, initializer=initializer)

    def print_stmt(self, items):
        return PrintStmt(items[0])

    def expr_stmt(self, items):
        return ExprStmt(items[0])

    def block(self, items):
        return Block(statements=tuple(items))

    def if_stmt(self, items):
        condition = items[0]
        then_branch = items[1]
        else_branch = items[2] if len(items) > 2 else None
        return IfStmt(condition, then_branch, else_branch)

    def while_stmt(self, items):
        return WhileStmt(condition=items[0], body=items[1])

    def assign(self, items):
        return Assign(name=make_token(items[0]), value=items[1])

    def logic_or(self, items):
        return fold_binary(items, Logical)

    def logic_and(self, items):
        return fold_binary(items, Logical)

    def equality(self, items):
        return fold_binary(items, Binary)

    def comparison(self, items):
        return fold_binary(items, Binary)

    def term(self, items):
        return fold_binary(items, Binary)

    def factor(self, items):
        return fold_binary(items, Binary)

    def unary(self, items):
        return Unary(operator=make_token(items[0]), right=items[1])

    def number(self, items):
        return Literal(float(items[0]))

    def string(self, items):
        return Literal(str(items[0])[1:-1])

    def true(self, items):
        return Literal(True)

    def false(self, items):
        return Literal(False)

    def null(self, items):
        return Literal(None)

    def variable(self, items):
        return Variable(make_token(items[0]))

    def grouping(self, items):
        return Grouping(items[0])


def syntax_error(exc: UnexpectedInput) -> SpartieError:
    line = getattr(exc, 'line', None)
    if isinstance(exc, UnexpectedEOF) or (isinstance(exc, UnexpectedToken) and exc.token.type == '$END'):
        message = 'Unexpected end of input'
    elif isinstance(exc, UnexpectedToken):
        message = f"Unexpected token {str(exc.token)!r} on line {line}"
    elif isinstance(exc, UnexpectedCharacters):
        message = f"Unexpected character {exc.char!r} on line {line}"
    else:
        message = f"Syntax error on line {line}"
    if isinstance(line, int) and line < 0:
        line = None
    return SpartieError(ErrorInfo('SyntaxError', message, line))


def parse_program(source: str) -> Program:
    """Parse Spartie source code into an AST Program.

    Syntax errors are raised as SpartieError with the name 'SyntaxError'.
    """
    try:
        tree = SPARTIE_PARSER.parse(source)
    except UnexpectedInput as exc:
        raise syntax_error(exc) from exc
    return ASTTransformer().transform(tree)
