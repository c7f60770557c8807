from dataclasses import dataclass
from enum import Enum


class TokenType(Enum):
    ADD = '+'
    SUBTRACT = '-'
    MULTIPLY = '*'
    DIVIDE = '/'
    NOT = '!'
    EQUIVALENT = '=='
    NOT_EQUAL = '!='
    GREATER_THAN = '>'
    GREATER_EQUAL = '>='
    LESS_THAN = '<'
    LESS_EQUAL = '<='
    AND = 'and'
    OR = 'or'
    IDENTIFIER = 'identifier'


@dataclass(frozen=True)
class Token:
    """An operator or identifier token as seen by the interpreter.

    ``text`` is the literal source text and ``line`` the 1-based source
    line; both are only used for diagnostics.
    """
    type: TokenType
    text: str
    line: int = 0

    @staticmethod
    def operator(text: str, line: int = 0) -> 'Token':
        return Token(TokenType(text), text, line)

    @staticmethod
    def identifier(name: str, line: int = 0) -> 'Token':
        return Token(TokenType.IDENTIFIER, name, line)

    def __str__(self) -> str:
        return self.text
