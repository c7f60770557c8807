from dataclasses import dataclass
from enum import IntEnum
from typing import Optional


class ExitCode(IntEnum):
    """Process exit statuses used by the command line driver."""
    SUCCESS = 0
    SYNTAX_ERROR = 65
    FILE_ERROR = 66
    INTERPRET_ERROR = 70


@dataclass
class ErrorInfo:
    """Describes a Spartie failure.

    ``name`` is one of 'UndefinedVariable', 'TypeError' or 'SyntaxError'.
    ``line`` is the source line of the offending token, when known.
    """
    name: str
    message: str
    line: Optional[int] = None

    def __repr__(self) -> str:
        return f"Error(name={self.name!r}, message={self.message!r}, line={self.line!r})"


class SpartieError(Exception):
    """Exception type used to propagate Spartie errors to the host."""
    def __init__(self, err: ErrorInfo):
        super().__init__(err.message)
        self.err = err

    @property
    def name(self) -> str:
        return self.err.name

    @property
    def line(self) -> Optional[int]:
        return self.err.line


def undefined_variable(name: str, line: Optional[int] = None) -> SpartieError:
    return SpartieError(ErrorInfo('UndefinedVariable', f'Undefined variable: {name}', line))


def exit_code_for(error: SpartieError) -> ExitCode:
    if error.name == 'SyntaxError':
        return ExitCode.SYNTAX_ERROR
    return ExitCode.INTERPRET_ERROR
