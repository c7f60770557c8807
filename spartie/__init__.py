# Spartie language package
# This package provides a parser and a tree-walking interpreter for Spartie.
from .interpreter import run_program, Interpreter
from .environment import Environment
from .errors import SpartieError, ExitCode
from .parser import parse_program

__all__ = [
    'run_program',
    'parse_program',
    'Interpreter',
    'Environment',
    'SpartieError',
    'ExitCode',
]
