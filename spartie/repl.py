"""Interactive read-eval-print loop for Spartie.

Every snippet runs against the same interpreter, so variables declared
at the prompt persist. Errors are reported and the loop continues.
A snippet that is not a complete statement but parses as an expression
is printed, so ``1 + 2`` at the prompt shows ``3.0``.
"""

import sys
from typing import Callable, List, Optional, TextIO

from .errors import SpartieError
from .interpreter import Interpreter
from .parser import parse_program


QUIT_COMMANDS = (':q', ':quit', 'quit', 'exit')


def count_braces_delta(line: str) -> int:
    # Braces inside string literals and after // do not count.
    delta = 0
    in_string = False
    i = 0
    while i < len(line):
        ch = line[i]
        if not in_string and line.startswith('//', i):
            break
        if ch == '"':
            in_string = not in_string
        elif not in_string:
            if ch == '{':
                delta += 1
            elif ch == '}':
                delta -= 1
        i += 1
    return delta


def parse_snippet(source: str):
    try:
        return parse_program(source)
    except SpartieError as parse_err:
        try:
            return parse_program(f'print {source.strip()};')
        except SpartieError:
            raise parse_err


def repl(interpreter: Interpreter, input_fn: Callable[[str], str] = input,
         err: Optional[TextIO] = None) -> None:
    err = err or sys.stderr
    buffer_lines: List[str] = []
    brace_depth = 0
    while True:
        prompt = 'spartie> ' if not buffer_lines else '...> '
        try:
            line = input_fn(prompt)
        except (EOFError, KeyboardInterrupt):
            if buffer_lines:
                print(f'incomplete input discarded ({len(buffer_lines)} line(s), unclosed block)', file=err)
            break

        stripped = line.strip()
        if not buffer_lines and stripped in QUIT_COMMANDS:
            break
        if not stripped and not buffer_lines:
            continue

        buffer_lines.append(line)
        brace_depth += count_braces_delta(line)
        # wait for the block to close
        if brace_depth > 0:
            continue

        source = '\n'.join(buffer_lines) + '\n'
        buffer_lines = []
        brace_depth = 0
        try:
            interpreter.run(parse_snippet(source))
        except SpartieError as ex:
            print(f'{ex.name}: {ex}', file=err)
