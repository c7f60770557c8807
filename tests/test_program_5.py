from pathlib import Path

from spartie.interpreter import Interpreter
from spartie.parser import parse_program


EXAMPLE = Path(__file__).resolve().parent.parent / 'examples' / 'program_5.sp'


def test_program_5_conditions(capsys):
    with open(EXAMPLE, 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.run(ast)
    out_lines = capsys.readouterr().out.strip().split('\n')
    assert out_lines == ['teen', 'done']
