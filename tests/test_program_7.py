from pathlib import Path

from spartie.interpreter import Interpreter
from spartie.parser import parse_program


EXAMPLE = Path(__file__).resolve().parent.parent / 'examples' / 'program_7.sp'


def test_program_7_sum(capsys):
    with open(EXAMPLE, 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.run(ast)
    assert capsys.readouterr().out.strip() == '5050.0'
    assert interp.global_env.get('i') == 101.0
