import json
from pathlib import Path

import pytest

from spartie.__main__ import main
from spartie.errors import ExitCode
from spartie.interpreter import Interpreter
from spartie.repl import count_braces_delta, repl


EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def write_program(tmp_path, source, name='prog.sp'):
    path = tmp_path / name
    path.write_text(source, encoding='utf-8')
    return str(path)


def test_run_file(capsys):
    assert main([str(EXAMPLES / 'program_1.sp')]) == ExitCode.SUCCESS
    assert capsys.readouterr().out == 'Hello World!!\n'


def test_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / 'nope.sp')]) == ExitCode.FILE_ERROR
    assert 'not found' in capsys.readouterr().err


def test_syntax_error_status(tmp_path, capsys):
    path = write_program(tmp_path, 'print ;')
    assert main([path]) == ExitCode.SYNTAX_ERROR
    assert 'SyntaxError' in capsys.readouterr().err


def test_runtime_error_status(capsys):
    assert main([str(EXAMPLES / 'program_6.sp')]) == ExitCode.INTERPRET_ERROR
    captured = capsys.readouterr()
    assert captured.out == 'before\n'
    assert 'Undefined variable: y' in captured.err


def test_strict_flag(tmp_path, capsys):
    path = write_program(tmp_path, 'print ghost;')
    assert main([path]) == ExitCode.SUCCESS
    assert capsys.readouterr().out == 'null\n'
    assert main(['--strict', path]) == ExitCode.INTERPRET_ERROR
    assert 'Undefined variable: ghost' in capsys.readouterr().err


def test_emit_and_run_ast(tmp_path, capsys):
    path = write_program(tmp_path, 'var a = 2; print a * 3;')
    assert main(['--emit-ast', path]) == ExitCode.SUCCESS
    ast_path = capsys.readouterr().out.strip()
    assert ast_path.endswith('prog.sp.ast.json')
    with open(ast_path, 'r', encoding='utf-8') as f:
        assert json.load(f)['type'] == 'Program'
    assert main(['--ast', ast_path]) == ExitCode.SUCCESS
    assert capsys.readouterr().out == '6.0\n'


def test_invalid_ast_file(tmp_path, capsys):
    path = write_program(tmp_path, '{"type": "Nope"}', name='bad.ast.json')
    assert main(['--ast', path]) == ExitCode.FILE_ERROR
    assert 'invalid AST file' in capsys.readouterr().err


def test_debug_flag_writes_trace(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    path = write_program(tmp_path, 'var a = 1;')
    assert main(['-vv', path]) == ExitCode.SUCCESS
    assert 'declare a = 1.0' in (tmp_path / 'debug.txt').read_text(encoding='utf-8')


def feed(lines):
    it = iter(lines)

    def input_fn(prompt=''):
        try:
            return next(it)
        except StopIteration:
            raise EOFError
    return input_fn


def test_repl_keeps_state_and_recovers(capsys):
    interp = Interpreter()
    repl(interp, feed([
        'var x = 2;',
        'ghost = 1;',
        'x + 5',
        '{',
        '  var x = "inner";',
        '  print x;',
        '}',
        'print x;',
        ':q',
        'print "not reached";',
    ]))
    captured = capsys.readouterr()
    assert captured.out.split('\n')[:-1] == ['7.0', 'inner', '2.0']
    assert 'Undefined variable: ghost' in captured.err
    assert interp.current_env is interp.global_env


def test_repl_reports_syntax_errors(capsys):
    repl(Interpreter(), feed(['print (1;', 'print 1;']))
    captured = capsys.readouterr()
    assert 'SyntaxError' in captured.err
    assert captured.out == '1.0\n'


def test_count_braces_delta():
    assert count_braces_delta('{ {') == 2
    assert count_braces_delta('}') == -1
    assert count_braces_delta('print "{";') == 0
    assert count_braces_delta('x = 1; // {') == 0


def test_usage_error_exits():
    with pytest.raises(SystemExit):
        main(['--emit-ast', 'a.sp', '--ast', 'b.json'])


def test_directory_is_a_file_error(tmp_path, capsys):
    assert main([str(tmp_path)]) == ExitCode.FILE_ERROR
    assert 'cannot read' in capsys.readouterr().err


def test_undecodable_file_is_a_file_error(tmp_path, capsys):
    path = tmp_path / 'latin.sp'
    path.write_bytes(b'print "\xff";')
    assert main([str(path)]) == ExitCode.FILE_ERROR
    assert 'cannot read' in capsys.readouterr().err


@pytest.mark.parametrize('statement', [
    {'type': 'Literal', 'value': 1},
    {'type': 'PrintStmt', 'expression': {'type': 'Literal', 'value': int('9' * 400)}},
    {'type': 'PrintStmt', 'expression': {'type': 'Literal', 'value': [1, 2]}},
])
def test_malformed_ast_is_a_file_error(tmp_path, capsys, statement):
    path = write_program(tmp_path, json.dumps({'type': 'Program', 'statements': [statement]}), name='bad.ast.json')
    assert main(['--ast', path]) == ExitCode.FILE_ERROR
    captured = capsys.readouterr()
    assert captured.out == ''
    assert 'invalid AST file' in captured.err


def test_repl_reports_unclosed_block_at_eof(capsys):
    interp = Interpreter()
    repl(interp, feed(['{', '  print 1;']))
    captured = capsys.readouterr()
    assert captured.out == ''
    assert 'incomplete input' in captured.err
