import pytest

from spartie.errors import SpartieError
from spartie.interpreter import run_program


def test_run_program_from_source(capsys):
    interp = run_program('var a = 1; { var a = 2; a = a + 10; print a; } print a;')
    assert capsys.readouterr().out.split() == ['12.0', '1.0']
    assert interp.global_env.get('a') == 1.0


def test_run_program_type_error():
    with pytest.raises(SpartieError) as exc:
        run_program('print 1;\nprint "a" - 1;')
    assert exc.value.name == 'TypeError'
    assert str(exc.value) == 'Invalid type on line 2 : a-1.0'


def test_short_circuit_observed_from_source(capsys):
    run_program('''
        var calls = 0;
        var r = true or (calls = calls + 1);
        var s = false and (calls = calls + 1);
        var t = null or (calls = calls + 1);
        print calls;
        print r;
        print s;
        print t;
    ''')
    assert capsys.readouterr().out.split() == ['1.0', 'true', 'false', '1.0']
