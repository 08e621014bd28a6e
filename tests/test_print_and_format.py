import pytest

from wisp import errors
from wisp.builtin import BUILTINS
from wisp.types import value as v
from wisp.types.atom import Atom
from wisp.types.lambda_fn import Lambda
from wisp.types.quote import Quote
from wisp.types.unit import Unit


def test_print_outputs_display_forms(wisp_eval, capsys):
    ret = wisp_eval("(print \"alpha\" 42 'beta (list 1 \"x\"))")
    assert capsys.readouterr().out == 'alpha 42 beta (1 "x")\n'
    assert ret == [1, "x"]


def test_print_renders_whole_floats_without_fraction(wisp_eval, capsys):
    wisp_eval("(print (+ 1 2.0))")
    assert capsys.readouterr().out == "3\n"


def test_print_with_endl(wisp_eval, capsys):
    wisp_eval('(print (+ "a" endl "b"))')
    assert capsys.readouterr().out == "a\nb\n"


def test_print_requires_an_argument(wisp_eval):
    with pytest.raises(errors.TooFewArgs):
        wisp_eval("(print)")


@pytest.mark.parametrize(
    "source,expected",
    [
        ('(display "hi")', "hi"),
        ('(debug "hi")', '"hi"'),
        ("(display 'sym)", "sym"),
        ("(debug ''sym)", "'sym"),
        ("(display (list 1 2.5 \"s\"))", '(1 2.5 "s")'),
        ("(debug @)", "@"),
        ("(debug (lambda (x) (+ x 1)))", "(lambda (x) (+ x 1))"),
    ],
)
def test_display_and_debug_builtins(wisp_eval, source, expected):
    assert wisp_eval(source) == expected


@pytest.mark.parametrize(
    "value,expected",
    [
        (3.0, "3"),
        (0.1, "0.1"),
        (-2.5, "-2.5"),
        (1e20, "100000000000000000000.0"),
        (1e6, "1000000"),
        (2.5e-7, "0.00000025"),
        (-0.0, "-0.0"),
        (0.0, "0"),
        (3.14159265, "3.14159265"),
        (float("inf"), "inf"),
        ("tab\there", '"tab\\there"'),
        ('say "hi"', '"say \\"hi\\""'),
        ("a\\b", '"a\\\\b"'),
        ([], "()"),
        ([Atom("f"), [1, Unit]], "(f (1 @))"),
        (Quote([Atom("a")]), "'(a)"),
        (Lambda([], 1), "(lambda () 1)"),
    ],
)
def test_debug_rendering(value, expected):
    assert v.debug(value) == expected


def test_builtin_rendering_names_the_builtin():
    assert v.debug(BUILTINS["print"]).startswith("<print at 0x")


def test_debug_rejects_foreign_values():
    with pytest.raises(errors.InternalError):
        v.debug(True)
    with pytest.raises(errors.InternalError):
        v.debug(object())


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(type 1)", "int"),
        ("(type 1.5)", "float"),
        ('(type "s")', "string"),
        ("(type @)", "unit"),
        ("(type 'a)", "atom"),
        ("(type ''a)", "quote"),
        ("(type (list))", "list"),
        ("(type +)", "function"),
        ("(type if)", "function"),
        ("(type (lambda () 1))", "function"),
    ],
)
def test_type_names(wisp_eval, source, expected):
    assert wisp_eval(source) == expected


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(int 3.9)", 3),
        ("(int -3.9)", -3),
        ("(int 7)", 7),
        ("(float 2)", 2.0),
        ("(float 2.5)", 2.5),
    ],
)
def test_casts(wisp_eval, source, expected):
    result = wisp_eval(source)
    assert result == expected
    assert type(result) is type(expected)


@pytest.mark.parametrize("source", ['(int "3")', "(float 'x)", "(int (list))"])
def test_bad_casts(wisp_eval, source):
    with pytest.raises(errors.BadCast):
        wisp_eval(source)
