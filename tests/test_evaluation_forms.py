import pytest

from wisp import errors
from wisp.types.atom import Atom
from wisp.types.lambda_fn import Lambda
from wisp.types.unit import Unit


# ------------------ if ------------------

@pytest.mark.parametrize(
    "source,expected",
    [
        ("(if 1 'yes 'no)", Atom("yes")),
        ("(if 0 'yes 'no)", Atom("no")),
        ("(if 0.0 'yes 'no)", Atom("no")),
        ('(if "" \'yes \'no)', Atom("yes")),
        ("(if @ 'yes 'no)", Atom("yes")),
        ("(if (list) 'yes 'no)", Atom("yes")),
        ("(if (< 1 2) (+ 1 1) (undefined))", 2),
    ],
)
def test_if(wisp_eval, source, expected):
    assert wisp_eval(source) == expected


def test_if_requires_three_arguments(wisp_eval):
    with pytest.raises(errors.TooFewArgs):
        wisp_eval("(if 1 2)")
    with pytest.raises(errors.TooManyArgs):
        wisp_eval("(if 1 2 3 4)")


# ------------------ define / defun / lambda ------------------

def test_define_returns_value_and_binds(wisp_eval):
    assert wisp_eval("(define x (+ 2 3))") == 5
    assert wisp_eval("x") == 5


def test_define_uses_literal_name(wisp_eval):
    wisp_eval("(define y 1)")
    # The name is not evaluated: this binds `y` again rather than `1`
    wisp_eval("(define y 2)")
    assert wisp_eval("y") == 2


def test_define_arity(wisp_eval):
    with pytest.raises(errors.TooFewArgs):
        wisp_eval("(define x)")
    with pytest.raises(errors.TooManyArgs):
        wisp_eval("(define x 1 2)")


def test_defun_returns_lambda(wisp_eval):
    fn = wisp_eval("(defun inc (x) (+ x 1))")
    assert isinstance(fn, Lambda)
    assert fn.params == [Atom("x")]
    assert wisp_eval("(inc 41)") == 42


@pytest.mark.parametrize(
    "source,error",
    [
        ("(lambda x x)", errors.InvalidLambda),
        ("(lambda (1) 1)", errors.InvalidLambda),
        ('(lambda ("a") 1)', errors.InvalidLambda),
        ("(lambda (x))", errors.TooFewArgs),
        ("(lambda (x) x x)", errors.TooManyArgs),
        ("(defun f x x)", errors.InvalidLambda),
        ("(defun f (x))", errors.TooFewArgs),
    ],
)
def test_invalid_lambdas(wisp_eval, source, error):
    with pytest.raises(error):
        wisp_eval(source)


# ------------------ do / scope ------------------

def test_do_runs_in_current_scope(wisp_eval):
    assert wisp_eval("(do (define a 1) (define b 2) (+ a b))") == 3
    assert wisp_eval("a") == 1


def test_empty_do_is_unit(wisp_eval):
    assert wisp_eval("(do)") is Unit


def test_scope_does_not_leak(wisp_eval):
    assert wisp_eval("(define x 5) (scope (define x 10) x)") == 10
    assert wisp_eval("x") == 5


def test_scope_sees_outer_bindings(wisp_eval):
    assert wisp_eval("(define outer 7) (scope (+ outer 1))") == 8


# ------------------ quote ------------------

def test_quote_form_wraps_arguments(wisp_eval):
    assert wisp_eval("(quote a (b c) 1)") == [Atom("a"), [Atom("b"), Atom("c")], 1]
    assert wisp_eval("(quote)") == []


def test_quote_literal(wisp_eval):
    assert wisp_eval("'(1 2 x)") == [1, 2, Atom("x")]
    assert wisp_eval("'sym") == Atom("sym")


# ------------------ for / while ------------------

def test_for_accumulates(wisp_eval):
    source = "(define total 0) (for x (range 0 5) (define total (+ total x))) total"
    assert wisp_eval(source) == 10


def test_for_returns_last_iteration_value(wisp_eval):
    assert wisp_eval("(for x (list 1 2 3) (print x) (* x 10))") == 30


def test_for_binds_in_current_scope(wisp_eval):
    wisp_eval("(for item (list 'a 'b) item)")
    assert wisp_eval("item") == Atom("b")


def test_for_over_empty_list_is_unit(wisp_eval):
    assert wisp_eval("(for x (list) x)") is Unit


def test_for_errors(wisp_eval):
    with pytest.raises(errors.InvalidArgument):
        wisp_eval("(for 1 (list 1) 1)")
    with pytest.raises(errors.BadCast):
        wisp_eval("(for x 5 x)")
    with pytest.raises(errors.TooFewArgs):
        wisp_eval("(for x)")


def test_while_loops_until_false(wisp_eval):
    assert wisp_eval("(define i 0) (while (< i 5) (define i (+ i 1))) i") == 5


def test_while_returns_last_body_value(wisp_eval):
    assert wisp_eval("(define i 0) (while (< i 3) (define i (+ i 1)) (* i 2))") == 6


def test_while_never_entered_is_unit(wisp_eval):
    assert wisp_eval("(while 0 1)") is Unit


def test_while_requires_condition(wisp_eval):
    with pytest.raises(errors.TooFewArgs):
        wisp_eval("(while)")
