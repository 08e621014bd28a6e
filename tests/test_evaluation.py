import pytest

from wisp import errors
from wisp.evaluation.evaluator import evaluate
from wisp.interpreter import Interpreter
from wisp.types.atom import Atom
from wisp.types.builtin import Builtin
from wisp.types.lambda_fn import Lambda
from wisp.types.quote import Quote
from wisp.types.unit import Unit


# -----------------------------------------------------
# Direct evaluation of values
# -----------------------------------------------------

def test_self_evaluating_literals(env):
    assert evaluate(1, env) == 1
    assert evaluate(3.14, env) == 3.14
    assert evaluate("hello", env) == "hello"
    assert evaluate(Unit, env) is Unit


def test_quote_returns_child_unevaluated(env):
    assert evaluate(Quote([Atom("+"), 1, 2]), env) == [Atom("+"), 1, 2]


def test_atom_lookup(env):
    env.set("x", 42)
    assert evaluate(Atom("x"), env) == 42
    with pytest.raises(errors.AtomNotDefined):
        evaluate(Atom("z"), env)


def test_builtin_atoms_resolve_to_builtins(env):
    plus = evaluate(Atom("+"), env)
    assert isinstance(plus, Builtin)
    assert plus.name == "+"
    assert not plus.special
    assert evaluate(Atom("if"), env).special


def test_call_form(env):
    assert evaluate([Atom("+"), 1, 2], env) == 3


def test_empty_list_is_an_error(env):
    with pytest.raises(errors.EvalEmptyList):
        evaluate([], env)


def test_calling_a_non_function(wisp_eval):
    with pytest.raises(errors.CallNonFunction):
        wisp_eval("(1 2)")
    with pytest.raises(errors.CallNonFunction):
        wisp_eval('("f")')


def test_head_position_is_evaluated(wisp_eval):
    assert wisp_eval("((lambda (x) (* x 2)) 21)") == 42


# -----------------------------------------------------
# Programs
# -----------------------------------------------------

def test_factorial(wisp_eval):
    wisp_eval("(defun fact (n) (if (<= n 1) 1 (* n (fact (- n 1)))))")
    assert wisp_eval("(fact 5)") == 120


def test_program_returns_last_value(wisp_eval):
    assert wisp_eval("(define a 1) (define b 2) (+ a b)") == 3


def test_empty_program_is_unit(wisp_eval):
    assert wisp_eval("") is Unit
    assert wisp_eval("; just a comment") is Unit


def test_map_squares(wisp_eval):
    assert wisp_eval("(map (lambda (x) (* x x)) (range 0 4))") == [0, 1, 4, 9]


def test_closure_over_parameter(wisp_eval):
    wisp_eval("(defun adder (n) (lambda (x) (+ x n)))")
    assert wisp_eval("((adder 3) 4)") == 7
    assert wisp_eval("(map (adder 10) (list 1 2))") == [11, 12]


def test_closure_captures_a_snapshot(wisp_eval):
    wisp_eval("(define x 5) (define f (lambda () x)) (define x 10)")
    assert wisp_eval("(f)") == 5
    assert wisp_eval("x") == 10


def test_uncaptured_names_resolve_in_the_caller(wisp_eval):
    # y is unbound when g is created, so it is looked up at call time
    wisp_eval("(defun g () y)")
    wisp_eval("(define y 3)")
    assert wisp_eval("(g)") == 3


def test_lambda_captures_only_referenced_bindings(wisp_eval):
    fn = wisp_eval("(define a 1) (define b 2) (lambda (x) (+ x a))")
    assert isinstance(fn, Lambda)
    assert fn.captured == {"a": 1}


def test_defining_inside_a_call_does_not_leak(wisp_eval):
    wisp_eval("(defun setter () (define leaked 1))")
    assert wisp_eval("(setter)") == 1
    with pytest.raises(errors.AtomNotDefined):
        wisp_eval("leaked")


@pytest.mark.parametrize(
    "source,error",
    [
        ("((lambda (x y) x) 1)", errors.TooFewArgs),
        ("((lambda (x y) x) 1 2 3)", errors.TooManyArgs),
        ("((lambda () 1) 1)", errors.TooManyArgs),
    ],
)
def test_lambda_arity_is_exact(wisp_eval, source, error):
    with pytest.raises(error):
        wisp_eval(source)


def test_builtins_cannot_be_redefined(wisp_eval):
    wisp_eval("(define + 5)")
    assert wisp_eval("(+ 1 2)") == 3
    wisp_eval("(defun if (a b c) a)")
    assert wisp_eval("(if 0 1 2)") == 2


def test_eval_builtin(wisp_eval):
    assert wisp_eval("(eval '(+ 1 2))") == 3
    assert wisp_eval('(eval (head (parse "(* 2 3)")))') == 6
    assert wisp_eval("(define form (list '+ 1 1)) (eval form)") == 2


def test_parse_builtin(wisp_eval):
    assert wisp_eval('(parse "1 (a 2)")') == [1, [Atom("a"), 2]]
    with pytest.raises(errors.InvalidArgument):
        wisp_eval("(parse 1)")


def test_endl_constant(wisp_eval):
    assert wisp_eval("endl") == "\n"


def test_args_binding():
    interp = Interpreter(argv=["one", "two"])
    assert interp.eval("args") == ["one", "two"]
    assert interp.eval("(len args)") == 2
    assert Interpreter().eval("args") == []


def test_interpreter_keeps_state_between_calls():
    interp = Interpreter()
    interp.eval("(defun sq (x) (* x x))")
    assert interp.eval("(sq 9)") == 81


def test_interpreter_runs_files(tmp_path):
    path = tmp_path / "prog.wisp"
    path.write_text("(define n 4)\n(* n n)\n", encoding="utf-8")
    assert Interpreter().eval_file(str(path)) == 16
