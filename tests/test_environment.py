import pytest

from wisp import errors
from wisp.builtin import BUILTINS
from wisp.types.atom import Atom
from wisp.types.builtin import Builtin
from wisp.types.environment import Environment, is_reserved


def test_set_and_get():
    env = Environment()
    env.set("x", 1)
    assert env.get("x") == 1
    assert env.has("x")
    assert not env.has("y")


def test_missing_name_raises_with_atom_and_scope():
    env = Environment()
    env.set("a", 1)
    with pytest.raises(errors.AtomNotDefined) as info:
        env.get("missing")
    assert info.value.value == Atom("missing")
    assert info.value.scope == {"a": 1}


def test_lookup_walks_outer_frames():
    root = Environment()
    root.set("x", 1)
    middle = root.child()
    leaf = middle.child()
    assert leaf.get("x") == 1
    assert leaf.has("x")


def test_set_writes_local_frame_only():
    root = Environment()
    root.set("x", 1)
    inner = root.child()
    inner.set("x", 2)
    assert inner.get("x") == 2
    assert root.get("x") == 1


def test_builtins_resolve_before_bindings():
    env = Environment()
    env.set("+", 99)
    assert isinstance(env.get("+"), Builtin)
    assert env.get("endl") == "\n"
    assert env.has("print")


def test_is_reserved():
    assert is_reserved("define")
    assert is_reserved("endl")
    assert not is_reserved("args")
    assert not is_reserved("my-var")


def test_builtin_table_is_read_only():
    with pytest.raises(TypeError):
        BUILTINS["+"] = 1


def test_combine_keeps_existing_bindings():
    target = Environment()
    target.set("a", 1)
    target.set("b", 2)
    source = Environment()
    source.set("b", 20)
    source.set("c", 30)
    target.combine(source)
    assert target.vars == {"a": 1, "b": 2, "c": 30}
    assert source.vars == {"b": 20, "c": 30}


def test_snapshot_is_a_copy():
    env = Environment()
    env.set("x", 1)
    snap = env.snapshot()
    env.set("x", 2)
    assert snap == {"x": 1}


def test_initial_bindings_are_copied():
    bindings = {"x": 1}
    env = Environment(bindings=bindings)
    env.set("x", 2)
    assert bindings == {"x": 1}


def test_str_renders_local_frame():
    env = Environment()
    env.set("b", "two")
    env.set("a", 1)
    assert str(env) == "{ 'a' : 1, 'b' : \"two\", }"
    assert str(Environment()) == "{ }"


def test_repr_shows_chain():
    root = Environment()
    root.set("x", 1)
    assert repr(root.child()) == "<Environment chain: { } -> { 'x' : 1, }>"
