from monkey.types.environment import Environment
from monkey.types.objects import Integer


def test_get_missing_returns_none():
    env = Environment()
    assert env.get("nope") is None
    assert "nope" not in env


def test_set_returns_value_and_binds_locally():
    env = Environment()
    value = Integer(1)
    assert env.set("x", value) is value
    assert env.get("x") is value
    assert "x" in env


def test_lookup_follows_outer_chain():
    root = Environment()
    root.set("x", Integer(1))
    middle = Environment.enclosed(root)
    inner = Environment.enclosed(middle)
    assert inner.outer is middle
    assert inner.get("x").value == 1


def test_inner_set_shadows_outer():
    outer = Environment()
    outer.set("x", Integer(1))
    inner = Environment.enclosed(outer)
    inner.set("x", Integer(2))
    assert inner.get("x").value == 2
    assert outer.get("x").value == 1


def test_frames_can_be_shared():
    root = Environment()
    a = Environment.enclosed(root)
    b = Environment.enclosed(root)
    root.set("shared", Integer(3))
    assert a.get("shared") is b.get("shared")


def test_string_rendering():
    root = Environment()
    root.set("x", Integer(1))
    inner = Environment.enclosed(root)
    inner.set("y", Integer(2))
    assert str(root) == "{x: 1}"
    assert str(inner) == "{y: 2} -> ..."
    assert repr(inner) == "<Environment chain: {y: 2} -> {x: 1}>"
