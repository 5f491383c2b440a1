from itemstore import Item
from pattern import Pattern


def test_extend_returns_new_pattern():
    alpha = Pattern()
    beta = alpha.extend(Item("a"))
    gamma = beta.extend(Item("b"))
    assert alpha.items == ()
    assert beta.items == (Item("a"),)
    assert gamma.items == (Item("a"), Item("b"))
    assert len(gamma) == 2


def test_equality_and_hash():
    a = Pattern(0, [Item("x"), Item("y")], 3)
    b = Pattern(0, (Item("x"), Item("y")), 3)
    assert a == b
    assert hash(a) == hash(b)
    assert a != Pattern(1, [Item("x"), Item("y")], 3)
    assert a != Pattern(0, [Item("y"), Item("x")], 3)
    assert a != Pattern(0, [Item("x"), Item("y")], 2)
    assert len({a, b}) == 1


def test_str():
    p = Pattern(1, [Item("x")], 4)
    assert str(p) == "class_index=1. items=['x']. support=4."
    assert repr(p) == "Pattern(1, [Item(x)], 4)"
