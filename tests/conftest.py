import pytest

from itemstore import ItemStore


def make_store(rows, classes=("classA", "classB")):
    return ItemStore(rows, classes=list(classes))


@pytest.fixture
def merge_store():
    # P and Q tie on global count, P wins on name
    return make_store(
        [
            (["P", "Q"], "classA"),
            (["P", "Q"], "classA"),
            (["P"], "classB"),
            (["Q"], "classA"),
        ]
    )


@pytest.fixture
def mixed_store():
    return make_store(
        [
            (["a", "b", "c"], "classA"),
            (["a", "b"], "classA"),
            (["a", "c", "d"], "classA"),
            (["b", "d"], "classB"),
            (["a", "d"], "classB"),
            (["c", "d", "e"], "classB"),
            (["a", "b", "e"], "classA"),
            (["d", "e"], "classB"),
        ]
    )
