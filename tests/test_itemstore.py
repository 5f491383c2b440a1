import pandas
import pytest

from itemstore import Item, ItemStore, read_table


def names(item_set):
    return [item.name for item in item_set.items]


def test_itemsets_share_canonical_order():
    store = ItemStore(
        [
            (["c", "a", "b"], "yes"),
            (["b", "a"], "no"),
            (["a"], "yes"),
        ]
    )
    # a=3, b=2, c=1
    assert [names(item_set) for item_set in store] == [
        ["a", "b", "c"],
        ["a", "b"],
        ["a"],
    ]


def test_ties_broken_by_name():
    store = ItemStore([(["y", "x"], "yes")])
    assert names(store.item_sets[0]) == ["x", "y"]


def test_duplicates_dropped():
    store = ItemStore([(["a", "a", "b"], "yes")])
    assert names(store.item_sets[0]) == ["a", "b"]
    assert store.item_support(store.item("a")) == 1.0


def test_item_support_is_frequency():
    store = ItemStore([(["a"], "yes"), (["a", "b"], "no"), (["b"], "no"), ([], "no")])
    assert store.item_support(store.item("a")) == pytest.approx(0.5)
    assert store.item_support(Item("b")) == pytest.approx(0.5)
    with pytest.raises(KeyError):
        store.item_support(Item("z"))


def test_items_are_interned():
    store = ItemStore([(["a"], "yes"), (["a"], "no")])
    assert store.item_sets[0].items[0] is store.item_sets[1].items[0]


def test_classes_default_sorted():
    store = ItemStore([(["a"], "yes"), (["a"], "no"), (["a"], "yes")])
    assert store.num_classes() == 2
    assert store.classes_index() == {"no": 0, "yes": 1}
    assert store.class_count("yes") == 2
    assert store.class_count("no") == 1
    with pytest.raises(KeyError):
        store.class_count("maybe")


def test_explicit_classes_keep_order():
    store = ItemStore([(["a"], "yes")], classes=["yes", "no"])
    assert store.classes_index() == {"yes": 0, "no": 1}
    assert store.class_count("no") == 0


def test_explicit_classes_must_cover_labels():
    with pytest.raises(ValueError):
        ItemStore([(["a"], "yes"), (["a"], "no")], classes=["yes"])


def test_for_each_visits_rows_in_order():
    store = ItemStore([(["a"], "yes"), (["b"], "no")])
    seen = []
    store.for_each(seen.append)
    assert [item_set.class_value for item_set in seen] == ["yes", "no"]
    assert len(store) == 2


def test_from_frame_attribute_values():
    frame = pandas.DataFrame(
        {
            "outlook": ["sunny", "rain", None],
            "windy": [True, False, True],
            "play": ["no", "yes", "yes"],
        }
    )
    store = ItemStore.from_frame(frame, "play")
    assert store.classes == ["no", "yes"]
    assert sorted(store.items) == [
        "outlook=rain",
        "outlook=sunny",
        "windy=False",
        "windy=True",
    ]
    assert names(store.item_sets[2]) == ["windy=True"]


def test_from_frame_items_column():
    frame = pandas.DataFrame(
        {"items": ["milk, bread", "bread,eggs", None], "label": [1, 0, 1]}
    )
    store = ItemStore.from_frame(frame, "label", items_column="items")
    assert store.classes == ["0", "1"]
    assert names(store.item_sets[0]) == ["bread", "milk"]
    assert names(store.item_sets[1]) == ["bread", "eggs"]
    assert names(store.item_sets[2]) == []
    assert store.item_sets[0].class_value == "1"


def test_from_frame_missing_columns():
    frame = pandas.DataFrame({"a": [1], "label": ["x"]})
    with pytest.raises(ValueError):
        ItemStore.from_frame(frame, "class")
    with pytest.raises(ValueError):
        ItemStore.from_frame(frame, "label", items_column="items")


def test_read_table_csv(tmp_path):
    path = tmp_path / "data.csv"
    pandas.DataFrame({"items": ["a,b"], "label": ["x"]}).to_csv(path, index=False)
    frame = read_table(path)
    assert list(frame.columns) == ["items", "label"]
    assert frame.loc[0, "items"] == "a,b"
