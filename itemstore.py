import logging
from collections import Counter
from pathlib import Path

import pandas

logger = logging.getLogger(__name__)


class Item:
    def __init__(self, name):
        self.name = name

    def __eq__(self, other):
        return isinstance(other, Item) and self.name == other.name

    def __hash__(self):
        return hash(self.name)

    def __lt__(self, other):
        return self.name < other.name

    def __str__(self):
        return self.name

    def __repr__(self):
        return f"Item({self.name})"


class ItemSet:
    def __init__(self, items, class_value):
        self._items = tuple(items)
        self._class_value = class_value

    @property
    def items(self):
        return self._items

    @property
    def class_value(self):
        return self._class_value

    def __len__(self):
        return len(self._items)

    def __repr__(self):
        return f"ItemSet({list(self._items)}, {self._class_value})"


class ItemStore:
    """Vocabulary of a labeled dataset.

    Interns one Item per name, counts global item and class frequencies and
    re-orders every itemset by descending item count (ties by name) so that
    all itemsets share one canonical ordering.
    """

    def __init__(self, rows, classes=None):
        raw = []
        for names, class_value in rows:
            # drop duplicates, keep first occurrence
            raw.append((list(dict.fromkeys(names)), str(class_value)))

        self.items = {}
        item_counts = Counter()
        for names, _ in raw:
            for name in names:
                if name not in self.items:
                    self.items[name] = Item(name)
                item_counts[name] += 1

        self.total = len(raw)
        self.class_counts = Counter(class_value for _, class_value in raw)
        if classes is None:
            classes = sorted(self.class_counts)
        else:
            classes = [str(c) for c in classes]
            missing = set(self.class_counts) - set(classes)
            if missing:
                raise ValueError(f"labels missing from classes: {sorted(missing)}")
        self.classes = list(classes)

        self.item_counts = {
            self.items[name]: count for name, count in item_counts.items()
        }
        order = sorted(item_counts, key=lambda x: (-item_counts[x], x))
        rank = {name: i for i, name in enumerate(order)}

        self.item_sets = [
            ItemSet(
                [self.items[name] for name in sorted(names, key=rank.get)],
                class_value,
            )
            for names, class_value in raw
        ]
        logger.info(
            "item store: %d itemsets, %d items, %d classes",
            self.total,
            len(self.items),
            len(self.classes),
        )

    @classmethod
    def from_frame(cls, frame, class_column, items_column=None, classes=None):
        if class_column not in frame.columns:
            raise ValueError(f"unknown class column: {class_column}")
        if items_column is not None and items_column not in frame.columns:
            raise ValueError(f"unknown items column: {items_column}")

        rows = []
        for _, row in frame.iterrows():
            if items_column is not None:
                # horizontal basket format, "a,b,c"
                cell = row[items_column]
                names = [] if pandas.isna(cell) else str(cell).split(",")
                names = [name.strip() for name in names if name.strip()]
            else:
                names = [
                    f"{attr}={value}"
                    for attr, value in row.items()
                    if attr != class_column and not pandas.isna(value)
                ]
            rows.append((names, row[class_column]))
        return cls(rows, classes=classes)

    def num_classes(self):
        return len(self.classes)

    def classes_index(self):
        return {name: index for index, name in enumerate(self.classes)}

    def class_count(self, class_value):
        if class_value not in self.classes:
            raise KeyError(class_value)
        return self.class_counts.get(class_value, 0)

    def item(self, name):
        return self.items[name]

    def item_support(self, item):
        return self.item_counts[item] / self.total

    def for_each(self, callback):
        for item_set in self.item_sets:
            callback(item_set)

    def __iter__(self):
        return iter(self.item_sets)

    def __len__(self):
        return self.total


def read_table(path):
    path = Path(path)
    if path.suffix.lower() in (".xlsx", ".xls"):
        return pandas.read_excel(path)
    return pandas.read_csv(path)
