class Pattern:
    def __init__(self, class_index=None, items=(), support=0):
        self._class_index = class_index
        self._items = tuple(items)
        self._support = support

    @property
    def class_index(self):
        return self._class_index

    @property
    def items(self):
        return self._items

    @property
    def support(self):
        return self._support

    def extend(self, item):
        return Pattern(self._class_index, self._items + (item,), self._support)

    def __len__(self):
        return len(self._items)

    def __eq__(self, other):
        return (
            isinstance(other, Pattern)
            and self._class_index == other._class_index
            and self._items == other._items
            and self._support == other._support
        )

    def __hash__(self):
        return hash((self._class_index, self._items, self._support))

    def __str__(self):
        items = [str(item) for item in self._items]
        return (
            f"class_index={self._class_index}. items={items}. support={self._support}."
        )

    def __repr__(self):
        return f"Pattern({self._class_index}, {list(self._items)}, {self._support})"
