import logging
import math

from pattern import Pattern

logger = logging.getLogger(__name__)


class UnknownClass(KeyError):
    pass


class InconsistentVocabulary(ValueError):
    pass


class Entry:
    def __init__(self, item, item_support, num_classes):
        self.item = item
        self.item_support = item_support
        self.class_counts = [0] * num_classes
        self.child = Node()

    def copy(self):
        # same counts, fresh empty child
        entry = Entry(self.item, self.item_support, 0)
        entry.class_counts = list(self.class_counts)
        return entry

    def increment(self, class_index, count=1):
        self.class_counts[class_index] += count

    def add_class_counts(self, counts):
        for i, count in enumerate(counts):
            self.class_counts[i] += count

    def __repr__(self):
        return f"Entry({self.item}, {self.item_support}, {self.class_counts})"


class Node:
    def __init__(self):
        self.children = {}

    def is_leaf(self):
        return not self.children

    def get_entry(self, item):
        return self.children.get(item)

    def add_entry(self, entry):
        self.children[entry.item] = entry

    def entries(self):
        # sorted() is stable, equal supports keep insertion order
        return sorted(
            self.children.values(), key=lambda entry: entry.item_support, reverse=True
        )

    def merge_with(self, other):
        """Fold the entries of ``other`` into this node, recursively."""
        for other_entry in other.entries():
            entry = self.children.get(other_entry.item)
            if entry is not None:
                entry.add_class_counts(other_entry.class_counts)
            else:
                entry = other_entry.copy()
                self.children[entry.item] = entry
            entry.child.merge_with(other_entry.child)

    def copy(self):
        node = Node()
        for item, entry in self.children.items():
            entry_copy = entry.copy()
            entry_copy.child = entry.child.copy()
            node.children[item] = entry_copy
        return node

    def __len__(self):
        return len(self.children)


class CPTree:
    """Class-Pattern tree over the labeled itemsets of an item store.

    Every entry carries one counter per class. Mining merges each entry's
    subtree into its siblings before testing it, so a pattern's support also
    covers occurrences that continue later in the item ordering.

    The tree is filled once: either by explicit ``insert`` calls, or by
    ``build`` inserting every itemset of the store, which ``find_patterns``
    does on its first call. After the first ``insert`` the store is not
    inserted again. Each mining pass works on a copy of the tree, so the tree
    itself is only ever changed by ``insert``.
    """

    def __init__(self, item_store):
        self.item_store = item_store
        self.classes_index = dict(item_store.classes_index())
        self.index_classes = {
            index: name for name, index in self.classes_index.items()
        }
        self.root = Node()
        self.built = False

    def class_value(self, index):
        try:
            return self.index_classes[index]
        except KeyError:
            raise UnknownClass(index) from None

    def class_index(self, class_value):
        try:
            return self.classes_index[class_value]
        except KeyError:
            raise UnknownClass(class_value) from None

    def class_size(self, class_ref):
        if isinstance(class_ref, str):
            self.class_index(class_ref)
            return self.item_store.class_count(class_ref)
        return self.item_store.class_count(self.class_value(class_ref))

    def _item_support(self, item):
        try:
            support = self.item_store.item_support(item)
        except KeyError:
            raise InconsistentVocabulary(f"no support for item: {item}") from None
        if support is None or math.isnan(support):
            raise InconsistentVocabulary(f"no support for item: {item}")
        return support

    def insert(self, item_set):
        index = self.class_index(item_set.class_value)
        num_classes = len(self.classes_index)

        # look up every missing item first, a failed insert changes nothing
        supports = {}
        node = self.root
        for item in item_set.items:
            entry = node.get_entry(item) if node is not None else None
            if entry is None:
                supports[item] = self._item_support(item)
                node = None
            else:
                node = entry.child

        node = self.root
        for item in item_set.items:
            entry = node.get_entry(item)
            if entry is None:
                entry = Entry(item, supports[item], num_classes)
                node.add_entry(entry)
            entry.increment(index)
            node = entry.child
        self.built = True

    def build(self):
        if self.built:
            return
        self.item_store.for_each(self.insert)
        self.built = True
        logger.info(
            "cp-tree built: %d itemsets, %d root entries",
            len(self.item_store),
            len(self.root),
        )

    def find_patterns(self, min_support, *classes):
        """Mine SJEPs for the given class names or indices, all classes if none."""
        if not classes:
            class_indexes = list(range(len(self.classes_index)))
        else:
            class_indexes = [self._resolve(c) for c in classes]
        return self.find_patterns_by_index(min_support, class_indexes)

    def _resolve(self, class_ref):
        if isinstance(class_ref, str):
            return self.class_index(class_ref)
        if class_ref not in self.index_classes:
            raise UnknownClass(class_ref)
        return class_ref

    def find_patterns_by_index(self, min_support, class_indexes):
        for index in class_indexes:
            if index not in self.index_classes:
                raise UnknownClass(index)

        def is_min(count):
            return count >= min_support

        def is_sjep(count, remaining):
            return is_min(count) and remaining == 0

        self.build()

        patterns = []
        mine_sub_tree(
            self.root.copy(), patterns, Pattern(), is_min, is_sjep, list(class_indexes)
        )
        logger.info(
            "found %d patterns, min support %s, classes %s",
            len(patterns),
            min_support,
            [self.index_classes[i] for i in class_indexes],
        )
        return patterns


def mine_sub_tree(t2, patterns, alpha, is_min, is_sjep, class_indexes):
    """Merge and enumerate ``t2``, appending emitted patterns to ``patterns``.

    The snapshot taken from ``t2.entries()`` holds live entries: merging an
    earlier entry's child into ``t2`` updates the counts seen by later ones.
    Entries added to ``t2`` by a merge are not visited in this pass.
    """
    for entry in t2.entries():
        t1 = entry.child
        t2.merge_with(t1)

        beta = alpha.extend(entry.item)

        counts = entry.class_counts
        total = sum(counts)
        found = False
        for i in class_indexes:
            if is_sjep(counts[i], total - counts[i]):
                patterns.append(Pattern(i, beta.items, counts[i]))
                logger.debug("pattern %s", patterns[-1])
                found = True
                break

        if not found and any(is_min(count) for count in counts):
            mine_sub_tree(t1, patterns, beta, is_min, is_sjep, class_indexes)
