import argparse
import base64
import logging
import sys

import pandas

from cptree import CPTree, UnknownClass
from itemstore import ItemStore, read_table
from tree_render import draw_tree, render_text

logger = logging.getLogger(__name__)


def patterns_frame(tree, patterns):
    return pandas.DataFrame(
        [
            {
                "class": tree.class_value(p.class_index),
                "items": ",".join(str(item) for item in p.items),
                "support": p.support,
                "class_size": tree.class_size(p.class_index),
            }
            for p in patterns
        ],
        columns=["class", "items", "support", "class_size"],
    )


def build_parser():
    parser = argparse.ArgumentParser(
        prog="subpop",
        description="Mine strongly jumping emerging patterns from a labeled table.",
    )
    parser.add_argument("data", help="csv or xlsx file, one instance per row")
    parser.add_argument(
        "--class-column", required=True, help="column holding the class label"
    )
    parser.add_argument(
        "--items-column",
        default=None,
        help="comma separated items column, all other columns are items if omitted",
    )
    parser.add_argument(
        "--min-support", type=int, default=1, help="minimum count in the target class"
    )
    parser.add_argument(
        "--classes", nargs="*", default=[], help="target classes, all if omitted"
    )
    parser.add_argument("--tree", action="store_true", help="print the cp-tree")
    parser.add_argument("--plot", default=None, help="write the cp-tree as png")
    parser.add_argument(
        "--output", default=None, help="write patterns as csv instead of printing"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        store = ItemStore.from_frame(
            read_table(args.data), args.class_column, items_column=args.items_column
        )
    except (OSError, ValueError) as e:
        parser.error(str(e))

    tree = CPTree(store)
    try:
        patterns = tree.find_patterns(args.min_support, *args.classes)
    except UnknownClass as e:
        parser.error(f"unknown class: {e.args[0]}")

    if args.tree:
        print(render_text(tree))
    if args.plot:
        with open(args.plot, "wb") as f:
            f.write(base64.b64decode(draw_tree(tree)))
        logger.info("tree written to %s", args.plot)

    frame = patterns_frame(tree, patterns)
    if args.output:
        frame.to_csv(args.output, index=False)
        logger.info("%d patterns written to %s", len(frame), args.output)
    else:
        print(frame.to_string(index=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
