import base64
from io import BytesIO

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plot  # noqa: E402
from matplotlib.colors import to_rgba  # noqa: E402
from matplotlib.lines import Line2D  # noqa: E402


def entry_label(tree, entry):
    counts = ", ".join(
        f"{tree.class_value(i)}={count}"
        for i, count in enumerate(entry.class_counts)
    )
    return f"{entry.item} ({entry.item_support:.3f}) [{counts}]"


def render_text(tree):
    lines = ["CPTree"]

    def walk(node, indent):
        entries = node.entries()
        for i, entry in enumerate(entries):
            last = i == len(entries) - 1
            connector = "└── " if last else "├── "
            lines.append(indent + connector + entry_label(tree, entry))
            walk(entry.child, indent + ("    " if last else "│   "))

    walk(tree.root, "")
    return "\n".join(lines)


def get_tree_nodes(tree, node=None, x=0, y=1000, level=0, positions=None, edges=None):
    if positions is None:
        positions = []
    if edges is None:
        edges = []
    if node is None:
        node = tree.root
        positions.append({"item": "null", "counts": [], "x": x, "y": y, "level": level})
    child_x = x - 100 * (len(node) - 1) / 2  # Center children
    for entry in node.entries():
        child_pos = {
            "item": str(entry.item),
            "counts": list(entry.class_counts),
            "x": int(child_x),
            "y": y - 100,
            "level": level + 1,
        }
        positions.append(child_pos)
        edges.append({"from": (x, y), "to": (child_pos["x"], child_pos["y"])})
        get_tree_nodes(
            tree, entry.child, int(child_x), y - 100, level + 1, positions, edges
        )
        child_x += 100
    return positions, edges


def node_color(counts):
    """Class colour for an entry seen in one class only, grey when mixed."""
    classes = [i for i, count in enumerate(counts) if count]
    if len(classes) == 1:
        return matplotlib.colormaps["tab10"](classes[0] % 10)
    return to_rgba("lightgrey")


def draw_tree(tree):
    fig, ax = plot.subplots(figsize=(6, 4))
    positions, edges = get_tree_nodes(tree)
    if len(positions) <= 1:
        ax.text(0.5, 0.5, "No tree to visualize", ha="center", va="center", fontsize=12)
    else:
        for e in edges:
            ax.annotate(
                "",
                xy=e["to"],
                xytext=e["from"],
                arrowprops={"arrowstyle": "-|>", "color": "black"},
                zorder=1,
            )
        ax.scatter(
            [p["x"] for p in positions],
            [p["y"] for p in positions],
            s=800,
            c=[to_rgba("white")] + [node_color(p["counts"]) for p in positions[1:]],
            edgecolors="black",
            zorder=2,
        )
        for p in positions:
            counts = "/".join(str(count) for count in p["counts"])
            label = f"{p['item']}\n{counts}" if counts else p["item"]
            ax.text(p["x"], p["y"], label, ha="center", va="center", zorder=3)
        handles = [
            Line2D([], [], marker="o", linestyle="", color=node_color([0] * i + [1]))
            for i in range(len(tree.classes_index))
        ]
        ax.legend(handles, list(tree.classes_index), loc="upper right", fontsize=8)
        ax.margins(0.2)
    ax.axis("off")

    buf = BytesIO()
    fig.savefig(buf, format="png", bbox_inches="tight")
    plot.close(fig)
    return base64.b64encode(buf.getvalue()).decode("utf-8")
