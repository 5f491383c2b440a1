import flet

from cptree import CPTree, UnknownClass
from itemstore import ItemStore, read_table
from subpop import patterns_frame
from tree_render import draw_tree


def create(headers):
    side = flet.border.BorderSide(1, flet.Colors.BLACK)
    return flet.DataTable(
        columns=[flet.DataColumn(flet.Text(header)) for header in headers],
        rows=[],
        border=flet.border.all(1, flet.Colors.BLACK),
        border_radius=flet.border_radius.all(8),
        vertical_lines=side,
        horizontal_lines=side,
        heading_row_color=flet.Colors.with_opacity(0.05, flet.Colors.BLACK12),
    )


def read_inputs(path, class_column, items_column, min_support, classes):
    """Validate the form fields, returning (store, min_support, classes)."""
    if not path:
        raise ValueError("No file selected")
    if not class_column:
        raise ValueError("Class column is required")
    try:
        min_support = int(min_support)
    except (TypeError, ValueError):
        raise ValueError(f"Minimum support must be an integer: {min_support}") from None
    classes = [c.strip() for c in (classes or "").split(",") if c.strip()]

    data = read_table(path)
    print(data.head())
    store = ItemStore.from_frame(data, class_column, items_column=items_column or None)
    return store, min_support, classes


def main(page: flet.Page):
    page.title = "SJEP Mining"
    page.theme_mode = flet.ThemeMode.LIGHT
    page.window.maximized = True
    page.vertical_alignment = flet.MainAxisAlignment.START
    page.horizontal_alignment = flet.CrossAxisAlignment.CENTER

    file_path = flet.TextField(label="Path file", read_only=True, width=300)
    class_column_field = flet.TextField(label="Class column", width=200)
    items_column_field = flet.TextField(label="Items column (optional)", width=200)
    min_sup_field = flet.TextField(label="Minimum Support (count)", width=200)
    classes_field = flet.TextField(label="Classes (comma separated)", width=250)
    status = flet.Text("")
    tree_image = flet.Image(width=600, height=400, src_base64="")
    patterns_table = create(["Class", "Items", "Support", "Class Size"])

    def pick_file_result(e: flet.FilePickerResultEvent):
        if e.files:
            file_path.value = e.files[0].path
            page.update()

    def select_file(e):
        file_picker.pick_files(
            allow_multiple=False,
            file_type=flet.FilePickerFileType.CUSTOM,
            allowed_extensions=["csv", "xlsx"],
        )

    file_picker = flet.FilePicker(on_result=pick_file_result)
    page.overlay.append(file_picker)

    def run(e):
        patterns_table.rows.clear()
        status.value = ""

        try:
            store, min_support, classes = read_inputs(
                file_path.value,
                class_column_field.value,
                items_column_field.value,
                min_sup_field.value,
                classes_field.value,
            )
            print("Classes:", store.classes)
            tree = CPTree(store)
            patterns = tree.find_patterns(min_support, *classes)
        except UnknownClass as err:
            status.value = f"Unknown class: {err.args[0]}"
            page.update()
            return
        except (OSError, ValueError) as err:
            status.value = str(err)
            page.update()
            return
        print("Patterns:", patterns)

        tree_image.src_base64 = draw_tree(tree)
        show_patterns(patterns_frame(tree, patterns))
        status.value = f"{len(patterns)} patterns"
        page.update()

    def show_patterns(frame):
        for _, row in frame.iterrows():
            patterns_table.rows.append(
                flet.DataRow(
                    cells=[
                        flet.DataCell(flet.Text(str(row["class"]))),
                        flet.DataCell(flet.Text(str(row["items"]))),
                        flet.DataCell(flet.Text(str(row["support"]))),
                        flet.DataCell(flet.Text(str(row["class_size"]))),
                    ]
                )
            )

    main_content = flet.Column(
        [
            flet.Row(
                [
                    file_path,
                    flet.ElevatedButton("Select File", on_click=select_file),
                    class_column_field,
                    items_column_field,
                    min_sup_field,
                    classes_field,
                    flet.ElevatedButton("Run", on_click=run),
                ],
                alignment=flet.MainAxisAlignment.CENTER,
                wrap=True,
            ),
            status,
            flet.Divider(),
            flet.Row(
                [
                    flet.Text("CP-Tree:"),
                    tree_image,
                ],
                alignment=flet.MainAxisAlignment.CENTER,
            ),
            flet.Divider(),
            flet.Column(
                [
                    flet.Text("Patterns:"),
                    patterns_table,
                ]
            ),
        ],
        scroll=flet.ScrollMode.AUTO,
        expand=True,
        spacing=20,
    )

    page.add(main_content)


def run_app():
    flet.app(target=main)


if __name__ == "__main__":
    run_app()
