"""ASCII dump of a generated dungeon for logs and the CLI.

Rows run from the highest y down. Main path rooms show their index, secondary
rooms a path letter plus index, key rooms a trailing ``*``; empty cells ``-``.
"""
from string import ascii_lowercase


def pad_both(text: str, width: int) -> str:
    spaces = width - len(text)
    left = spaces // 2 + len(text)
    return text.rjust(left).ljust(width)


def path_letters(path_id: int) -> str:
    """Spreadsheet-style name for a secondary path: 1 -> a, 26 -> z, 27 -> aa."""
    letters = ""
    while path_id > 0:
        path_id, rem = divmod(path_id - 1, 26)
        letters = ascii_lowercase[rem] + letters
    return letters


def room_label(node, index: int) -> str:
    if node.path_id == 0:
        label = f"{index:02d}"
    else:
        label = f"{path_letters(node.path_id)}{index}"
    return label + ("*" if node.has_key else "")


def render_ascii(dungeon, padding: int | None = None) -> str:
    if padding is None:
        padding = dungeon.config.debug_padding
    labels = {}
    for path in dungeon.paths.values():
        for index, node in enumerate(path):
            labels[node.position] = room_label(node, index)
    if not labels:
        return ""
    # keep at least one space between neighbouring labels
    padding = max(padding, max(len(label) for label in labels.values()) + 1)
    xs = [p[0] for p in labels]
    ys = [p[1] for p in labels]
    lines = []
    for y in range(max(ys), min(ys) - 1, -1):
        row = []
        for x in range(min(xs), max(xs) + 1):
            row.append(pad_both(labels.get((x, y), "-"), padding))
        lines.append("".join(row).rstrip())
    return "\n".join(lines)


def summary_lines(dungeon):
    xs = [n.position[0] for n in dungeon.nodes]
    ys = [n.position[1] for n in dungeon.nodes]
    return [
        f"Seed : {dungeon.seed}",
        f"Path length : {len(dungeon.main_path)}",
        f"Secondary paths : {len(dungeon.secondary_paths)}",
        f"Min X : {min(xs)}",
        f"Max X : {max(xs)}",
        f"Min Y : {min(ys)}",
        f"Max Y : {max(ys)}",
    ]
