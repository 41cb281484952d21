from dungeonpath.dungeon.orientation import move, opposite


def all_nodes(dungeon):
    return [n for path in dungeon.paths.values() for n in path]


def step_direction(a, b):
    """Orientation of the door on ``a`` leading to ``b``, or None when they are not linked."""
    for o, other in a.doors.items():
        if other is b:
            return o
    return None


def assert_doors_consistent(node):
    for o, other in node.doors.items():
        assert other.doors.get(opposite(o)) is node, f"half-linked door {o} on {node!r}"
        assert move(node.position, o) == other.position, f"door {o} on {node!r} skips a cell"


def same_path_reachable(root):
    """Set of node ids reachable from root using only doors between rooms of root's path."""
    seen = {id(root)}
    stack = [root]
    while stack:
        cur = stack.pop()
        for other in cur.doors.values():
            if other.path_id == root.path_id and id(other) not in seen:
                seen.add(id(other))
                stack.append(other)
    return seen
