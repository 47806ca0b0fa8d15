from .geom_cmd import zigzag_encode


class Cursor:
    """
    MVT pen position for one layer encoding pass.

    Stores the full precision of the last emitted coordinate; deltas and
    comparisons only ever look at the truncated int values.
    """

    __slots__ = ("x", "y")

    def __init__(self, x=0.0, y=0.0):
        self.x = x
        self.y = y

    def set(self, x, y):
        self.x = x
        self.y = y

    def copy(self):
        return Cursor(self.x, self.y)

    def restore(self, other):
        self.x = other.x
        self.y = other.y

    def __eq__(self, other):
        if not isinstance(other, Cursor):
            return NotImplemented
        return self.x == other.x and self.y == other.y

    def __repr__(self):
        return f"Cursor({self.x!r}, {self.y!r})"


def move_cursor(cursor, geom_cmds, x, y):
    """Append zigzag deltas from cursor to (x, y), then move the cursor there."""
    geom_cmds.append(zigzag_encode(int(x) - int(cursor.x)))
    geom_cmds.append(zigzag_encode(int(y) - int(cursor.y)))
    cursor.set(x, y)


def equal_as_ints(cursor, x, y):
    return int(cursor.x) == int(x) and int(cursor.y) == int(y)
