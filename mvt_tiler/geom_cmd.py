from enum import IntEnum
from typing import List, Sequence, Tuple

# 3 bits for the command id leave 29 bits for the repeat count
CMD_HDR_LEN_MAX = (1 << 29) - 1


class Command(IntEnum):
    MOVE_TO = 1
    LINE_TO = 2
    CLOSE_PATH = 7


def cmd_hdr(cmd: Command, length: int) -> int:
    return (int(cmd) & 0x7) | (length << 3)


def close_path_cmd_hdr() -> int:
    return cmd_hdr(Command.CLOSE_PATH, 1)


def zigzag_encode(n: int) -> int:
    """Map a signed 32 bit int onto an unsigned one, small magnitudes first."""
    return (n << 1) ^ (n >> 31)


def zigzag_decode(n: int) -> int:
    return (n >> 1) ^ -(n & 1)


def read_commands(buffer: Sequence[int], cursor=None) -> List[Tuple[Command, List[Tuple[int, int]]]]:
    """
    Decode a command buffer into (command, absolute points) tuples.

    Decoding starts at (0, 0) unless a cursor is given; a given cursor is
    advanced so consecutive features of one pass can be read in sequence.
    """
    x, y = (0, 0) if cursor is None else (int(cursor.x), int(cursor.y))

    out = []
    i = 0
    while i < len(buffer):
        hdr = buffer[i]
        i += 1
        cmd = Command(hdr & 0x7)
        count = hdr >> 3

        if cmd == Command.CLOSE_PATH:
            out.append((cmd, []))
            continue

        if i + 2 * count > len(buffer):
            raise ValueError(f"Truncated {cmd.name} run at index {i - 1}")

        pts = []
        for _ in range(count):
            x += zigzag_decode(buffer[i])
            y += zigzag_decode(buffer[i + 1])
            i += 2
            pts.append((x, y))
        out.append((cmd, pts))

    if cursor is not None:
        cursor.set(x, y)
    return out
