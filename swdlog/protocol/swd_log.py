# Ref: Digilent WaveForms Reference Manual, Logic Analyzer, SWD protocol export

import re
import enum
import logging
from dataclasses import dataclass


__all__ = ["Access", "Direction", "TransactionRecord", "parse_line"]


logger = logging.getLogger(__name__)


class Access(enum.Enum):
    DP = "DP"
    AP = "AP"


class Direction(enum.Enum):
    WRITE = "WR"
    READ  = "RD"


@dataclass(frozen=True)
class TransactionRecord:
    """
    A single SWD transaction as summarized by the capture tool.

    :attr address_2_3:
        Value of the A[3:2] request bits; the register offset within a bank is
        ``address_2_3 << 2``.
    :attr ack:
        Acknowledgement code as printed in the log. It is carried along but never interpreted.
    """
    access:      Access
    direction:   Direction
    address_2_3: int
    ack:         int
    data:        int

    def __post_init__(self):
        if self.address_2_3 not in range(4):
            raise ValueError("A[3:2] must be in range 0..3, got %d" % self.address_2_3)
        if self.ack not in range(0x100):
            raise ValueError("ACK must be in range 0..255, got %d" % self.ack)
        if self.data not in range(1 << 32):
            raise ValueError("data must be a 32-bit value, got %#x" % self.data)

    @property
    def address(self):
        return self.address_2_3 << 2


# Each token may be preceded by any amount of horizontal whitespace, and is matched at
# the position where the previous one ended. Text after the data token is ignored.
_grammar = tuple((name, re.compile(r"[ \t]*" + src, re.A), act) for name, src, act in (
    ("access",
     r"(AP|DP)",
     lambda m: Access(m[1])),
    ("direction",
     r"(WR|RD)",
     lambda m: Direction(m[1])),
    ("address_2_3",
     r"A:([0-9])",
     lambda m: int(m[1])),
    ("ack",
     r"ACK:([0-9]+)",
     lambda m: int(m[1])),
    ("data",
     r"OK Data:h([0-9A-Fa-f]+)",
     lambda m: int(m[1], 16)),
))


def parse_line(line):
    """
    Parse one line of a WaveForms SWD log, e.g. ``AP RD A:1 ACK:1 OK Data:h61000003``.

    Returns a :class:`TransactionRecord`, or ``None`` if the line is not a transaction line
    (blank lines, headers, non-OK responses, and anything else that does not match).
    """
    matches  = []
    position = 0
    for name, token_re, action in _grammar:
        match = token_re.match(line, position)
        if match is None:
            return None
        matches.append((name, action, match))
        position = match.end()

    # Decimal conversion of an overlong digit string raises ValueError too.
    try:
        return TransactionRecord(**{name: action(match) for name, action, match in matches})
    except ValueError as e:
        logger.trace("SWD: rejecting %r: %s", line, e)
        return None


if __name__ == "__main__":
    import sys
    with open(sys.argv[1]) as f:
        for line in f:
            print(parse_line(line))
