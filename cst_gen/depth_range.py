import re
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Tuple

MAX_DEPTH = sys.maxsize

INCLUSIVE_SEPARATOR = "..="
EXCLUSIVE_SEPARATOR = ".."

_DEPTH_PATTERN = re.compile(r"[0-9]+")


class DepthRangeError(ValueError):
    pass


class EndpointKind(str, Enum):
    INCLUSIVE = "inclusive"
    EXCLUSIVE = "exclusive"


@dataclass(frozen=True)
class Endpoint:
    kind: EndpointKind
    value: int

    @classmethod
    def inclusive(cls, value: int) -> "Endpoint":
        return cls(EndpointKind.INCLUSIVE, value)

    @classmethod
    def exclusive(cls, value: int) -> "Endpoint":
        return cls(EndpointKind.EXCLUSIVE, value)

    @property
    def is_inclusive(self) -> bool:
        return self.kind is EndpointKind.INCLUSIVE

    def admits_from_below(self, depth: int) -> bool:
        """Check ``depth`` against this endpoint used as a range start."""
        if self.is_inclusive:
            return depth >= self.value
        return depth > self.value

    def admits_from_above(self, depth: int) -> bool:
        """Check ``depth`` against this endpoint used as a range end."""
        if self.is_inclusive:
            return depth <= self.value
        return depth < self.value


@dataclass(frozen=True)
class DepthRange:
    """
    A pair of endpoints selecting which tree depths are printed.

    The root sits at depth 0. ``None`` is used by callers for "no filter",
    so every DepthRange actually restricts something.
    """

    start: Endpoint
    end: Endpoint

    def __post_init__(self):
        if self.start.value > self.end.value:
            raise DepthRangeError(
                f"Start must be less than or equal to end ({self.start.value} > {self.end.value})"
            )

    def contains(self, depth: int) -> bool:
        return self.start.admits_from_below(depth) and self.end.admits_from_above(depth)

    @property
    def floor(self) -> int:
        """Smallest depth the start endpoint admits."""
        if self.start.is_inclusive:
            return self.start.value
        return self.start.value + 1

    def __str__(self) -> str:
        # an exclusive start is shown as the first depth it admits
        floor = self.floor
        if self.end.value == MAX_DEPTH and self.end.is_inclusive:
            return f"{floor}.."
        if self.end.is_inclusive and floor == self.end.value:
            return str(floor)
        start = "" if floor == 0 else str(floor)
        if self.end.is_inclusive:
            return f"{start}{INCLUSIVE_SEPARATOR}{self.end.value}"
        return f"{start}{EXCLUSIVE_SEPARATOR}{self.end.value}"


def _parse_depth(text: str, what: str) -> int:
    if not _DEPTH_PATTERN.fullmatch(text):
        raise DepthRangeError(f"Invalid {what} number: '{text}'")
    return int(text)


def _split(expression: str) -> Tuple[list, bool]:
    # "..=" must win over "..", otherwise "1..=3" would split into "1" and "=3"
    if INCLUSIVE_SEPARATOR in expression:
        return expression.split(INCLUSIVE_SEPARATOR, 1), True
    if EXCLUSIVE_SEPARATOR in expression:
        return expression.split(EXCLUSIVE_SEPARATOR, 1), False
    raise DepthRangeError(f"Invalid range format: '{expression}'")


def _end_endpoint(value: int, inclusive: bool) -> Endpoint:
    return Endpoint.inclusive(value) if inclusive else Endpoint.exclusive(value)


def parse_depth_range(expression: str) -> DepthRange:
    """
    Parse a depth range expression.

    Accepted forms are ``n``, ``n..m``, ``n..=m``, ``..m``, ``..=m`` and
    ``n..``. ``..`` excludes its end, ``..=`` includes it.
    """
    if _DEPTH_PATTERN.fullmatch(expression):
        depth = int(expression)
        return DepthRange(Endpoint.inclusive(depth), Endpoint.inclusive(depth))

    parts, end_inclusive = _split(expression)

    if expression.startswith(EXCLUSIVE_SEPARATOR):
        end = _parse_depth(parts[-1], "end")
        return DepthRange(Endpoint.inclusive(0), _end_endpoint(end, end_inclusive))

    if expression.endswith(EXCLUSIVE_SEPARATOR):
        start = _parse_depth(parts[0], "start")
        return DepthRange(Endpoint.inclusive(start), Endpoint.inclusive(MAX_DEPTH))

    if len(parts) == 2:
        start = _parse_depth(parts[0], "start")
        end = _parse_depth(parts[1], "end")
        return DepthRange(Endpoint.inclusive(start), _end_endpoint(end, end_inclusive))

    raise DepthRangeError(f"Invalid range format: '{expression}'")
