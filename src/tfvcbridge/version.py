"""Dotted version numbers reported by the TF tool."""

from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering


@total_ordering
@dataclass(frozen=True, eq=False)
class TfvcVersion:
    """A (major, minor, revision) triple plus an informational build string.

    Ordering and equality use the triple only; ``build`` is ignored.
    """

    major: int = 0
    minor: int = 0
    revision: int = 0
    build: str = ""

    @classmethod
    def from_string(cls, version: str | None) -> TfvcVersion:
        """Parse "14.0.3.201603291047" style strings.

        Missing parts default to 0; everything after the third dot is kept
        verbatim as the build.
        """
        if not version:
            return cls()
        parts = version.strip().split(".")
        numbers = [_to_int(p) for p in parts[:3]]
        numbers += [0] * (3 - len(numbers))
        build = ".".join(parts[3:])
        return cls(numbers[0], numbers[1], numbers[2], build)

    @staticmethod
    def compare(left: TfvcVersion, right: TfvcVersion) -> int:
        """Return -1, 0 or 1 comparing the two triples."""
        a, b = left.triple, right.triple
        return (a > b) - (a < b)

    @property
    def triple(self) -> tuple[int, int, int]:
        return (self.major, self.minor, self.revision)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TfvcVersion):
            return NotImplemented
        return self.triple == other.triple

    def __lt__(self, other: TfvcVersion) -> bool:
        return self.triple < other.triple

    def __hash__(self) -> int:
        return hash(self.triple)

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.revision}"
        if self.build:
            text += f".{self.build}"
        return text


def _to_int(part: str) -> int:
    try:
        return int(part)
    except ValueError:
        return 0
