"""Axis-aligned boxes and overlap tests.

All coordinates are screen pixels with the origin at the top-left corner,
so ``top <= bottom`` for every valid box.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned rectangle given by its four edges."""
    left: float
    top: float
    right: float
    bottom: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    def offset(self, x: float, y: float) -> "BoundingBox":
        """Translate local bounds by an entity anchor to get a world box."""
        return BoundingBox(
            left=x + self.left,
            top=y + self.top,
            right=x + self.right,
            bottom=y + self.bottom,
        )


@dataclass(frozen=True)
class ScreenBounds:
    """Movement arena an entity is confined to or measured against."""
    x: float
    y: float
    width: float
    height: float


def intersects(a: BoundingBox, b: BoundingBox) -> bool:
    """Whether two boxes overlap. Touching edges count as overlapping."""
    return not (
        a.right < b.left or b.right < a.left
        or a.bottom < b.top or b.bottom < a.top
    )


def first_overlap(
    own: Sequence[BoundingBox],
    other: Sequence[BoundingBox],
) -> Optional[Tuple[BoundingBox, BoundingBox]]:
    """Find the first intersecting pair of boxes.

    Own boxes are the outer loop, the other's boxes the inner loop. The
    search stops at the first hit, so later overlapping pairs are never
    reported.

    Returns:
        The (own, other) pair, or None when nothing overlaps.
    """
    for mine in own:
        for theirs in other:
            if intersects(mine, theirs):
                return mine, theirs
    return None
