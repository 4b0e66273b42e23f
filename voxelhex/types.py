"""Value types stored in a box tree: colours, bricks, node contents and MIP settings."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Generic, Optional, Sequence, TypeVar, Union

__all__ = [
    "BOX_NODE_CHILDREN_COUNT",
    "Albedo",
    "EmptyBrick",
    "SolidBrick",
    "PartedBrick",
    "BrickData",
    "NothingContent",
    "InternalContent",
    "LeafContent",
    "UniformLeafContent",
    "NodeContent",
    "NoChildren",
    "Children",
    "OccupancyBitmap",
    "NodeChildren",
    "ResamplingKind",
    "ResamplingMethod",
    "MIPMapStrategy",
]

BOX_NODE_CHILDREN_COUNT = 64
"""Number of sectants (children) of every node in the tree."""

_U32_MAX = 0xFFFF_FFFF
_U64_MAX = 0xFFFF_FFFF_FFFF_FFFF

T = TypeVar("T")


def _check_uint(name: str, value: object, maximum: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an integer, not {type(value).__name__}")
    if not 0 <= value <= maximum:
        raise ValueError(f"{name} must be between 0 and {maximum}, got {value}")


@dataclass(frozen=True)
class Albedo:
    """An RGBA colour with 8-bit components."""

    r: int = 0
    g: int = 0
    b: int = 0
    a: int = 0

    def __post_init__(self) -> None:
        for name in ("r", "g", "b", "a"):
            _check_uint(f"colour component {name}", getattr(self, name), 0xFF)

    @staticmethod
    def from_rgba(value: int) -> "Albedo":
        """Build a colour from a 32-bit ``0xRRGGBBAA`` integer."""
        _check_uint("packed colour", value, _U32_MAX)
        return Albedo(
            (value >> 24) & 0xFF,
            (value >> 16) & 0xFF,
            (value >> 8) & 0xFF,
            value & 0xFF,
        )

    def with_red(self, red: int) -> "Albedo":
        """Return a copy of this colour with the red component replaced."""
        return Albedo(red, self.g, self.b, self.a)

    def is_transparent(self) -> bool:
        """True when the alpha component is zero."""
        return self.a == 0


# --- brick data -------------------------------------------------------------


@dataclass(frozen=True)
class EmptyBrick:
    """A brick holding no voxels."""


@dataclass(frozen=True)
class SolidBrick(Generic[T]):
    """A brick where every voxel holds the same value."""

    voxel: T


@dataclass(frozen=True)
class PartedBrick(Generic[T]):
    """A brick storing one value per voxel."""

    voxels: tuple

    def __init__(self, voxels: Sequence[T]) -> None:
        object.__setattr__(self, "voxels", tuple(voxels))

    def __len__(self) -> int:
        return len(self.voxels)


BrickData = Union[EmptyBrick, SolidBrick, PartedBrick]


# --- node content -----------------------------------------------------------


@dataclass(frozen=True)
class NothingContent:
    """A node with no content."""


@dataclass(frozen=True)
class InternalContent:
    """An internal node with a 64-bit occupancy bitmap of its children."""

    occupied_bits: int

    def __post_init__(self) -> None:
        _check_uint("occupied_bits", self.occupied_bits, _U64_MAX)


@dataclass(frozen=True)
class LeafContent:
    """A leaf node with one brick per sectant."""

    bricks: tuple

    def __init__(self, bricks: Sequence[BrickData]) -> None:
        bricks = tuple(bricks)
        if len(bricks) != BOX_NODE_CHILDREN_COUNT:
            raise ValueError(
                f"a leaf holds {BOX_NODE_CHILDREN_COUNT} bricks, got {len(bricks)}"
            )
        object.__setattr__(self, "bricks", bricks)


@dataclass(frozen=True)
class UniformLeafContent:
    """A leaf node whose every sectant shares a single brick."""

    brick: BrickData


NodeContent = Union[NothingContent, InternalContent, LeafContent, UniformLeafContent]


# --- node children ----------------------------------------------------------


@dataclass(frozen=True)
class NoChildren:
    """A node without children."""


@dataclass(frozen=True)
class Children:
    """Keys of the child nodes, one per sectant."""

    keys: tuple

    def __init__(self, keys: Sequence[int]) -> None:
        keys = tuple(keys)
        if len(keys) != BOX_NODE_CHILDREN_COUNT:
            raise ValueError(
                f"a node has {BOX_NODE_CHILDREN_COUNT} children, got {len(keys)}"
            )
        for key in keys:
            _check_uint("child key", key, _U32_MAX)
        object.__setattr__(self, "keys", keys)


@dataclass(frozen=True)
class OccupancyBitmap:
    """A 64-bit occupancy map used in place of child keys."""

    bitmap: int

    def __post_init__(self) -> None:
        _check_uint("bitmap", self.bitmap, _U64_MAX)


NodeChildren = Union[NoChildren, Children, OccupancyBitmap]


# --- MIP map settings -------------------------------------------------------


class ResamplingKind(enum.Enum):
    """The ways a MIP level can be resampled from the level below."""

    BOX_FILTER = "box_filter"
    POINT_FILTER = "point_filter"
    POINT_FILTER_BD = "point_filter_bd"
    POSTERIZE = "posterize"
    POSTERIZE_BD = "posterize_bd"

    @property
    def takes_threshold(self) -> bool:
        return self in (ResamplingKind.POSTERIZE, ResamplingKind.POSTERIZE_BD)


@dataclass(frozen=True)
class ResamplingMethod:
    """A resampling kind, with its colour threshold for the posterizing kinds."""

    kind: ResamplingKind
    threshold: Optional[float] = None

    def __post_init__(self) -> None:
        if not isinstance(self.kind, ResamplingKind):
            raise TypeError(f"kind must be a ResamplingKind, not {type(self.kind).__name__}")
        if self.kind.takes_threshold:
            if self.threshold is None:
                raise ValueError(f"{self.kind.value} needs a threshold")
            if isinstance(self.threshold, bool) or not isinstance(self.threshold, (int, float)):
                raise TypeError("threshold must be a number")
            if self.threshold < 0:
                raise ValueError("threshold must not be negative")
            object.__setattr__(self, "threshold", float(self.threshold))
        elif self.threshold is not None:
            raise ValueError(f"{self.kind.value} takes no threshold")

    @staticmethod
    def box_filter() -> "ResamplingMethod":
        return ResamplingMethod(ResamplingKind.BOX_FILTER)

    @staticmethod
    def point_filter() -> "ResamplingMethod":
        return ResamplingMethod(ResamplingKind.POINT_FILTER)

    @staticmethod
    def point_filter_bd() -> "ResamplingMethod":
        return ResamplingMethod(ResamplingKind.POINT_FILTER_BD)

    @staticmethod
    def posterize(threshold: float) -> "ResamplingMethod":
        return ResamplingMethod(ResamplingKind.POSTERIZE, threshold)

    @staticmethod
    def posterize_bd(threshold: float) -> "ResamplingMethod":
        return ResamplingMethod(ResamplingKind.POSTERIZE_BD, threshold)


@dataclass
class MIPMapStrategy:
    """Whether MIP maps are built and how each level is resampled."""

    enabled: bool = False
    resampling_methods: dict[int, ResamplingMethod] = field(default_factory=dict)
    resampling_color_matching_thresholds: dict[int, float] = field(default_factory=dict)