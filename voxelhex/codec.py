"""Conversion of box tree value types to and from bencodable objects.

Encoders return plain Python structures that :func:`voxelhex.bencode.encode`
accepts. Decoders take what :func:`voxelhex.bencode.decode` produced and
raise :class:`~voxelhex.bencode.BencodeError` on malformed input.
"""

from __future__ import annotations

from typing import Any, Callable, Iterator, TypeVar

from .bencode import BencodeError
from .types import (
    BOX_NODE_CHILDREN_COUNT,
    Albedo,
    BrickData,
    Children,
    EmptyBrick,
    InternalContent,
    LeafContent,
    MIPMapStrategy,
    NoChildren,
    NodeChildren,
    NodeContent,
    NothingContent,
    OccupancyBitmap,
    PartedBrick,
    ResamplingKind,
    ResamplingMethod,
    SolidBrick,
    UniformLeafContent,
)

__all__ = [
    "encode_item",
    "decode_int",
    "encode_albedo",
    "decode_albedo",
    "encode_brick",
    "decode_brick",
    "encode_node_content",
    "decode_node_content",
    "encode_node_children",
    "decode_node_children",
    "encode_resampling_method",
    "decode_resampling_method",
    "encode_mip_map_strategy",
    "decode_mip_map_strategy",
]

T = TypeVar("T")

_U8_MAX = 0xFF
_U32_MAX = 0xFFFF_FFFF
_U64_MAX = 0xFFFF_FFFF_FFFF_FFFF

_BRICK_EMPTY = b"#b"
_BRICK_SOLID = b"#b#"
_BRICK_PARTED = b"##b#"
_BRICK_END = b"#"

_CONTENT_NOTHING = b"#"
_CONTENT_INTERNAL = b"##"
_CONTENT_LEAF = b"###"
_CONTENT_UNIFORM_LEAF = b"##u#"

_CHILDREN_KEYS = b"##c##"
_CHILDREN_NONE = b"##x##"
_CHILDREN_BITMAP = b"##b##"

_POSTERIZE_BASE = 3
_POSTERIZE_BD_BASE = 1003
_POSTERIZE_END = 1002
_POSTERIZE_BD_END = 2001


def _per_mille(value: float) -> int:
    """Scale a fraction by 1000 and truncate, ignoring float representation noise."""
    return int(round(value * 1000, 6))


def _next(items: Iterator[Any], what: str) -> Any:
    try:
        return next(items)
    except StopIteration:
        raise BencodeError(f"missing {what}") from None


def _expect_list(obj: Any, what: str) -> list:
    if not isinstance(obj, list):
        raise BencodeError(f"expected a list for {what}")
    return obj


def _decode_uint(obj: Any, what: str, maximum: int) -> int:
    value = decode_int(obj)
    if not 0 <= value <= maximum:
        raise BencodeError(f"{what} out of range: {value}")
    return value


def _marker(obj: Any, what: str) -> bytes:
    if isinstance(obj, str):
        return obj.encode("utf-8")
    if not isinstance(obj, bytes):
        raise BencodeError(f"expected a string identifier for {what}")
    return obj


def encode_item(value: Any) -> Any:
    """Encode a generic voxel value: colours, integers, strings and sequences of them."""
    if isinstance(value, Albedo):
        return encode_albedo(value)
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, bytes, str)):
        return value
    if isinstance(value, (list, tuple)):
        return [encode_item(item) for item in value]
    raise BencodeError(f"cannot encode a value of type {type(value).__name__}")


def decode_int(obj: Any) -> int:
    """Return ``obj`` if it is a decoded integer, otherwise raise."""
    if isinstance(obj, bool) or not isinstance(obj, int):
        raise BencodeError(f"expected an integer, got {type(obj).__name__}")
    return obj


def encode_albedo(albedo: Albedo) -> list:
    return [albedo.r, albedo.g, albedo.b, albedo.a]


def decode_albedo(obj: Any) -> Albedo:
    items = iter(_expect_list(obj, "a colour"))
    components = [
        _decode_uint(_next(items, f"{name} colour component"), f"{name} colour component", _U8_MAX)
        for name in ("red", "green", "blue", "alpha")
    ]
    return Albedo(*components)


def encode_brick(brick: BrickData, encode_voxel: Callable[[Any], Any]) -> Any:
    if isinstance(brick, EmptyBrick):
        return _BRICK_EMPTY
    if isinstance(brick, SolidBrick):
        return [_BRICK_SOLID, encode_voxel(brick.voxel)]
    if isinstance(brick, PartedBrick):
        return [_BRICK_PARTED, len(brick), *map(encode_voxel, brick.voxels), _BRICK_END]
    raise BencodeError(f"not brick data: {type(brick).__name__}")


def decode_brick(obj: Any, decode_voxel: Callable[[Any], T]) -> BrickData:
    if isinstance(obj, bytes):
        if obj != _BRICK_EMPTY:
            raise BencodeError(f"unexpected brick identifier {obj!r}")
        return EmptyBrick()
    items = iter(_expect_list(obj, "brick data"))
    marker = _marker(_next(items, "brick identifier"), "brick data")
    if marker == _BRICK_SOLID:
        return SolidBrick(decode_voxel(_next(items, "solid brick voxel")))
    if marker == _BRICK_PARTED:
        length = decode_int(_next(items, "brick length"))
        if length <= 0:
            raise BencodeError("expected brick to be of non-zero length")
        return PartedBrick([decode_voxel(_next(items, "brick voxel")) for _ in range(length)])
    raise BencodeError(f"unexpected brick identifier {marker!r}")


def encode_node_content(content: NodeContent, encode_voxel: Callable[[Any], Any]) -> Any:
    if isinstance(content, NothingContent):
        return _CONTENT_NOTHING
    if isinstance(content, InternalContent):
        return [_CONTENT_INTERNAL, content.occupied_bits]
    if isinstance(content, LeafContent):
        return [
            _CONTENT_LEAF,
            *(encode_brick(b, encode_voxel) for b in content.bricks[:BOX_NODE_CHILDREN_COUNT]),
        ]
    if isinstance(content, UniformLeafContent):
        return [_CONTENT_UNIFORM_LEAF, encode_brick(content.brick, encode_voxel)]
    raise BencodeError(f"not node content: {type(content).__name__}")


def decode_node_content(obj: Any, decode_voxel: Callable[[Any], T]) -> NodeContent:
    if isinstance(obj, bytes):
        if obj != _CONTENT_NOTHING:
            raise BencodeError(f"unexpected node content identifier {obj!r}")
        return NothingContent()
    items = iter(_expect_list(obj, "node content"))
    marker = _marker(_next(items, "node content identifier"), "node content")
    if marker == _CONTENT_INTERNAL:
        bits = _decode_uint(_next(items, "occupancy bitmap"), "occupancy bitmap", _U64_MAX)
        return InternalContent(bits)
    if marker == _CONTENT_LEAF:
        return LeafContent(
            [
                decode_brick(_next(items, "leaf brick"), decode_voxel)
                for _ in range(BOX_NODE_CHILDREN_COUNT)
            ]
        )
    if marker == _CONTENT_UNIFORM_LEAF:
        return UniformLeafContent(decode_brick(_next(items, "uniform leaf brick"), decode_voxel))
    raise BencodeError(f"unexpected node content identifier {marker!r}")


def encode_node_children(children: NodeChildren) -> Any:
    if isinstance(children, Children):
        return [_CHILDREN_KEYS, *children.keys[:BOX_NODE_CHILDREN_COUNT]]
    if isinstance(children, NoChildren):
        return _CHILDREN_NONE
    if isinstance(children, OccupancyBitmap):
        return [_CHILDREN_BITMAP, children.bitmap]
    raise BencodeError(f"not node children: {type(children).__name__}")


def decode_node_children(obj: Any) -> NodeChildren:
    if isinstance(obj, bytes):
        if obj != _CHILDREN_NONE:
            raise BencodeError(f"unexpected node children identifier {obj!r}")
        return NoChildren()
    items = iter(_expect_list(obj, "node children"))
    marker = _marker(_next(items, "node children marker"), "node children")
    if marker == _CHILDREN_KEYS:
        return Children(
            [
                _decode_uint(_next(items, "child key"), "child key", _U32_MAX)
                for _ in range(BOX_NODE_CHILDREN_COUNT)
            ]
        )
    if marker == _CHILDREN_BITMAP:
        return OccupancyBitmap(_decode_uint(_next(items, "bitmap"), "bitmap", _U64_MAX))
    raise BencodeError(f"unexpected node children marker {marker!r}")


def encode_resampling_method(method: ResamplingMethod) -> int:
    kind = method.kind
    if kind is ResamplingKind.BOX_FILTER:
        return 0
    if kind is ResamplingKind.POINT_FILTER:
        return 1
    if kind is ResamplingKind.POINT_FILTER_BD:
        return 2
    if kind is ResamplingKind.POSTERIZE:
        return _POSTERIZE_BASE + _per_mille(method.threshold)
    return _POSTERIZE_BD_BASE + _per_mille(method.threshold)


def decode_resampling_method(obj: Any) -> ResamplingMethod:
    code = _decode_uint(obj, "resampling method", _U32_MAX)
    if code == 0:
        return ResamplingMethod.box_filter()
    if code == 1:
        return ResamplingMethod.point_filter()
    if code == 2:
        return ResamplingMethod.point_filter_bd()
    if _POSTERIZE_BASE <= code < _POSTERIZE_END:
        return ResamplingMethod.posterize((code - _POSTERIZE_BASE) / 1000)
    if _POSTERIZE_BD_BASE <= code < _POSTERIZE_BD_END:
        return ResamplingMethod.posterize_bd((code - _POSTERIZE_BD_BASE) / 1000)
    raise BencodeError(f"resampling method code out of the posterize ranges: {code}")


def encode_mip_map_strategy(strategy: MIPMapStrategy) -> list:
    out: list = [int(strategy.enabled), len(strategy.resampling_methods)]
    for level, method in strategy.resampling_methods.items():
        out += [level, encode_resampling_method(method)]
    out.append(len(strategy.resampling_color_matching_thresholds))
    for level, threshold in strategy.resampling_color_matching_thresholds.items():
        out += [level, _per_mille(threshold)]
    return out


def decode_mip_map_strategy(obj: Any) -> MIPMapStrategy:
    items = iter(_expect_list(obj, "MIP map strategy"))
    enabled = decode_int(_next(items, "enabled flag"))
    if enabled not in (0, 1):
        raise BencodeError(f"boolean field enabled holds {enabled}")

    methods: dict[int, ResamplingMethod] = {}
    for _ in range(decode_int(_next(items, "resampling strategy length"))):
        level = _decode_uint(_next(items, "MIP level"), "MIP level", _U64_MAX)
        methods[level] = decode_resampling_method(_next(items, "resampling method"))

    thresholds: dict[int, float] = {}
    for _ in range(decode_int(_next(items, "color matching strategy length"))):
        level = _decode_uint(_next(items, "MIP level"), "MIP level", _U64_MAX)
        value = _decode_uint(_next(items, "color matching threshold"), "threshold", _U32_MAX)
        thresholds[level] = value / 1000

    return MIPMapStrategy(
        enabled=bool(enabled),
        resampling_methods=methods,
        resampling_color_matching_thresholds=thresholds,
    )