"""The stored form of a box tree and its conversion to and from bencode."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Optional

from . import bencode
from .bencode import BencodeError
from .codec import (
    decode_albedo,
    decode_brick,
    decode_int,
    decode_mip_map_strategy,
    decode_node_children,
    decode_node_content,
    encode_albedo,
    encode_brick,
    encode_item,
    encode_mip_map_strategy,
    encode_node_children,
    encode_node_content,
)
from .object_pool import ObjectPool
from .types import Albedo, BrickData, MIPMapStrategy, NodeChildren, NodeContent, NothingContent

__all__ = ["BoxTreeRecord", "encode_boxtree", "decode_boxtree", "to_bytes", "from_bytes"]

_U32_MAX = 0xFFFF_FFFF


def _identity(obj: Any) -> Any:
    return obj


def _empty_nodes() -> ObjectPool:
    return ObjectPool(NothingContent)


@dataclass
class BoxTreeRecord:
    """Everything a box tree stores, with lookup tables rebuilt from its palettes.

    Node contents and MIP bricks hold voxel values; the data palette holds the
    user data entries the voxels refer to.
    """

    boxtree_size: int
    brick_dim: int
    auto_simplify: bool = True
    nodes: ObjectPool = field(default_factory=_empty_nodes)
    node_children: list[NodeChildren] = field(default_factory=list)
    node_mips: list[BrickData] = field(default_factory=list)
    voxel_color_palette: list[Albedo] = field(default_factory=list)
    voxel_data_palette: list[Any] = field(default_factory=list)
    mip_map_strategy: MIPMapStrategy = field(default_factory=MIPMapStrategy)
    _color_lookup: dict = field(init=False, repr=False, compare=False)
    _data_lookup: dict = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self._color_lookup = {
            color: index for index, color in enumerate(self.voxel_color_palette)
        }
        self._data_lookup = {}
        for index, data in enumerate(self.voxel_data_palette):
            try:
                self._data_lookup[data] = index
            except TypeError:
                continue

    def color_index(self, color: Albedo) -> Optional[int]:
        """Index of ``color`` in the colour palette, or None if absent."""
        return self._color_lookup.get(color)

    def data_index(self, data: Any) -> Optional[int]:
        """Index of ``data`` in the data palette, or None if absent."""
        try:
            return self._data_lookup.get(data)
        except TypeError:
            found = None
            for index, entry in enumerate(self.voxel_data_palette):
                if entry == data:
                    found = index
            return found


def encode_boxtree(
    record: BoxTreeRecord, encode_voxel: Callable[[Any], Any] = encode_item
) -> list:
    """Return the bencodable list form of ``record``.

    ``encode_voxel`` converts voxel values in bricks and data palette entries.
    """
    return [
        int(record.auto_simplify),
        record.boxtree_size,
        record.brick_dim,
        record.nodes.to_bencode_object(lambda c: encode_node_content(c, encode_voxel)),
        [encode_node_children(children) for children in record.node_children],
        [encode_brick(brick, encode_voxel) for brick in record.node_mips],
        [encode_albedo(color) for color in record.voxel_color_palette],
        [encode_voxel(data) for data in record.voxel_data_palette],
        encode_mip_map_strategy(record.mip_map_strategy),
    ]


def _next(items: Iterator[Any], what: str) -> Any:
    try:
        return next(items)
    except StopIteration:
        raise BencodeError(f"missing {what}") from None


def _list(obj: Any, what: str) -> list:
    if not isinstance(obj, list):
        raise BencodeError(f"expected a list for {what}")
    return obj


def _uint32(obj: Any, what: str) -> int:
    value = decode_int(obj)
    if not 0 <= value <= _U32_MAX:
        raise BencodeError(f"{what} out of range: {value}")
    return value


def decode_boxtree(
    obj: Any, decode_voxel: Callable[[Any], Any] = _identity
) -> BoxTreeRecord:
    """Rebuild a record from the output of :func:`encode_boxtree`."""
    items = iter(_list(obj, "box tree"))
    auto_simplify = decode_int(_next(items, "auto_simplify"))
    if auto_simplify not in (0, 1):
        raise BencodeError(f"boolean field auto_simplify holds {auto_simplify}")
    boxtree_size = _uint32(_next(items, "boxtree_size"), "boxtree_size")
    brick_dim = _uint32(_next(items, "brick_dim"), "brick_dim")
    nodes = ObjectPool.from_bencode_object(
        _next(items, "nodes"),
        lambda o: decode_node_content(o, decode_voxel),
        NothingContent,
    )
    node_children = [
        decode_node_children(o) for o in _list(_next(items, "node_children"), "node children")
    ]
    node_mips = [
        decode_brick(o, decode_voxel) for o in _list(_next(items, "node_mips"), "node MIPs")
    ]
    colors = [
        decode_albedo(o)
        for o in _list(_next(items, "voxel_color_palette"), "colour palette")
    ]
    data = [
        decode_voxel(o) for o in _list(_next(items, "voxel_data_palette"), "data palette")
    ]
    strategy = decode_mip_map_strategy(_next(items, "mip_map_strategy"))
    return BoxTreeRecord(
        boxtree_size=boxtree_size,
        brick_dim=brick_dim,
        auto_simplify=bool(auto_simplify),
        nodes=nodes,
        node_children=node_children,
        node_mips=node_mips,
        voxel_color_palette=colors,
        voxel_data_palette=data,
        mip_map_strategy=strategy,
    )


def to_bytes(record: BoxTreeRecord, encode_voxel: Callable[[Any], Any] = encode_item) -> bytes:
    """Serialize ``record`` to bencode bytes."""
    return bencode.encode(encode_boxtree(record, encode_voxel))


def from_bytes(data: bytes, decode_voxel: Callable[[Any], Any] = _identity) -> BoxTreeRecord:
    """Deserialize a record produced by :func:`to_bytes`."""
    return decode_boxtree(bencode.decode(data), decode_voxel)