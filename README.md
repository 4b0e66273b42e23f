# voxelhex

Building blocks for storing voxel data in a sparse box tree, a tree in which
every node has 64 children (four along each axis), and for writing that
tree's state to bytes and reading it back.

The package has no runtime dependencies.

## Install

```
pip install .
```

To run the test suite:

```
pip install .[test]
pytest
```

## Modules

### `voxelhex.bencode`

`encode(value)` turns ints, bools, bytes, str, lists, tuples and mappings
with string keys into bencode. `decode(data)` reads one complete value back.
Integers come back as `int`, strings as `bytes`, lists as `list` and
dictionaries as `dict` with `bytes` keys. Malformed input, trailing bytes,
unsorted dictionary keys and unsupported types all raise `BencodeError`, a
subclass of `ValueError`.

### `voxelhex.object_pool`

`ObjectPool(factory, capacity=0)` is a slot allocator with integer keys.
Freed keys are handed out again.

- `push(item)` stores an item and returns its key.
- `allocate()` reserves a slot that holds `factory()` and returns its key.
- `pop(key)` releases the slot and returns its item. It returns `None` if the
  key is not in use.
- `free(key)` releases the slot and keeps its item. It returns whether the
  key was in use.
- `pool[key]` reads a slot and `pool[key] = item` writes one. Either raises
  `KeyError` if the key is not in use.
- `key in pool` tells whether a key is in use.
- `len(pool)` is the number of slots, used or not.
- `swap(src, dst)` exchanges two slots, including whether they are in use.
- `first_available` is the index where the search for a free slot starts.
- `to_bencode_object(encode_item)` and
  `ObjectPool.from_bencode_object(obj, decode_item, factory)` convert a pool
  to a bencodable list and back.

### `voxelhex.types`

The value types stored in a tree.

- `Albedo(r, g, b, a)` is a frozen RGBA colour with 8-bit components. It has
  `Albedo.from_rgba(0xRRGGBBAA)`, `with_red(red)` and `is_transparent()`.
- Bricks: `EmptyBrick`, `SolidBrick(voxel)` and `PartedBrick(voxels)`.
- Node contents: `NothingContent`, `InternalContent(occupied_bits)`,
  `LeafContent(bricks)` and `UniformLeafContent(brick)`. `LeafContent` needs
  exactly 64 bricks.
- Node children: `NoChildren`, `Children(keys)` and `OccupancyBitmap(bitmap)`.
  `Children` needs exactly 64 keys.
- MIP settings:
  - `ResamplingKind` lists the resampling kinds.
  - `ResamplingMethod` describes how one level is resampled. Build one with
    `box_filter()`, `point_filter()`, `point_filter_bd()`,
    `posterize(threshold)` or `posterize_bd(threshold)`.
  - `MIPMapStrategy` holds `enabled`, `resampling_methods` and
    `resampling_color_matching_thresholds`.
- `BOX_NODE_CHILDREN_COUNT` is 64.

Integer fields are range-checked when a value is built.

### `voxelhex.codec`

Paired `encode_*` / `decode_*` functions convert each type to the objects
that `bencode.encode` accepts, and back from what `bencode.decode` returns:

- `encode_albedo` / `decode_albedo`
- `encode_brick` / `decode_brick`
- `encode_node_content` / `decode_node_content`
- `encode_node_children` / `decode_node_children`
- `encode_resampling_method` / `decode_resampling_method`
- `encode_mip_map_strategy` / `decode_mip_map_strategy`

The brick and node content functions also take a function that converts a
single voxel value. Thresholds are stored in thousandths.

`encode_item` is a general voxel encoder for colours, ints, bools, bytes, str
and sequences of these. `decode_int` checks that a decoded object is an
integer. Malformed input raises `BencodeError`.

### `voxelhex.record`

`BoxTreeRecord` is the stored state of a whole tree. It holds:

- the size, brick dimension and `auto_simplify` flag
- the node pool
- the node children
- the node MIP bricks
- the colour and data palettes
- the MIP strategy

`color_index(color)` and `data_index(data)` look up palette positions and
return `None` when the value is absent.

`encode_boxtree` / `decode_boxtree` convert a record to a bencodable list and
back. `to_bytes(record, encode_voxel=encode_item)` and
`from_bytes(data, decode_voxel=...)` go straight to and from bytes. By default
`from_bytes` hands decoded voxel objects back unchanged. Pass a decoder such
as `codec.decode_albedo` to rebuild colour voxels.

### `voxelhex.magicavoxel`

Geometry helpers for placing MagicaVoxel models:

- `model_size_to_tree_size(model_size, brick_dimension)` returns the smallest
  `4**n * brick_dimension` that covers the largest extent.
- `parse_rotation_matrix(b)` decodes a rotation byte into a row-major 3×3
  matrix of tuples. It raises `ValueError` for bytes that encode no rotation.
- `transformed(vector, matrix)` multiplies a matrix by a vector.
- `multiply(left, right)` multiplies two matrices.
- `IDENTITY` is the 3×3 identity matrix.

## Example

```python
from voxelhex.object_pool import ObjectPool
from voxelhex.magicavoxel import model_size_to_tree_size, parse_rotation_matrix

pool = ObjectPool(float, 3)
key = pool.push(5.0)
assert pool[key] == 5.0
assert pool.pop(key) == 5.0
assert pool.pop(key) is None

print(model_size_to_tree_size((40, 20, 10), 4))  # 64
print(parse_rotation_matrix(4))                  # the identity matrix
```

```python
from voxelhex import bencode, codec
from voxelhex.types import Albedo, SolidBrick

brick = SolidBrick(Albedo(50, 0, 0, 0))
data = bencode.encode(codec.encode_brick(brick, codec.encode_albedo))
assert codec.decode_brick(bencode.decode(data), codec.decode_albedo) == brick
```

## What it does not do

There is no box tree that you can edit or query. Nothing here inserts,
clears, reads or simplifies voxels at positions, and nothing builds MIP maps.
`BoxTreeRecord` only stores and serializes a tree's state.

There are no file save and load helpers. Write the bytes from `to_bytes`
yourself.

`.vox` files are not read. The MagicaVoxel module covers only the sizing and
rotation arithmetic.

There is no rendering and no command-line tool.