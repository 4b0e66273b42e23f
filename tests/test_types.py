import pytest

from voxelhex.types import (
    BOX_NODE_CHILDREN_COUNT,
    Albedo,
    Children,
    EmptyBrick,
    InternalContent,
    LeafContent,
    MIPMapStrategy,
    NoChildren,
    NothingContent,
    OccupancyBitmap,
    PartedBrick,
    ResamplingKind,
    ResamplingMethod,
    SolidBrick,
    UniformLeafContent,
)


def test_from_rgba_red():
    assert Albedo.from_rgba(0xFF0000FF) == Albedo(255, 0, 0, 255)


def test_from_rgba_component_order():
    color = Albedo.from_rgba(0x01020304)
    assert (color.r, color.g, color.b, color.a) == (1, 2, 3, 4)


def test_with_red_replaces_only_red():
    base = Albedo(1, 2, 3, 4)
    changed = base.with_red(50)
    assert changed == Albedo(50, 2, 3, 4)
    assert base.r == 1


def test_default_albedo_with_red_is_transparent():
    assert Albedo().with_red(50).is_transparent()


@pytest.mark.parametrize("value", [0x0, 0xFFFFFF00, 0x12345600])
def test_zero_alpha_is_transparent(value):
    assert Albedo.from_rgba(value).is_transparent()


def test_nonzero_alpha_is_not_transparent():
    assert not Albedo.from_rgba(0xFF).is_transparent()


def test_albedo_component_out_of_range():
    with pytest.raises(ValueError):
        Albedo(256, 0, 0, 0)


def test_from_rgba_out_of_range():
    with pytest.raises(ValueError):
        Albedo.from_rgba(0x1_0000_0000)


def test_albedo_usable_as_key():
    palette = {Albedo.from_rgba(0xFF0000FF): 0}
    assert palette[Albedo(255, 0, 0, 255)] == 0


def test_brick_equality():
    assert EmptyBrick() == EmptyBrick()
    assert SolidBrick(Albedo(1, 1, 1, 1)) == SolidBrick(Albedo(1, 1, 1, 1))
    assert SolidBrick(1) != SolidBrick(2)
    assert PartedBrick([Albedo()] * 64) == PartedBrick(tuple([Albedo()] * 64))


def test_parted_brick_length():
    assert len(PartedBrick([1, 2, 3])) == 3


def test_leaf_content_requires_all_sectants():
    with pytest.raises(ValueError):
        LeafContent([EmptyBrick()] * (BOX_NODE_CHILDREN_COUNT - 1))


def test_leaf_content_keeps_bricks():
    bricks = [SolidBrick(i) for i in range(BOX_NODE_CHILDREN_COUNT)]
    leaf = LeafContent(bricks)
    assert list(leaf.bricks) == bricks


def test_uniform_leaf_and_nothing_equality():
    first = UniformLeafContent(SolidBrick(42))
    second = UniformLeafContent(SolidBrick(42))
    other = UniformLeafContent(SolidBrick(43))
    assert first == second
    assert (first == other) is False
    assert (NothingContent() == NothingContent()) is True
    assert (NothingContent() == first) is False


def test_internal_content_bits():
    assert InternalContent(0xAB).occupied_bits == 0xAB
    with pytest.raises(ValueError):
        InternalContent(-1)


def test_children_requires_all_sectants():
    with pytest.raises(ValueError):
        Children([1, 2, 3])


def test_children_keys_roundtrip():
    keys = [1, 2, 3, 4, 5, 6, 7, 8] * 8
    assert Children(keys).keys == tuple(keys)


def test_children_key_range():
    with pytest.raises(ValueError):
        Children([0x1_0000_0000] * BOX_NODE_CHILDREN_COUNT)


def test_occupancy_bitmap_range():
    assert OccupancyBitmap(666).bitmap == 666
    with pytest.raises(ValueError):
        OccupancyBitmap(1 << 64)


def test_no_children_equality():
    assert NoChildren() == NoChildren()
    assert NoChildren() != OccupancyBitmap(0)


def test_resampling_constructors():
    assert ResamplingMethod.box_filter().kind is ResamplingKind.BOX_FILTER
    assert ResamplingMethod.point_filter().kind is ResamplingKind.POINT_FILTER
    assert ResamplingMethod.point_filter_bd().kind is ResamplingKind.POINT_FILTER_BD
    assert ResamplingMethod.box_filter().threshold is None


def test_posterize_holds_threshold():
    assert ResamplingMethod.posterize(0.420) == ResamplingMethod(
        ResamplingKind.POSTERIZE, 0.420
    )
    assert ResamplingMethod.posterize_bd(0.69).threshold == 0.69
    assert ResamplingMethod.posterize(0.5) != ResamplingMethod.posterize_bd(0.5)


def test_posterize_requires_threshold():
    with pytest.raises(ValueError):
        ResamplingMethod(ResamplingKind.POSTERIZE)


def test_filter_rejects_threshold():
    with pytest.raises(ValueError):
        ResamplingMethod(ResamplingKind.BOX_FILTER, 0.5)


def test_mip_strategy_defaults_not_shared():
    first = MIPMapStrategy()
    second = MIPMapStrategy()
    first.resampling_methods[1] = ResamplingMethod.point_filter()
    assert second.resampling_methods == {}
    assert first.enabled is False
    assert first.resampling_methods[1] == ResamplingMethod.point_filter()