"""Sparse voxel box-tree storage types, bencode serialization and MagicaVoxel geometry helpers."""

__version__ = "0.1.1"

__all__ = ["bencode", "object_pool", "types", "codec", "record", "magicavoxel"]