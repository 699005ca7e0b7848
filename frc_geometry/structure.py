"""
Fixed binary layout for geometry values (telemetry contract).

Each geometry type is a ``Structure``: it declares a TYPE name, a SCHEMA string
and a flat tuple of double-precision fields in canonical order. Composite types
concatenate their members (translation first, then rotation), so the byte
layout of a Pose2d is exactly Translation2d followed by Rotation2d.

Layout:
    - Every field is a little-endian IEEE-754 double (8 bytes)
    - SIZE = 8 * FIELD_COUNT, fixed per type
    - No header, no padding

Usage:
    buffer = bytearray()
    pose.pack(buffer)
    same = Pose2d.unpack(buffer)
"""

from __future__ import annotations

import struct
from typing import ClassVar, Dict, Sequence, Tuple, Type, TypeVar

from frc_geometry import constants

S = TypeVar("S", bound="Structure")

_REGISTRY: Dict[str, Type["Structure"]] = {}


def _layout(field_count: int) -> struct.Struct:
    return struct.Struct(
        f"{constants.STRUCT_BYTE_ORDER}{field_count}{constants.STRUCT_DOUBLE_CODE}"
    )


class Structure:
    """
    Base class for types with a fixed binary layout.

    Subclasses set TYPE, SCHEMA and FIELD_COUNT and implement
    ``struct_fields`` / ``from_struct_fields``. SIZE is derived.
    """

    TYPE: ClassVar[str] = ""
    SCHEMA: ClassVar[str] = ""
    FIELD_COUNT: ClassVar[int] = 0
    SIZE: ClassVar[int] = 0

    def __init_subclass__(cls, **kwargs) -> None:
        super().__init_subclass__(**kwargs)
        cls.SIZE = cls.FIELD_COUNT * constants.STRUCT_DOUBLE_SIZE
        if cls.TYPE:
            _REGISTRY[cls.TYPE] = cls

    def struct_fields(self) -> Tuple[float, ...]:
        """Flat field values in canonical order."""
        raise NotImplementedError

    @classmethod
    def from_struct_fields(cls: Type[S], values: Sequence[float]) -> S:
        """Rebuild an instance from FIELD_COUNT values in canonical order."""
        raise NotImplementedError

    def pack(self, buffer: bytearray) -> None:
        """Append this value's SIZE bytes to buffer."""
        buffer += _layout(self.FIELD_COUNT).pack(*self.struct_fields())

    def to_bytes(self) -> bytes:
        buffer = bytearray()
        self.pack(buffer)
        return bytes(buffer)

    @classmethod
    def unpack(cls: Type[S], data: bytes | bytearray | memoryview, offset: int = 0) -> S:
        """
        Read one value starting at offset.

        Raises:
            ValueError: If fewer than SIZE bytes remain after offset
        """
        available = len(data) - offset
        if offset < 0 or available < cls.SIZE:
            raise ValueError(
                f"{cls.TYPE} needs {cls.SIZE} bytes at offset {offset}, got {max(available, 0)}"
            )
        values = _layout(cls.FIELD_COUNT).unpack_from(data, offset)
        return cls.from_struct_fields(values)

    @classmethod
    def from_bytes(cls: Type[S], data: bytes | bytearray | memoryview) -> S:
        """Decode a buffer holding exactly one value."""
        if len(data) != cls.SIZE:
            raise ValueError(f"{cls.TYPE} expects exactly {cls.SIZE} bytes, got {len(data)}")
        return cls.unpack(data)


def structure_registry() -> Dict[str, Type[Structure]]:
    """TYPE name -> class for every registered layout."""
    return dict(_REGISTRY)
