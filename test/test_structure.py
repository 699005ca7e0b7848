"""
Tests for the fixed binary layout.

Verifies the telemetry contract:
- SIZE per type
- little-endian doubles in canonical field order
- composite layouts are member layouts concatenated
"""

import math
import struct

import pytest

from frc_geometry.geometry import (
    Pose2d,
    Pose3d,
    Quaternion,
    Rotation2d,
    Rotation3d,
    Transform2d,
    Transform3d,
    Translation2d,
    Translation3d,
    Twist2d,
    Twist3d,
)
from frc_geometry.structure import structure_registry


class TestLayout:
    """Tests for sizes, schemas and byte order."""

    @pytest.mark.parametrize("cls,size", [
        (Rotation2d, 24),
        (Quaternion, 32),
        (Rotation3d, 32),
        (Translation2d, 16),
        (Translation3d, 24),
        (Transform2d, 40),
        (Pose2d, 40),
        (Transform3d, 56),
        (Pose3d, 56),
        (Twist2d, 24),
        (Twist3d, 48),
    ])
    def test_size(self, cls, size):
        """SIZE is 8 bytes per double field."""
        assert cls.SIZE == size
        assert len(cls().to_bytes()) == size

    def test_little_endian_doubles(self):
        """Fields are little-endian doubles."""
        assert Translation2d(1.0, 2.0).to_bytes() == struct.pack("<2d", 1.0, 2.0)

    def test_rotation2d_field_order(self):
        """Rotation2d packs radians, sin, cos."""
        r = Rotation2d(0.5)
        assert r.to_bytes() == struct.pack("<3d", 0.5, math.sin(0.5), math.cos(0.5))

    def test_composite_is_concatenation(self):
        """A composite packs its members in order."""
        pose = Pose2d.from_xy(1.0, 2.0, Rotation2d(0.3))
        assert pose.to_bytes() == pose.translation.to_bytes() + pose.rotation.to_bytes()

    def test_registry(self):
        """Every type registers under its name with its schema."""
        registry = structure_registry()
        assert registry["Pose3d"] is Pose3d
        assert registry["Rotation2d"] is Rotation2d
        assert registry["Twist2d"].SCHEMA == "double dx;double dy;double dtheta;"
        assert Pose2d.SCHEMA == "Translation2d translation;Rotation2d rotation;"


class TestPackUnpack:
    """Tests for pack / unpack / from_bytes."""

    def test_pose3d_roundtrip(self):
        """Encode then decode keeps the pose."""
        pose = Pose3d(Translation3d(1.0, -2.0, 3.5), Rotation3d.from_angles(0.1, 0.2, 0.3))
        decoded = Pose3d.from_bytes(pose.to_bytes())
        assert decoded.is_near(pose)
        assert decoded.translation == pose.translation

    def test_rotation2d_decodes_stored_fields(self):
        """sin/cos are read back as stored, not recomputed."""
        r = Rotation2d(2.0)
        decoded = Rotation2d.from_bytes(r.to_bytes())
        assert decoded == r

    def test_pack_appends(self):
        """pack appends; unpack reads at an offset."""
        buffer = bytearray(b"\x00")
        Twist2d(1.0, 2.0, 3.0).pack(buffer)
        Translation2d(4.0, 5.0).pack(buffer)
        assert len(buffer) == 1 + Twist2d.SIZE + Translation2d.SIZE
        assert Twist2d.unpack(buffer, 1) == Twist2d(1.0, 2.0, 3.0)
        assert Translation2d.unpack(buffer, 1 + Twist2d.SIZE) == Translation2d(4.0, 5.0)

    def test_rotation3d_unpack_normalizes(self):
        """A decoded quaternion is normalized."""
        raw = Quaternion(2.0, 0.0, 0.0, 0.0).to_bytes()
        assert Rotation3d.from_bytes(raw).q == Quaternion(1.0, 0.0, 0.0, 0.0)

    def test_from_bytes_requires_exact_size(self):
        """from_bytes rejects extra or missing bytes."""
        data = Translation3d(1.0, 2.0, 3.0).to_bytes()
        with pytest.raises(ValueError):
            Translation3d.from_bytes(data + b"\x00")
        with pytest.raises(ValueError):
            Translation3d.from_bytes(data[:-1])

    def test_unpack_short_buffer(self):
        """unpack past the end of the buffer raises."""
        data = Twist3d(1.0, 2.0, 3.0, 4.0, 5.0, 6.0).to_bytes()
        with pytest.raises(ValueError):
            Twist3d.unpack(data, 8)
