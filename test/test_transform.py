"""
Tests for Transform2d and Transform3d.

Verifies the frame algebra contracts:
- initial.transform_by(from_poses(initial, final)) == final
- t + t.inverse() == identity
- pose.transform_by(a).transform_by(b) == pose.transform_by(a + b)
"""

import math

import numpy as np
import pytest

from frc_geometry.geometry import (
    Pose2d,
    Pose3d,
    Rotation2d,
    Rotation3d,
    Transform2d,
    Transform3d,
    Translation2d,
    Translation3d,
)


class TestTransform2d:
    """Tests for planar transforms."""

    def test_identity(self):
        """The identity leaves a pose unchanged."""
        t = Transform2d.identity()
        assert t == Transform2d()
        pose = Pose2d.from_xy(1.0, 2.0, Rotation2d(0.5))
        assert pose.transform_by(t).is_near(pose)

    def test_from_poses(self):
        """from_poses is expressed in the initial frame."""
        initial = Pose2d.from_xy(1.0, 0.0, Rotation2d.from_degrees(90.0))
        final = Pose2d.from_xy(1.0, 2.0, Rotation2d.from_degrees(180.0))
        t = Transform2d.from_poses(initial, final)
        # 2 m along the initial heading, then a quarter turn left
        assert t.translation.is_near(Translation2d(2.0, 0.0))
        assert t.rotation.degrees == pytest.approx(90.0)

    def test_from_poses_recovers_final(self, random_pose2d):
        """Applying from_poses(initial, final) to initial gives final."""
        for initial, final in zip(random_pose2d, random_pose2d[1:]):
            t = Transform2d.from_poses(initial, final)
            assert initial.transform_by(t).is_near(final)

    def test_inverse(self):
        """t + t.inverse() is the identity."""
        t = Transform2d(Translation2d(1.0, -2.0), Rotation2d(0.8))
        assert (t + t.inverse()).is_near(Transform2d.identity())
        assert (-t).is_near(t.inverse())

    def test_plus_matches_sequential(self, random_pose2d):
        """a + b applies a then b."""
        a = Transform2d(Translation2d(1.0, 0.5), Rotation2d(0.4))
        b = Transform2d(Translation2d(-0.3, 2.0), Rotation2d(-1.1))
        for pose in random_pose2d:
            assert pose.transform_by(a).transform_by(b).is_near(pose.transform_by(a + b))

    def test_times_and_div(self):
        """Scaling multiplies translation and rotation."""
        t = Transform2d(Translation2d(2.0, -4.0), Rotation2d(1.0))
        half = t * 0.5
        assert half.translation == Translation2d(1.0, -2.0)
        assert half.rotation.radians == pytest.approx(0.5)
        assert (t / 2.0).is_near(half)
        assert t.div(2.0).is_near(t.times(0.5))

    def test_to_3d_roundtrip(self):
        """2D -> 3D -> 2D keeps the transform."""
        t = Transform2d(Translation2d(1.0, -2.0), Rotation2d(0.8))
        t3 = t.to_3d()
        assert isinstance(t3, Transform3d)
        assert t3.to_2d().is_near(t)


class TestTransform3d:
    """Tests for 3D transforms."""

    def test_from_poses_recovers_final(self, random_pose3d):
        """Applying from_poses(initial, final) to initial gives final."""
        for initial, final in zip(random_pose3d, random_pose3d[1:]):
            t = Transform3d.from_poses(initial, final)
            assert initial.transform_by(t).is_near(final)

    def test_from_poses_in_body_frame(self):
        """Translation is expressed in the initial pose's frame."""
        initial = Pose3d.from_xyz(1.0, 0.0, 0.0, Rotation3d.from_angles(0.0, 0.0, math.pi / 2))
        final = Pose3d.from_xyz(1.0, 3.0, 0.0, Rotation3d.from_angles(0.0, 0.0, math.pi / 2))
        t = Transform3d.from_poses(initial, final)
        assert np.allclose(t.translation.as_array(), [3.0, 0.0, 0.0])
        assert t.rotation.is_near(Rotation3d.identity())

    def test_inverse(self):
        """Inverse cancels from either side."""
        t = Transform3d(Translation3d(1.0, -2.0, 0.5), Rotation3d.from_angles(0.3, -0.2, 1.0))
        assert (t + t.inverse()).is_near(Transform3d.identity())
        assert (t.inverse() + t).is_near(Transform3d.identity())

    def test_plus_matches_sequential(self, random_pose3d):
        """a + b applies a then b."""
        a = Transform3d(Translation3d(1.0, 0.5, -0.2), Rotation3d.from_angles(0.4, 0.1, -0.3))
        b = Transform3d(Translation3d(-0.3, 2.0, 1.0), Rotation3d.from_angles(-1.1, 0.6, 2.0))
        for pose in random_pose3d:
            sequential = pose.transform_by(a).transform_by(b)
            combined = pose.transform_by(a + b)
            assert sequential.is_near(combined)

    def test_times(self):
        """Scaling multiplies translation and rotation angle."""
        t = Transform3d(Translation3d(2.0, 0.0, 0.0), Rotation3d.from_axis_angle([0, 0, 1], 1.0))
        half = t * 0.5
        assert half.translation == Translation3d(1.0, 0.0, 0.0)
        assert half.rotation.get_angle() == pytest.approx(0.5)
        assert (t / 2.0).is_near(half)

    def test_from_2d_planar(self):
        """A planar transform lifts to z = 0 and pure yaw."""
        t = Transform2d(Translation2d(1.0, 2.0), Rotation2d(0.4)).to_3d()
        assert t.translation == Translation3d(1.0, 2.0, 0.0)
        assert t.rotation.yaw() == pytest.approx(0.4)
