import math
import pytest
from pathlib import Path
from typing import Dict, Any

# =============================================================================
# Config Fixtures
# =============================================================================


@pytest.fixture
def tolerances():
    """Loose tolerances for comparisons after chained float operations."""
    from frc_geometry.config import ToleranceParams
    return ToleranceParams(
        translation_tolerance=1e-9,
        rotation_tolerance=1e-9,
        twist_tolerance=1e-9,
    )


@pytest.fixture
def tolerance_yaml(tmp_path: Path) -> Dict[str, Any]:
    """
    Write a base tolerance file and a preset into tmp_path.

    Returns:
        Dict with "base" and "preset" paths
    """
    base = tmp_path / "tolerances.yaml"
    base.write_text(
        "tolerances:\n"
        "  translation_tolerance: 1.0e-6\n"
        "  rotation_tolerance: 1.0e-6\n"
        "  twist_tolerance: 1.0e-6\n"
        "other_section:\n"
        "  unused: true\n"
    )
    presets = tmp_path / "presets"
    presets.mkdir()
    preset = presets / "loose.yaml"
    preset.write_text(
        "tolerances:\n"
        "  rotation_tolerance: 1.0e-3\n"
    )
    return {"base": base, "preset": preset}


# =============================================================================
# Test Utility Fixtures
# =============================================================================

@pytest.fixture
def numpy_seed():
    """Set numpy random seed for reproducible tests."""
    import numpy as np
    np.random.seed(42)
    yield


@pytest.fixture
def random_pose2d():
    """A handful of reproducible planar poses (headings away from ±π)."""
    import numpy as np
    from frc_geometry.geometry import Pose2d, Rotation2d, Translation2d
    np.random.seed(42)
    poses = []
    for _ in range(8):
        x, y = np.random.uniform(-5.0, 5.0, size=2)
        theta = np.random.uniform(-0.9 * math.pi, 0.9 * math.pi)
        poses.append(Pose2d(Translation2d(x, y), Rotation2d(theta)))
    return poses


@pytest.fixture
def random_pose3d():
    """A handful of reproducible 3D poses with rotation angles below 0.9π."""
    import numpy as np
    from frc_geometry.geometry import Pose3d, Rotation3d, Translation3d
    np.random.seed(42)
    poses = []
    for _ in range(8):
        translation = np.random.uniform(-5.0, 5.0, size=3)
        axis = np.random.randn(3)
        angle = np.random.uniform(0.05, 0.9 * math.pi)
        poses.append(Pose3d(
            Translation3d.from_array(translation),
            Rotation3d.from_axis_angle(axis, angle),
        ))
    return poses
