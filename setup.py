from setuptools import find_packages, setup

package_name = "frc_geometry"

setup(
    name=package_name,
    version="0.0.1",
    packages=find_packages(exclude=["test"]),
    install_requires=["setuptools", "numpy", "scipy", "pydantic>=2", "PyYAML"],
    extras_require={"test": ["pytest"]},
    python_requires=">=3.9",
    zip_safe=True,
    maintainer="you",
    maintainer_email="you@example.com",
    description="2D/3D pose, transform and twist geometry for robot motion (SE(2)/SE(3))",
    license="Apache-2.0",
    tests_require=["pytest"],
)
