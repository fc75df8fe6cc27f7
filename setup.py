"""Build configuration for goapkit."""

from setuptools import find_packages, setup

setup(
    name="goapkit",
    version="0.1.0",
    description="Goal-oriented action planning (GOAP) for game agents",
    python_requires=">=3.12",
    packages=find_packages(include=["goapkit", "goapkit.*"]),
    install_requires=[
        "numpy>=1.26",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
        ],
    },
)
