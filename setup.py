"""
Setup script for spiral-rationals.

To install:
    pip install .

To install in development mode:
    pip install -e .[dev]

To run the tests:
    python -m pytest spiral_rationals/tests -v
"""

import os

from setuptools import setup, find_packages

setup(
    name="spiral-rationals",
    version="0.1.0",
    description="Enumerate every rational number exactly once along the Cantor spiral",
    long_description=open("README.md").read() if os.path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    packages=find_packages(include=["spiral_rationals", "spiral_rationals.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.20",
        "sympy>=1.9",
        "mpmath>=1.2",
        "PyYAML>=5.4",
    ],
    extras_require={
        "dev": [
            "pytest>=6.0",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Scientific/Engineering :: Mathematics",
    ],
    keywords="rationals enumeration cantor spiral lattice countability",
)
