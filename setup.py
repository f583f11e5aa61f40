"""Setup script for distmat package."""

from setuptools import setup, find_packages
from pathlib import Path

# Read README for long description
readme_file = Path(__file__).parent / "README.md"
if readme_file.exists():
    with open(readme_file, "r", encoding="utf-8") as f:
        long_description = f.read()
else:
    long_description = "Parallel pairwise distance matrices for aligned sequences"

# Read requirements
requirements_file = Path(__file__).parent / "requirements.txt"
if requirements_file.exists():
    with open(requirements_file, "r", encoding="utf-8") as f:
        requirements = [
            line.strip() for line in f
            if line.strip() and not line.startswith("#")
        ]
else:
    requirements = [
        "pyyaml>=6.0",
        "pandas>=1.5.0",
        "numpy>=1.20.0",
        "psutil>=5.8.0",
        "biopython>=1.79"
    ]

setup(
    name="distmat",
    version="0.1.0",
    author="Distmat Developers",
    description="Parallel pairwise distance matrices for aligned sequences",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.8",
    install_requires=requirements,
    extras_require={
        "test": [
            "pytest>=7.0",
            "scipy>=1.7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "distmat=distmat.main:cli",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Bio-Informatics",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
    keywords="distance matrix alignment identity similarity hamming bioinformatics",
)
