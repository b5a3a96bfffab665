#!/usr/bin/env python3
"""Setup configuration for wwvb-decoder package."""

from setuptools import setup, find_packages
from pathlib import Path

# Read long description from README
readme_path = Path(__file__).parent / "README.md"
long_description = readme_path.read_text() if readme_path.exists() else ""

setup(
    name="wwvb-decoder",
    version="1.0.0",
    description="WWVB 60 kHz time code frame decoder for binary carrier-level captures",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="BSD-2-Clause",

    package_dir={"": "src"},
    packages=find_packages(where="src"),

    python_requires=">=3.9",

    install_requires=[
        "numpy>=1.20.0",
        "scipy>=1.7.0",
        "toml>=0.10.0",
    ],

    extras_require={
        "gpio": ["pigpio>=1.78"],
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=3.0.0",
        ],
    },

    entry_points={
        "console_scripts": [
            "wwvb-decoder=wwvb_decoder.main:main",
        ],
    },

    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: BSD License",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Communications :: Ham Radio",
        "Topic :: System :: Networking :: Time Synchronization",
    ],

    keywords="wwvb time code 60khz radio clock decoder",
)
