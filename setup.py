#!/usr/bin/env python
"""
Setup script for Transform Cache

Copyright (c) 2025 Xiangyu Fu, Institute of Cognitive Systems, TUM
Licensed under the MIT License
"""

from setuptools import find_packages, setup

setup(
    name="transform_cache",
    version="0.1.0",
    author="Xiangyu Fu",
    author_email="xiangyu.fu@tum.de",
    description="A time-buffered cache of rigid transforms between coordinate frame pairs",
    long_description=open("README.md", encoding="utf-8").read(),
    long_description_content_type="text/markdown",
    license="MIT",
    python_requires=">=3.8",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        # Core dependencies
        "PyYAML>=5.4",
        "pydantic>=2.0",
        "tqdm>=4.0",

        # Configuration management
        "omegaconf>=2.3.0",

        # Geometry
        "numpy>=1.25.2",
        "scipy>=1.15.1",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "echo-transform = transform_cache.echo_cli:main",
        ],
    },
    include_package_data=True,
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Operating System :: OS Independent",
        "Topic :: Scientific/Engineering :: Robotics",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
    keywords="robotics tf transform interpolation slerp frames",
)
