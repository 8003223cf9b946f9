#!/usr/bin/env python3
"""
Setup script for the Linear Recurrence Explorer.

Installs the numeric core (pkgs) and the service/CLI/plotting applications
(apps) together with the recurrence-engine console script.
"""
from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

with open("requirements.txt", "r", encoding="utf-8") as fh:
    requirements = [line.strip() for line in fh if line.strip() and not line.startswith("#")]

setup(
    name="linear-recurrence-explorer",
    version="1.0.0",
    description="Parameterize and plot a 2-coefficient linear recurrence with fixed or evolving transition matrix",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["pkgs", "pkgs.*", "apps", "apps.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Mathematics",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.9",
    install_requires=requirements,
    extras_require={
        "dev": ["pytest>=6.0.0", "pytest-cov>=2.12.0"],
        "recording": ["pandas>=1.3.0", "pyarrow>=5.0.0"],
        "plotting": ["matplotlib>=3.5.0"],
    },
    entry_points={
        "console_scripts": [
            "recurrence-engine=apps.engine.main:main",
        ],
    },
    zip_safe=False,
)
