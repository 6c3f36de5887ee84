"""
Setup script for pdfsigstrip.

This script configures the package for installation via pip.
Supports both development and production installations.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read the README for long description
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text(encoding='utf-8')

# Read requirements
with open(this_directory / "requirements.txt") as f:
    requirements = [line for line in f.read().splitlines() if line and not line.startswith("#")]

test_requirements = [
    "pytest>=7.0.0",
    "pytest-cov>=4.0.0",
    "httpx>=0.24.0",
]

setup(
    name="pdfsigstrip",
    version="0.1.0",
    description="Remove digital signatures from PDF files stored in S3 or on disk",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="pdfsigstrip Contributors",
    author_email="",
    packages=find_packages(include=["pdfsigstrip", "pdfsigstrip.*"]),
    install_requires=requirements,
    extras_require={
        "dev": test_requirements,
        "test": test_requirements,
        "server": [
            "uvicorn>=0.23.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "pdfsigstrip=pdfsigstrip.cli:main",
        ],
    },
    python_requires=">=3.10",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Office/Business",
        "Topic :: Utilities",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Operating System :: OS Independent",
        "Environment :: Console",
    ],
    keywords="pdf signature acroform s3 cli",
    license="MIT",
    include_package_data=True,
    zip_safe=False,
)
