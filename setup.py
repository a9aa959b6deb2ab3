#!/usr/bin/env python3

import pathlib

from setuptools import find_packages, setup

HERE = pathlib.Path(__file__).parent

# Handle README.md that might not exist in Docker build
try:
    README = (HERE / "README.md").read_text()
except FileNotFoundError:
    README = "Deterministic, specificity-ordered error recovery with guaranteed cleanup"

setup(
    name="unwind",
    version="1.0.0",
    description="Deterministic, specificity-ordered error recovery with guaranteed cleanup",
    long_description=README,
    long_description_content_type="text/markdown",
    author="Marc Rivero",
    author_email="mriverolopez@gmail.com",
    url="https://github.com/seifreed/unwind",
    packages=find_packages(include=["unwind", "unwind.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: GNU General Public License v3 (GPLv3)",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.13",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
    python_requires=">=3.10",
    install_requires=[
        "colorlog>=6.8.0",
        "rich>=13.7.0",
        "click>=8.1.7",
        "pyfiglet>=0.8.post1",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "unwind=unwind.cli:cli",
        ],
    },
    include_package_data=True,
    zip_safe=False,
)
