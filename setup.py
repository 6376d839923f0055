#!/usr/bin/env python3
"""
Setup script for the aio-openai package.
"""

import re

from setuptools import setup, find_packages

# Read metadata from package without importing it
version = {}
with open("aio_openai/__init__.py") as f:
    for match in re.finditer(r'^(__\w+__) = "([^"]*)"$', f.read(), re.MULTILINE):
        version[match.group(1)] = match.group(2)

# Read requirements
with open("requirements.txt") as f:
    requirements = [line.strip() for line in f if line.strip() and not line.startswith("#")]

setup(
    name="aio-openai",
    version=version["__version__"],
    author=version["__author__"],
    description=version["__description__"],
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=requirements,
    extras_require={
        "test": ["pytest>=7"],
    },
    python_requires=">=3.9",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Framework :: AsyncIO",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "Topic :: Scientific/Engineering :: Artificial Intelligence",
    ],
    keywords="openai api async client streaming sse backoff",
    project_urls={
        "Source": "https://github.com/example/aio-openai",
        "Bug Reports": "https://github.com/example/aio-openai/issues",
    },
)
