#!/usr/bin/env python

from setuptools import setup


VERSION = "0.1a1"

setup(
    name="quri",
    version=VERSION,
    description="Build, parse and percent-encode URIs as described in RFC 3986.",
    license="AGPL-3.0-or-later",
    packages=["quri", "_quri"],
    python_requires=">=3.10",
    install_requires=['typing-extensions; python_version < "3.11"'],
    extras_require={
        "test": ["pytest", "pytest-benchmark"],
        "benchmark": ["pytest", "pytest-benchmark"],
    },
)
