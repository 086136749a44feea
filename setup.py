#!/usr/bin/env python

# Copyright (c) Twisted Matrix Laboratories.
# See LICENSE for details.

"""
Setuptools installer for txdigest.
"""

import pathlib

import setuptools

setuptools.setup(
    name="txdigest",
    version="1.0.0",
    description="HTTP Digest authentication challenge/response for Twisted and WSGI",
    long_description=pathlib.Path("README.rst").read_text(encoding="utf8"),
    long_description_content_type="text/x-rst",
    license="MIT",
    classifiers=[
        "Framework :: Twisted",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Topic :: Internet :: WWW/HTTP",
    ],
    python_requires=">=3.8",
    package_dir={"": "src"},
    packages=setuptools.find_packages("src"),
    install_requires=[
        "Twisted>=22.8.0",
        "zope.interface>=5",
        "attrs>=21.3.0",
        "constantly>=15.1",
        "incremental>=22.10.0",
    ],
    extras_require={
        "test": ["hypothesis>=6.56"],
    },
)
