#!/usr/bin/env python

# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

# -*- encoding: utf-8 -*-

from glob import glob
from os.path import basename
from os.path import splitext

from setuptools import find_packages
from setuptools import setup


setup(
    name="xkb2ifcfg",
    version="0.0.0",
    license="GPL-3.0-or-later",
    description="Generate input filter chargen configuration from XKB keyboard layouts",
    long_description="Generates the chargen section of an input filter configuration from an XKB layout.",
    author="Rose Davidson",
    author_email="rose@metaclassical.com",
    packages=find_packages("src"),
    package_dir={"": "src"},
    py_modules=[splitext(basename(path))[0] for path in glob("src/*.py")],
    include_package_data=True,
    zip_safe=False,
    classifiers=[
        # complete classifier list: http://pypi.python.org/pypi?%3Aaction=list_classifiers
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: Implementation :: CPython",
        "Topic :: Software Development :: Code Generators",
    ],
    keywords=[
        "xkb",
        "keyboard",
        "keymap",
    ],
    python_requires=">=3.10",
    install_requires=[
        # libxkbcommon itself is loaded at runtime through cffi's ABI mode.
        "cffi>=1.0.0",
        "cattrs>=22.1.0",
        "msgspec",
    ],
    extras_require={
        "test": ["pytest>=6.2.4"],
    },
    entry_points={
        "console_scripts": [
            "xkb2ifcfg = xkb2ifcfg.scripts:main",
        ],
    },
)
