#!/usr/bin/env python3
"""
PrimeSwitch - NVIDIA Prime GPU switcher
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text(encoding='utf-8')

setup(
    name="primeswitch",
    version="0.1.0",
    author="PrimeSwitch Developers",
    description="Switch between integrated and discrete GPUs with prime-select",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="GPL-3.0",
    packages=find_packages(where="src", include=["backend*", "models*", "utils*", "ui*"]),
    py_modules=["config", "main"],
    package_dir={"": "src"},
    install_requires=[
        "PySide6>=6.5.0,<6.12",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    python_requires=">=3.11",
    entry_points={
        "console_scripts": [
            "primeswitch=main:main",
        ],
        "gui_scripts": [
            "primeswitch-gui=main:gui_main",
        ]
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: GNU General Public License v3 (GPLv3)",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Desktop Environment",
        "Topic :: System :: Hardware",
    ],
    keywords="nvidia prime prime-select optimus gpu hybrid-graphics",
)
