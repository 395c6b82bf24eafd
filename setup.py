#!/usr/bin/env python
from setuptools import find_packages, setup

setup(
    name="psd-import",
    version="1.0.0",
    description="Importer for layered Adobe Photoshop PSD files",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_packages("src"),
    install_requires=[
        "attrs>=23.1.0",
        "numpy",
        "Pillow>=10.3.0",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["psd-import=psd_import.cli:main"],
    },
)
