"""Packaging for Pomotimer.

Install for development:
    pip install -e ".[test]"

Build a macOS .app bundle:
    pip install py2app
    python setup.py py2app
"""

import sys

from setuptools import setup

APP = ["main.py"]
DATA_FILES = []
OPTIONS = {
    "argv_emulation": False,
    "iconfile": None,
    "plist": {
        "CFBundleName": "Pomotimer",
        "CFBundleDisplayName": "Pomotimer",
        "CFBundleIdentifier": "com.pomotimer.app",
        "CFBundleVersion": "0.1.0",
        "CFBundleShortVersionString": "0.1.0",
        "LSBackgroundOnly": True,
        "LSMinimumSystemVersion": "13.0",
    },
}

bundle = {}
if "py2app" in sys.argv:
    bundle = {
        "app": APP,
        "data_files": DATA_FILES,
        "options": {"py2app": OPTIONS},
        "setup_requires": ["py2app"],
    }

setup(
    name="Pomotimer",
    version="0.1.0",
    packages=["pomotimer", "pomotimer.timer"],
    python_requires=">=3.10",
    install_requires=["PyQt6"],
    extras_require={"test": ["pytest"]},
    **bundle,
)
