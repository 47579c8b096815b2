#!/usr/bin/env python3
# /hecto/main.py
"""
hecto Launcher
==============

Runs the editor from a source checkout without installing it:

    python main.py [FILE]

Installed copies use the ``hecto`` console script instead.
"""

import os
import sys

# Ensure the 'hecto' package is importable from the src/ layout.
src_root = os.path.join(os.path.dirname(os.path.abspath(__file__)), "src")
if src_root not in sys.path:
    sys.path.insert(0, src_root)

from hecto.app import start  # noqa: E402


if __name__ == "__main__":
    start()
