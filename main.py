#!/usr/bin/env python3
"""
main.py — Quick-start entry point.

    python main.py simplify my_photo.jpg -o simple.png
    python main.py simplify my_photo.jpg --gif --padding

Or use the full CLI:

    python -m quad_simplify.cli batch --help
"""

from quad_simplify.cli import app

if __name__ == "__main__":
    app()
