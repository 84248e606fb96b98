#!/usr/bin/env python3
"""Launcher: `python main.py -m coin -r pseudorandom -q "..."`, `python main.py serve --port 8000`.

Examples:
    python main.py analyze hexagram 11
    python main.py serve --host 0.0.0.0 --port 8000 --reload
"""

from __future__ import annotations

from iching_oracle.cli import entrypoint

if __name__ == "__main__":
    entrypoint()
