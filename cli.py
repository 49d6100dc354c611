# -*- coding: utf-8 -*-
"""Console script entry point for HireBot."""

import sys
from pathlib import Path


def bot() -> None:
    """Run the HireBot Discord bot."""
    # HireBot/ must be on sys.path so internal imports (models, utils, modules) resolve.
    hirebot_dir = str(Path(__file__).resolve().parent / "HireBot")
    if hirebot_dir not in sys.path:
        sys.path.insert(0, hirebot_dir)

    from bot import app

    app()
