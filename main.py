#!/usr/bin/env python3
"""Run Quiz Master from a source checkout."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent / "src"))

from quiz_master.cli import main  # noqa: E402

if __name__ == "__main__":
    main()
