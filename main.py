#!/usr/bin/env python3
"""
rigmap - Main Entry Point

Auto-maps the bone names of a humanoid rig (Mixamo, VRM, UE5, Rigify,
Mecanim, BVH, ...) onto the canonical joint set.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

from rigmap.cli import main


if __name__ == "__main__":
    sys.exit(main())
