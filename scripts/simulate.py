#!/usr/bin/env python3
"""Run the projector throw simulation from a source checkout."""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from throwsim.cli import main


if __name__ == "__main__":
    sys.exit(main())
