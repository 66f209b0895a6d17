"""Pytest configuration for dts2scala test suite."""

import sys
from pathlib import Path

# Add src directory to path for dts2scala imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
