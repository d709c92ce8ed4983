"""Run the portal CLI from a source checkout without installing the package."""

import sys
from pathlib import Path

# Add src to Python path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from conference_portal.cli import main

if __name__ == "__main__":
    main()
