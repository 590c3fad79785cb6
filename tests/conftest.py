"""Root conftest for all tests - imports shared fixtures."""
# Import all fixtures from fixtures/conftest.py
import sys
from pathlib import Path

# Add src and tests directories to path
tests_dir = Path(__file__).parent
src_dir = tests_dir.parent / "src"
for path in (src_dir, tests_dir):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

# Now import fixtures
from fixtures.conftest import *  # noqa: F403, F401
