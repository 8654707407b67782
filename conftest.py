"""
Root conftest: make the src/ packages importable without installation.
"""

import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent / "src"))

logger = logging.getLogger(__name__)
