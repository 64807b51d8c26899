"""
Root conftest.py to configure pytest for all test discovery.

Adds src/ to Python path so all imports work correctly.
"""

import sys
from pathlib import Path

project_root = Path(__file__).parent
sys.path.insert(0, str(project_root / 'src'))
sys.path.insert(0, str(project_root))
