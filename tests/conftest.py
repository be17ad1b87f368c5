"""
Pytest configuration for the press tests.

Puts the project root on sys.path so `constants` and `press` import the same
way they do when running main.py.
"""

import os
import sys

import pytest

_project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from press.config import AnimationConfig, PressConfig  # noqa: E402


@pytest.fixture
def config():
    return PressConfig()


@pytest.fixture
def crushing_config():
    """Exaggeration large enough that the default pistons reach the ceiling."""
    return PressConfig(animation=AnimationConfig(visual_exaggeration=100.0))
