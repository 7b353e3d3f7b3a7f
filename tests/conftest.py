"""
Pytest configuration and shared fixtures.
"""

import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from component_annotate.annotate import FragmentContext, ProcessingContext
from component_annotate.config import AnnotationConfig
from component_annotate.parser import parse_file


# =============================================================================
# PATH FIXTURES
# =============================================================================

@pytest.fixture
def fixtures_dir():
    """Path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def bananas_pizza_app(fixtures_dir):
    """Parsed React Native sample with two class components and a function component."""
    return parse_file(fixtures_dir / "bananas_pizza_app.jsx")


# =============================================================================
# CONFIG FIXTURES
# =============================================================================

@pytest.fixture
def make_context():
    """Factory for ProcessingContext with config overrides."""
    def _make(component_name="", fragments=None, **overrides):
        overrides.setdefault("source_file_name", "test.jsx")
        return ProcessingContext(
            config=AnnotationConfig(**overrides),
            fragments=fragments or FragmentContext(),
            component_name=component_name,
        )
    return _make
