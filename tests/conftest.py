"""
Pytest configuration and fixtures for the test suite.

Defines markers for selective test execution:
    pytest -m unit          # Fast unit tests
    pytest -m integration   # Whole-run tests over files on disk
    pytest -m slow          # Tests that take >1s

Fixtures are centralized in tests/fixtures/ for reuse across all test modules.
"""

import json
import os
import sys

import pytest

# Add src to path for imports
src_dir = os.path.join(os.path.dirname(__file__), '..', 'src')
if src_dir not in sys.path:
    sys.path.insert(0, src_dir)

# Add tests directory to path for fixtures import
tests_dir = os.path.dirname(__file__)
if tests_dir not in sys.path:
    # Ensure src directory stays ahead of tests for module resolution
    sys.path.insert(1, tests_dir)

# Import centralized fixtures
from fixtures import (
    DISCIPLINES_TTL,
    ANNOTATED_TTL,
    EQUIVALENCE_TTL,
    SAMPLE_LOADER_CONFIG,
)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Fast unit tests")
    config.addinivalue_line("markers", "integration: Whole-run tests over ontology files on disk")
    config.addinivalue_line("markers", "slow: Tests that take more than 1 second")


# =============================================================================
# Ontology Fixtures
# =============================================================================

@pytest.fixture
def disciplines_ontology():
    """Parsed five-class discipline hierarchy."""
    from owl2graph.formats.owl import OntologySource
    return OntologySource.from_content(DISCIPLINES_TTL, source_path="fairsharing-disciplines.ttl")


@pytest.fixture
def annotated_ontology():
    """Parsed ontology declaring the alternative-term annotation properties."""
    from owl2graph.formats.owl import OntologySource
    return OntologySource.from_content(ANNOTATED_TTL, source_path="annotated.ttl")


@pytest.fixture
def equivalence_ontology():
    """Parsed ontology with two equivalent classes and one subclass."""
    from owl2graph.formats.owl import OntologySource
    return OntologySource.from_content(EQUIVALENCE_TTL, source_path="equivalence.ttl")


@pytest.fixture
def write_ontology(tmp_path):
    """Factory writing ontology content to a named file under tmp_path."""
    def _write(name: str, content: str) -> str:
        path = tmp_path / name
        path.write_text(content, encoding='utf-8')
        return str(path)
    return _write


# =============================================================================
# Store Fixtures
# =============================================================================

@pytest.fixture
def memory_store():
    """Embedded graph store without a backing directory."""
    from owl2graph.store import EmbeddedGraphStore
    return EmbeddedGraphStore()


@pytest.fixture
def db_path(tmp_path):
    """Path for an embedded database directory (not created)."""
    return str(tmp_path / "graph.db")


# =============================================================================
# Configuration Fixtures
# =============================================================================

@pytest.fixture
def sample_config():
    """Sample loader configuration dictionary."""
    return json.loads(json.dumps(SAMPLE_LOADER_CONFIG))


@pytest.fixture
def temp_config_file(tmp_path, sample_config):
    """Create a temporary configuration file for testing."""
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps(sample_config, indent=2))
    return str(config_file)
