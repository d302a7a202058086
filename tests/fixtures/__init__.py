"""
Centralized test fixtures for the ontology loader test suite.

This package provides reusable fixtures for testing, including:
- OWL sample content (Turtle and RDF/XML)
- Loader configuration dictionaries

Usage:
    from fixtures import DISCIPLINES_TTL, SAMPLE_LOADER_CONFIG

Or use the pytest fixtures in conftest.py which import from here.
"""

from .owl_fixtures import (
    EX,
    PREFIXES,
    # Hierarchy
    DISCIPLINES_TTL,
    DISCIPLINES_KEYS,
    UNDECLARED_PARENT_TTL,
    EXPRESSION_PARENTS_TTL,
    SECOND_DOMAIN_TTL,
    # Annotations
    ANNOTATED_TTL,
    LABELS_ONLY_TTL,
    # Equivalence
    EQUIVALENCE_TTL,
    # Consistency
    UNSATISFIABLE_TTL,
    DISJOINT_TTL,
    # Malformed
    MALFORMED_TTL,
    EMPTY_TTL,
    # RDF/XML
    SPECIES_OWL,
    MALFORMED_IRI_OWL,
    generate_chain_ttl,
)

from .config_fixtures import (
    SAMPLE_LOADER_CONFIG,
    MINIMAL_LOADER_CONFIG,
    INVALID_REASONER_CONFIG,
    INVALID_CATEGORY_CONFIG,
)

__all__ = [
    'EX',
    'PREFIXES',
    'DISCIPLINES_TTL',
    'DISCIPLINES_KEYS',
    'UNDECLARED_PARENT_TTL',
    'EXPRESSION_PARENTS_TTL',
    'SECOND_DOMAIN_TTL',
    'ANNOTATED_TTL',
    'LABELS_ONLY_TTL',
    'EQUIVALENCE_TTL',
    'UNSATISFIABLE_TTL',
    'DISJOINT_TTL',
    'MALFORMED_TTL',
    'EMPTY_TTL',
    'SPECIES_OWL',
    'MALFORMED_IRI_OWL',
    'generate_chain_ttl',
    'SAMPLE_LOADER_CONFIG',
    'MINIMAL_LOADER_CONFIG',
    'INVALID_REASONER_CONFIG',
    'INVALID_CATEGORY_CONFIG',
]
