"""
Centralized configuration constants for the OWL to property graph loader.

This module provides a single source of truth for all configuration constants,
default values, and well-known IRIs used throughout the application.
"""

from enum import IntEnum
from typing import Final

# ============================================================================
# Exit Codes
# ============================================================================

class ExitCode(IntEnum):
    """Exit codes for the loader CLI.

    - 0: Success (files whose mapping was rolled back still count as success)
    - 1: Argument parsing failure or fatal ontology load error
    """
    SUCCESS = 0
    ERROR = 1


# ============================================================================
# Graph Store
# ============================================================================

class StoreDefaults:
    """Graph store defaults."""

    GRAPH_DB_PATH: Final[str] = "var/fairsharing-ont-lite.db"
    """Default location of the embedded graph database directory."""

    GRAPH_FILE_NAME: Final[str] = "graph.json"
    """Node-link JSON file written inside the database directory on commit."""

    BACKEND_EMBEDDED: Final[str] = "embedded"
    BACKEND_NEO4J: Final[str] = "neo4j"
    SUPPORTED_BACKENDS: Final[tuple[str, ...]] = ("embedded", "neo4j")

    NEO4J_URI: Final[str] = "bolt://localhost:7687"
    NEO4J_USERNAME: Final[str] = "neo4j"
    NEO4J_DATABASE: Final[str] = "neo4j"
    NEO4J_PASSWORD_ENV: Final[str] = "NEO4J_PASSWORD"
    NEO4J_NODE_LABEL: Final[str] = "OntologyClass"
    """Base label carried by every node written to Neo4j, backs the key constraint."""


# ============================================================================
# Persisted Graph Schema
# ============================================================================

class GraphSchema:
    """Property keys and relationship types other tools may depend on."""

    KEY_PROPERTY: Final[str] = "className"
    """Internal dedup property holding the derived node key."""

    IRI: Final[str] = "iri"
    NAME: Final[str] = "name"
    DISPLAY_NAME: Final[str] = "displayName"
    ALTERNATIVE_NAMES: Final[str] = "alternativeNames"

    IS_A: Final[str] = "isA"
    PART_OF: Final[str] = "partOf"

    ROOT_KEY: Final[str] = "owl:Thing"
    ROOT_NAME: Final[str] = "Thing"


# ============================================================================
# Name Resolution
# ============================================================================

class NameResolution:
    """Delimiters used when deriving a node key from a rendered class IRI."""

    FRAGMENT_MARKER: Final[str] = "#"
    CLOSING_DELIMITER: Final[str] = ">"


# ============================================================================
# Annotation IRIs
# ============================================================================

class AnnotationIRIs:
    """Well-known annotation property IRIs."""

    OBO_ALTERNATIVE_TERM: Final[str] = "http://purl.obolibrary.org/obo/IAO_0000118"
    """IAO 'alternative term'; the root of the synonym property set."""

    FAIRSHARING_ALTERNATIVE_TERM: Final[str] = "http://www.fairsharing.org/fairsharing/FAIRO_0000001"
    """Sub-property of the alternative term whose literal also becomes the displayName."""

    OIO_HAS_EXACT_SYNONYM: Final[str] = "http://www.geneontology.org/formats/oboInOwl#hasExactSynonym"
    OIO_HAS_RELATED_SYNONYM: Final[str] = "http://www.geneontology.org/formats/oboInOwl#hasRelatedSynonym"
    OIO_HAS_BROAD_SYNONYM: Final[str] = "http://www.geneontology.org/formats/oboInOwl#hasBroadSynonym"

    OIO_SYNONYMS: Final[tuple[str, ...]] = (
        OIO_HAS_EXACT_SYNONYM,
        OIO_HAS_RELATED_SYNONYM,
        OIO_HAS_BROAD_SYNONYM,
    )


# ============================================================================
# Reasoning
# ============================================================================

class ReasonerConfig:
    """Reasoner selection."""

    OWLRL: Final[str] = "owlrl"
    STRUCTURAL: Final[str] = "structural"
    SUPPORTED_REASONERS: Final[tuple[str, ...]] = ("owlrl", "structural")
    DEFAULT_REASONER: Final[str] = "owlrl"

    ERROR_MESSAGE_TYPE: Final[str] = "http://www.daml.org/2002/03/agents/agent-ont#ErrorMessage"
    """rdf:type owlrl gives to the node collecting consistency violations."""


# ============================================================================
# Category Classification
# ============================================================================

class CategoryRules:
    """Ordered (keyword, category) pairs matched against input file names."""

    DEFAULT_RULES: Final[tuple[tuple[str, str], ...]] = (
        ("disciplines", "DISCIPLINE"),
        ("fairsharing", "DOMAIN"),
        ("taxon", "SPECIES"),
    )
    FALLBACK: Final[str] = "GENERIC"


# ============================================================================
# Processing
# ============================================================================

class ProcessingLimits:
    """Processing thresholds."""

    PROGRESS_MIN_ITEMS: Final[int] = 10
    """Progress bars are hidden for signatures smaller than this."""

    LARGE_GRAPH_TRIPLES: Final[int] = 100000
    """Triple count above which a slow-processing warning is logged."""


# ============================================================================
# Logging
# ============================================================================

class LoggingConfig:
    """Logging configuration."""

    DEFAULT_LOG_LEVEL: Final[str] = "INFO"
    """Default logging level."""

    LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    """Default log format string."""

    DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"
    """Default date format for logs."""

    DEFAULT_FORMAT_STYLE: Final[str] = "text"
    """Human-readable formatter style."""

    JSON_DATE_FORMAT: Final[str] = "%Y-%m-%dT%H:%M:%S.%fZ"
    """ISO-8601 timestamp format for structured logs."""

    SUPPORTED_FORMATS: Final[tuple[str, ...]] = ("text", "json")
    """Supported formatter styles."""

    MAX_LOG_FILE_MB: Final[int] = 10
    """Maximum log file size before rotation (MB)."""

    LOG_BACKUP_COUNT: Final[int] = 5
    """Number of backup log files to keep."""

    ROTATION_ENABLED: Final[bool] = True
    """Enable log rotation by default when a file handler is configured."""
