"""
owl2graph - load reasoned OWL class hierarchies into a property graph.

Components:
- formats.owl: ontology parsing, key derivation, annotations, file categories
- reasoning: consistency checking and direct superclass queries
- store: embedded (networkx) and Neo4j graph stores
- services: the per-file mapping pass
- cli: command line entry point
"""

from .config import ConfigError, LoaderConfig
from .formats.owl import OntologyLoadError, OntologySource
from .models import MappingResult, MappingState, NodeCategory
from .services import GraphMappingOrchestrator, map_ontology
from .store import EmbeddedGraphStore, create_graph_store

__version__ = "0.1.0"

__all__ = [
    'ConfigError',
    'LoaderConfig',
    'OntologyLoadError',
    'OntologySource',
    'MappingResult',
    'MappingState',
    'NodeCategory',
    'GraphMappingOrchestrator',
    'map_ontology',
    'EmbeddedGraphStore',
    'create_graph_store',
]
