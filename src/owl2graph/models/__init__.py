"""
Shared data models for the ontology to graph loader.

Usage:
    from owl2graph.models import ClassNode, NodeCategory, MappingResult
"""

from .graph_types import (
    ClassNode,
    HierarchyEdge,
    NodeCategory,
    RelationshipKind,
)
from .mapping import (
    MappingResult,
    MappingState,
)

__all__ = [
    # Graph types
    "ClassNode",
    "HierarchyEdge",
    "NodeCategory",
    "RelationshipKind",
    # Mapping results
    "MappingResult",
    "MappingState",
]
