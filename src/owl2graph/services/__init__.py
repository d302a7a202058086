"""
Services package - the mapping pass and its hierarchy step.
"""

from .hierarchy_resolver import HierarchyResolution, HierarchyResolver
from .mapping_pipeline import (
    GraphMappingOrchestrator,
    MappingContext,
    build_mapping_context,
    map_ontology,
)

__all__ = [
    'HierarchyResolution',
    'HierarchyResolver',
    'GraphMappingOrchestrator',
    'MappingContext',
    'build_mapping_context',
    'map_ontology',
]
