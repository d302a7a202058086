"""
Property graph data types.

This module defines the data structures that describe what the mapping pass
writes to the graph store: class nodes, hierarchy edges and the category tags
applied per input file.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from ..constants import GraphSchema


class NodeCategory(str, Enum):
    """Graph-level category tag, one per input file."""
    DISCIPLINE = "DISCIPLINE"
    DOMAIN = "DOMAIN"
    SPECIES = "SPECIES"
    GENERIC = "GENERIC"


class RelationshipKind(str, Enum):
    """Hierarchy relationship types written by the mapping pass."""
    IS_A = GraphSchema.IS_A
    PART_OF = GraphSchema.PART_OF


@dataclass
class ClassNode:
    """
    Node-side view of one ontology class.

    Attributes:
        key: Derived short identifier, used only for deduplication.
        iri: Full IRI of the source class.
        name: Primary label (last rdfs:label seen), if any.
        display_name: Label shown to users; the preferred-name annotation
            overrides the rdfs:label value.
        alternative_names: Literals of the configured synonym properties,
            in collection order, duplicates kept.

    Example:
        >>> node = ClassNode(key="Biology", iri="http://example.org/onto#Biology")
        >>> node.to_properties()
        {'iri': 'http://example.org/onto#Biology', 'alternativeNames': []}
    """
    key: str
    iri: str
    name: Optional[str] = None
    display_name: Optional[str] = None
    alternative_names: List[str] = field(default_factory=list)

    def to_properties(self) -> Dict[str, Any]:
        """Convert to the persisted property map (the dedup key is written by the registry)."""
        result: Dict[str, Any] = {GraphSchema.IRI: self.iri}
        if self.name is not None:
            result[GraphSchema.NAME] = self.name
        if self.display_name is not None:
            result[GraphSchema.DISPLAY_NAME] = self.display_name
        result[GraphSchema.ALTERNATIVE_NAMES] = list(self.alternative_names)
        return result


@dataclass(frozen=True)
class HierarchyEdge:
    """A directed hierarchy edge between two node keys."""
    source_key: str
    target_key: str
    kind: RelationshipKind
