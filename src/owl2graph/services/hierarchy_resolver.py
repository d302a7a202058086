"""
Hierarchy edge emission from direct superclass queries.
"""

import logging
from dataclasses import dataclass, field
from typing import List

from rdflib import URIRef

from ..formats.owl.name_resolver import NameResolver
from ..models import HierarchyEdge, RelationshipKind
from ..reasoning.base import ReasoningOracle
from ..store.base import GraphTransaction, NodeHandle
from ..store.registry import NodeRegistry
from ..constants import GraphSchema

logger = logging.getLogger(__name__)


@dataclass
class HierarchyResolution:
    """Edges written for one class, the parent classes they point at and any warnings."""
    edges: List[HierarchyEdge] = field(default_factory=list)
    parents: List[URIRef] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


class HierarchyResolver:
    """
    Writes the direct-parent edges of a class.

    A class without direct superclasses gets one ``isA`` edge to the root.
    Otherwise it gets one ``partOf`` edge per direct superclass group, to the
    group's representative. Parent nodes are created on demand so edges never
    dangle, whatever order classes are visited in. No transitive edges.
    """

    def __init__(
        self,
        oracle: ReasoningOracle,
        name_resolver: NameResolver,
        registry: NodeRegistry,
        tx: GraphTransaction,
        root: NodeHandle,
    ):
        self.oracle = oracle
        self.name_resolver = name_resolver
        self.registry = registry
        self.tx = tx
        self.root = root

    def resolve(self, cls: URIRef, key: str, node: NodeHandle) -> HierarchyResolution:
        resolution = HierarchyResolution()
        groups = self.oracle.get_direct_superclasses(cls)

        if not groups:
            self.tx.create_relationship(node, self.root, RelationshipKind.IS_A.value)
            resolution.edges.append(HierarchyEdge(key, GraphSchema.ROOT_KEY, RelationshipKind.IS_A))
            return resolution

        for group in groups:
            parent = group.representative
            parent_key = self.name_resolver.key_for(parent)
            if len(group) > 1:
                members = sorted(str(m) for m in group.members)
                logger.debug(f"{key}: equivalent superclasses {members}, using {parent}")
                resolution.warnings.append(
                    f"{key}: equivalent superclasses {', '.join(members)} collapsed into {parent_key}"
                )
            parent_node = self.registry.get_or_create(parent_key)
            self.tx.create_relationship(node, parent_node, RelationshipKind.PART_OF.value)
            resolution.edges.append(HierarchyEdge(key, parent_key, RelationshipKind.PART_OF))
            resolution.parents.append(parent)

        return resolution
