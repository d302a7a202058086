"""
Structural reasoner working on asserted axioms only.

Follows named rdfs:subClassOf links transitively and treats
owl:equivalentClass between named classes as mutual subsumption. No class
expressions are evaluated. Consistency is limited to explicit contradictions:
individuals typed owl:Nothing or typed with two asserted disjoint classes.
"""

import logging
from collections import deque
from typing import List, Set

from rdflib import OWL, RDF, RDFS, URIRef

from ..constants import ReasonerConfig
from ..formats.owl.owl_parser import OntologySource
from .base import SubsumptionReasoner

logger = logging.getLogger(__name__)


class StructuralReasoner(SubsumptionReasoner):
    """Reasoner over the told class hierarchy."""

    name = ReasonerConfig.STRUCTURAL

    def __init__(self, ontology: OntologySource):
        super().__init__()
        self.ontology = ontology

    def _told_parents(self, cls: URIRef) -> Set[URIRef]:
        graph = self.ontology.graph
        parents = {p for p in graph.objects(cls, RDFS.subClassOf) if isinstance(p, URIRef)}
        parents.update(e for e in graph.objects(cls, OWL.equivalentClass) if isinstance(e, URIRef))
        parents.update(e for e in graph.subjects(OWL.equivalentClass, cls) if isinstance(e, URIRef))
        return parents

    def _compute_ancestors(self, cls: URIRef) -> Set[URIRef]:
        seen: Set[URIRef] = set()
        queue = deque(self._told_parents(cls))
        while queue:
            current = queue.popleft()
            if current in seen:
                continue
            seen.add(current)
            queue.extend(p for p in self._told_parents(current) if p not in seen)
        return seen

    def violations(self) -> List[str]:
        graph = self.ontology.graph
        found = [
            f"{individual} is an instance of owl:Nothing"
            for individual in graph.subjects(RDF.type, OWL.Nothing)
        ]
        for first, second in graph.subject_objects(OWL.disjointWith):
            shared = set(graph.subjects(RDF.type, first)) & set(graph.subjects(RDF.type, second))
            for individual in sorted(shared, key=str):
                found.append(f"{individual} is typed with disjoint classes {first} and {second}")
        return found

    def is_consistent(self) -> bool:
        violations = self.violations()
        for message in violations:
            logger.warning(f"Consistency violation in {self.ontology.source_path}: {message}")
        return not violations
