"""
OWL 2 RL reasoner backed by owlrl.

The ontology graph is copied and expanded with the OWL 2 RL deductive closure;
subsumption and consistency are then read off the closed graph. The source
graph is never modified.
"""

import logging
import time
from typing import List, Optional, Set

from owlrl import DeductiveClosure, OWLRL_Semantics
from rdflib import Graph, OWL, RDF, RDFS, URIRef

from ..constants import ReasonerConfig
from ..formats.owl.owl_parser import OntologySource
from .base import SubsumptionReasoner

logger = logging.getLogger(__name__)

_ERROR_MESSAGE = URIRef(ReasonerConfig.ERROR_MESSAGE_TYPE)
_ERROR_TEXT = URIRef(ReasonerConfig.ERROR_MESSAGE_TYPE.rsplit("#", 1)[0] + "#error")


class OwlRlReasoner(SubsumptionReasoner):
    """Reasoner computing the OWL 2 RL closure once, lazily."""

    name = ReasonerConfig.OWLRL

    def __init__(self, ontology: OntologySource):
        super().__init__()
        self.ontology = ontology
        self._closure: Optional[Graph] = None
        self._violations: Optional[List[str]] = None

    @property
    def closure(self) -> Graph:
        if self._closure is None:
            start = time.perf_counter()
            closed = Graph()
            closed += self.ontology.graph
            DeductiveClosure(
                OWLRL_Semantics,
                axiomatic_triples=False,
                datatype_axioms=False,
            ).expand(closed)
            elapsed = time.perf_counter() - start
            logger.info(
                f"OWL RL closure of {self.ontology.source_path}: "
                f"{len(self.ontology.graph)} -> {len(closed)} triples in {elapsed:.2f}s"
            )
            self._closure = closed
        return self._closure

    def violations(self) -> List[str]:
        """Consistency violations found in the closure, empty when consistent."""
        if self._violations is None:
            closed = self.closure
            found: List[str] = []
            for report in closed.subjects(RDF.type, _ERROR_MESSAGE):
                messages = [str(msg) for msg in closed.objects(report, _ERROR_TEXT)]
                found.extend(messages or ["owlrl reported an error"])
            for individual in closed.subjects(RDF.type, OWL.Nothing):
                found.append(f"{individual} is an instance of owl:Nothing")
            # Inferred types count too, so a disjoint pair can clash through subclasses
            for first, second in closed.subject_objects(OWL.disjointWith):
                if first == second:
                    continue
                shared = set(closed.subjects(RDF.type, first)) & set(closed.subjects(RDF.type, second))
                for individual in sorted(shared, key=str):
                    message = f"{individual} is typed with disjoint classes {first} and {second}"
                    if message not in found:
                        found.append(message)
            self._violations = found
        return self._violations

    def is_consistent(self) -> bool:
        violations = self.violations()
        for message in violations:
            logger.warning(f"Consistency violation in {self.ontology.source_path}: {message}")
        return not violations

    def _compute_ancestors(self, cls: URIRef) -> Set[URIRef]:
        return set(self.closure.objects(cls, RDFS.subClassOf))
