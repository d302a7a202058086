"""
Reasoning oracle interface and shared subsumption logic.

A reasoning oracle answers two questions about one ontology: is it
consistent, and what are the direct named superclasses of a class. Direct
superclasses come back grouped into equivalence groups, one hierarchy position
per group.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Protocol, Set, runtime_checkable

from rdflib import OWL, RDFS, URIRef

logger = logging.getLogger(__name__)

# Named classes that never count as a superclass position
_IGNORED_SUPERCLASSES = frozenset({OWL.Thing, OWL.Nothing, RDFS.Resource})


class InconsistentOntologyError(Exception):
    """Raised when the oracle reports the ontology as inconsistent."""

    def __init__(self, source: str, reasons: List[str] = None):
        self.source = source
        self.reasons = list(reasons or [])
        detail = f": {'; '.join(self.reasons[:3])}" if self.reasons else ""
        super().__init__(f"Ontology is inconsistent ({source}){detail}")


@dataclass(frozen=True)
class ClassGroup:
    """
    An equivalence group of named classes.

    The representative is the lexicographically smallest IRI so that the
    chosen parent is stable across runs and library versions.
    """
    members: FrozenSet[URIRef]

    @property
    def representative(self) -> URIRef:
        return min(self.members, key=str)

    def __len__(self) -> int:
        return len(self.members)


@runtime_checkable
class ReasoningOracle(Protocol):
    """Protocol every reasoner backend satisfies."""

    def is_consistent(self) -> bool:
        ...

    def get_direct_superclasses(self, cls: URIRef) -> List[ClassGroup]:
        ...


class SubsumptionReasoner(ABC):
    """
    Base class deriving direct superclasses from an ancestor relation.

    Subclasses provide ``_ancestors`` (all named superclasses, reflexive or
    not) and ``is_consistent``; this class handles equivalence grouping and
    the removal of ancestors implied by nearer ones.
    """

    name = "base"

    def __init__(self) -> None:
        self._ancestor_cache: Dict[URIRef, FrozenSet[URIRef]] = {}

    @abstractmethod
    def is_consistent(self) -> bool:
        ...

    @abstractmethod
    def _compute_ancestors(self, cls: URIRef) -> Set[URIRef]:
        ...

    def ancestors(self, cls: URIRef) -> FrozenSet[URIRef]:
        cached = self._ancestor_cache.get(cls)
        if cached is None:
            found = {
                a for a in self._compute_ancestors(cls)
                if isinstance(a, URIRef) and a not in _IGNORED_SUPERCLASSES
            }
            found.discard(cls)
            cached = frozenset(found)
            self._ancestor_cache[cls] = cached
        return cached

    def is_subclass_of(self, sub: URIRef, sup: URIRef) -> bool:
        return sub == sup or sup in self.ancestors(sub)

    def equivalents(self, cls: URIRef) -> FrozenSet[URIRef]:
        """Named classes equivalent to ``cls``, ``cls`` included."""
        return frozenset({cls} | {a for a in self.ancestors(cls) if cls in self.ancestors(a)})

    def get_direct_superclasses(self, cls: URIRef) -> List[ClassGroup]:
        """
        Return the direct superclass groups of ``cls``, sorted by representative.

        Classes equivalent to ``cls`` are not superclasses. Among the strict
        superclasses, a group is direct when no other strict superclass sits
        below it.
        """
        own_group = self.equivalents(cls)
        strict = [a for a in self.ancestors(cls) if a not in own_group]

        groups: List[ClassGroup] = []
        seen: Set[URIRef] = set()
        for candidate in sorted(strict, key=str):
            if candidate in seen:
                continue
            members = frozenset(m for m in self.equivalents(candidate) if m in strict or m == candidate)
            seen.update(members)
            groups.append(ClassGroup(members))

        direct = []
        for group in groups:
            rep = group.representative
            covered = any(
                other is not group and self.is_subclass_of(other.representative, rep)
                for other in groups
            )
            if not covered:
                direct.append(group)

        return sorted(direct, key=lambda g: str(g.representative))
