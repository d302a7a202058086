"""
Reasoning package - consistency checking and subsumption for the mapping pass.

Components:
- base: ReasoningOracle protocol, ClassGroup, shared direct-superclass logic
- owlrl_reasoner: OWL 2 RL closure via owlrl
- structural_reasoner: told hierarchy only
"""

from ..constants import ReasonerConfig
from ..formats.owl.owl_parser import OntologySource
from .base import (
    ClassGroup,
    InconsistentOntologyError,
    ReasoningOracle,
    SubsumptionReasoner,
)
from .owlrl_reasoner import OwlRlReasoner
from .structural_reasoner import StructuralReasoner

_REASONERS = {
    ReasonerConfig.OWLRL: OwlRlReasoner,
    ReasonerConfig.STRUCTURAL: StructuralReasoner,
}


def create_reasoner(name: str, ontology: OntologySource) -> SubsumptionReasoner:
    """Instantiate the reasoner registered under ``name`` for ``ontology``."""
    try:
        reasoner_cls = _REASONERS[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown reasoner '{name}'. Supported: {', '.join(ReasonerConfig.SUPPORTED_REASONERS)}"
        ) from None
    return reasoner_cls(ontology)


__all__ = [
    'ClassGroup',
    'InconsistentOntologyError',
    'ReasoningOracle',
    'SubsumptionReasoner',
    'OwlRlReasoner',
    'StructuralReasoner',
    'create_reasoner',
]
