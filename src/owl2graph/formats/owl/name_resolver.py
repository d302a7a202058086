"""
Node key derivation from rendered class identifiers.

Keys are derived from the bracketed IRI rendering of a class (``<http://x#Y>``):
the text between the fragment marker and the closing bracket when a fragment
is present, the full rendering otherwise.

Known weakness: two IRIs that share a fragment but live in different
namespaces map to the same key, and IRIs without a fragment keep their
brackets. The rule is kept exactly so existing graphs stay comparable; swap
the strategy here to change it.
"""

import logging
from typing import Callable, Dict

from rdflib import URIRef

from ...constants import NameResolution
from .owl_parser import OntologySource

logger = logging.getLogger(__name__)

FRAGMENT_STRATEGY = "fragment"
LOCAL_NAME_STRATEGY = "local_name"


def fragment_key(qualified_name: str) -> str:
    """Substring between the fragment marker and the closing delimiter, else the input."""
    if NameResolution.FRAGMENT_MARKER not in qualified_name:
        return qualified_name
    start = qualified_name.index(NameResolution.FRAGMENT_MARKER) + 1
    end = qualified_name.find(NameResolution.CLOSING_DELIMITER, start)
    if end == -1:
        return qualified_name[start:]
    return qualified_name[start:end]


def local_name_key(qualified_name: str) -> str:
    """Last '#' or '/' segment of the IRI, brackets stripped."""
    iri = qualified_name.strip("<>")
    for sep in ("#", "/"):
        if sep in iri:
            tail = iri.rsplit(sep, 1)[1]
            if tail:
                return tail
    return iri


_STRATEGIES: Dict[str, Callable[[str], str]] = {
    FRAGMENT_STRATEGY: fragment_key,
    LOCAL_NAME_STRATEGY: local_name_key,
}


class NameResolver:
    """Derives node keys and log-friendly labels for ontology classes."""

    def __init__(self, strategy: str = FRAGMENT_STRATEGY):
        if strategy not in _STRATEGIES:
            raise ValueError(
                f"Unknown key strategy '{strategy}'. Supported: {', '.join(sorted(_STRATEGIES))}"
            )
        self.strategy = strategy
        self._derive = _STRATEGIES[strategy]

    def key_for(self, cls: URIRef) -> str:
        return self.key_for_name(OntologySource.qualified_name(cls))

    def key_for_name(self, qualified_name: str) -> str:
        return self._derive(qualified_name)

    def label_for(self, cls: URIRef) -> str:
        return local_name_key(OntologySource.qualified_name(cls))
