"""
OWL Ontology Source Module

This module handles ontology document parsing and signature queries over the
parsed rdflib graph.

Components:
- OntologyLoadError: Fatal error raised when a document cannot be loaded
- OntologySource: Parsed ontology handle answering class, annotation property
  and annotation queries
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Set

from rdflib import Graph, Literal, OWL, RDF, RDFS, URIRef
from rdflib.term import Node
from rdflib.util import guess_format

from ...constants import ProcessingLimits

logger = logging.getLogger(__name__)

# Built-in classes that never become nodes of their own
_BUILTIN_CLASSES = frozenset({OWL.Thing, OWL.Nothing, RDFS.Resource, RDFS.Class, OWL.Class})

DEFAULT_RDF_FORMAT = "xml"


class OntologyLoadError(Exception):
    """Raised when an ontology document cannot be read or parsed."""

    def __init__(self, source: str, message: str):
        self.source = source
        self.message = message
        super().__init__(f"Failed to load ontology from {source}: {message}")


class OntologySource:
    """
    Read-only view over a parsed ontology.

    Wraps an rdflib Graph and exposes the queries the mapping pass needs:
    the class signature, the annotation property signature, annotations of a
    class for a given property and declared sub-properties of an annotation
    property.
    """

    def __init__(self, graph: Graph, source_path: Optional[str] = None):
        self.graph = graph
        self.source_path = source_path or "<memory>"

    def __repr__(self) -> str:
        return f"OntologySource({self.source_path!r}, triples={len(self.graph)})"

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    @classmethod
    def from_file(cls, file_path: str, rdf_format: Optional[str] = None) -> "OntologySource":
        """
        Parse an ontology document from disk.

        Args:
            file_path: Path to the ontology document
            rdf_format: rdflib parser name; guessed from the file suffix when omitted

        Returns:
            Loaded OntologySource

        Raises:
            OntologyLoadError: If the file is missing, unreadable, malformed or empty
        """
        path = Path(file_path)
        if not path.is_file():
            raise OntologyLoadError(file_path, "file not found")

        fmt = rdf_format or guess_format(str(path)) or DEFAULT_RDF_FORMAT
        logger.info(f"Preparing to load ontology from file: {path.resolve()} (format: {fmt})")

        graph = Graph()
        try:
            graph.parse(str(path), format=fmt)
        except PermissionError as e:
            raise OntologyLoadError(file_path, f"permission denied: {e}") from e
        except UnicodeDecodeError as e:
            raise OntologyLoadError(file_path, f"encoding error: {e}") from e
        except Exception as e:
            raise OntologyLoadError(file_path, f"invalid {fmt} document: {e}") from e

        return cls._checked(graph, file_path)

    @classmethod
    def from_content(cls, content: str, rdf_format: str = "turtle",
                     source_path: Optional[str] = None) -> "OntologySource":
        """Parse an ontology document held in memory."""
        label = source_path or "<memory>"
        if not content or not content.strip():
            raise OntologyLoadError(label, "empty ontology content")

        graph = Graph()
        try:
            graph.parse(data=content, format=rdf_format)
        except Exception as e:
            raise OntologyLoadError(label, f"invalid {rdf_format} document: {e}") from e

        return cls._checked(graph, label)

    @classmethod
    def _checked(cls, graph: Graph, source_path: str) -> "OntologySource":
        triple_count = len(graph)
        if triple_count == 0:
            raise OntologyLoadError(source_path, "no RDF triples found")

        logger.info(f"Loaded ontology {source_path} ({triple_count} triples)")
        if triple_count > ProcessingLimits.LARGE_GRAPH_TRIPLES:
            logger.warning(
                f"Large ontology detected ({triple_count} triples). "
                "Reasoning may take several minutes."
            )
        return cls(graph, source_path)

    # ------------------------------------------------------------------
    # Signature
    # ------------------------------------------------------------------

    def classes(self) -> List[URIRef]:
        """
        Return the named classes of the ontology.

        Covers owl:Class and rdfs:Class declarations plus named classes that
        only appear in subclass or equivalence axioms. Built-in top and bottom
        classes are excluded.
        """
        found: Set[URIRef] = set()

        for class_type in (OWL.Class, RDFS.Class):
            found.update(self._uris(self.graph.subjects(RDF.type, class_type)))

        for predicate in (RDFS.subClassOf, OWL.equivalentClass):
            for s, o in self.graph.subject_objects(predicate):
                found.update(self._uris((s, o)))

        found.difference_update(_BUILTIN_CLASSES)
        return sorted(found)

    def annotation_properties(self) -> List[URIRef]:
        """
        Return annotation properties of the ontology.

        Declared owl:AnnotationProperty entities plus rdfs:label, which is
        always an annotation property when used.
        """
        found: Set[URIRef] = set(self._uris(self.graph.subjects(RDF.type, OWL.AnnotationProperty)))
        if (None, RDFS.label, None) in self.graph:
            found.add(RDFS.label)
        return sorted(found)

    def find_annotation_property(self, iri: str) -> Optional[URIRef]:
        """Locate an annotation property by IRI, compared case-insensitively."""
        wanted = iri.lower()
        for prop in self.annotation_properties():
            if str(prop).lower() == wanted:
                return prop
        return None

    def sub_properties(self, prop: URIRef) -> List[URIRef]:
        """Return the asserted direct sub-properties of an annotation property."""
        return sorted(self._uris(self.graph.subjects(RDFS.subPropertyOf, prop)))

    # ------------------------------------------------------------------
    # Annotations
    # ------------------------------------------------------------------

    def annotation_values(self, cls: URIRef, prop: URIRef) -> List[Node]:
        """All values of ``prop`` on ``cls``, literal or not."""
        return list(self.graph.objects(cls, prop))

    def annotations(self, cls: URIRef, prop: URIRef) -> List[Literal]:
        """
        Return the literal values of ``prop`` annotations on ``cls``.

        Order follows the rdflib store and is not guaranteed stable between
        parses. Non-literal values (IRIs, blank nodes) are skipped.
        """
        values: List[Literal] = []
        for value in self.annotation_values(cls, prop):
            if isinstance(value, Literal):
                values.append(value)
            else:
                logger.debug(f"Skipping non-literal {prop} annotation on {cls}: {value}")
        return values

    def labels(self, cls: URIRef) -> List[Literal]:
        return self.annotations(cls, RDFS.label)

    @staticmethod
    def qualified_name(cls: URIRef) -> str:
        """
        Render a class IRI the way keys are derived from, e.g. ``<http://x#Y>``.

        Unlike ``URIRef.n3()`` this never rejects an IRI; rdflib accepts IRIs
        with spaces or other illegal characters from RDF/XML with a warning.
        """
        return f"<{cls}>"

    @staticmethod
    def _uris(nodes: Iterable) -> Iterable[URIRef]:
        return (n for n in nodes if isinstance(n, URIRef))
