"""
Label and synonym extraction.

The synonym property set is resolved once per ontology: the designated
"alternative term" annotation property plus its declared sub-properties,
optionally followed by extra synonym properties enabled in config. Each class
then has its annotations read once, right after its node is created.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from rdflib import Literal, URIRef

from ...constants import AnnotationIRIs
from ...models import ClassNode
from .owl_parser import OntologySource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnnotationPropertySet:
    """
    Synonym annotation properties resolved for one ontology.

    Attributes:
        alternative_term: The located alternative-term property, or None when
            the ontology does not declare it.
        properties: Properties whose literals feed ``alternativeNames``, in
            lookup order.
        preferred_display_name_iri: IRI whose literals also override
            ``displayName``.
    """
    alternative_term: Optional[URIRef] = None
    properties: Tuple[URIRef, ...] = ()
    preferred_display_name_iri: str = AnnotationIRIs.FAIRSHARING_ALTERNATIVE_TERM

    @property
    def is_empty(self) -> bool:
        return not self.properties

    def overrides_display_name(self, prop: URIRef) -> bool:
        return str(prop) == self.preferred_display_name_iri


def resolve_annotation_properties(
    ontology: OntologySource,
    alternative_term_iri: str = AnnotationIRIs.OBO_ALTERNATIVE_TERM,
    preferred_display_name_iri: str = AnnotationIRIs.FAIRSHARING_ALTERNATIVE_TERM,
    extra_synonym_iris: Iterable[str] = (),
) -> AnnotationPropertySet:
    """
    Locate the alternative-term property and walk its sub-properties.

    A missing alternative-term property is not an error: the returned set then
    only holds the extra synonym properties that the ontology declares, and
    only the rdfs:label behaviour applies when that is empty too.
    """
    properties = []
    alternative_term = ontology.find_annotation_property(alternative_term_iri)

    if alternative_term is not None:
        logger.info(f"OBO Alternative Term is: {alternative_term}")
        properties.append(alternative_term)
        for sub_property in ontology.sub_properties(alternative_term):
            if sub_property not in properties:
                properties.append(sub_property)
        logger.info(f"Alternative Terms are: {', '.join(str(p) for p in properties)}")
    else:
        logger.info(f"OBO Alternative Term not found in ontology {ontology.source_path}")

    for iri in extra_synonym_iris:
        prop = ontology.find_annotation_property(iri)
        if prop is None:
            logger.debug(f"Synonym property {iri} not declared in {ontology.source_path}")
            continue
        if prop not in properties:
            properties.append(prop)

    return AnnotationPropertySet(
        alternative_term=alternative_term,
        properties=tuple(properties),
        preferred_display_name_iri=preferred_display_name_iri,
    )


class AnnotationExtractor:
    """Fills the label fields of a ClassNode from the class annotations."""

    def __init__(self, ontology: OntologySource, property_set: AnnotationPropertySet):
        self.ontology = ontology
        self.property_set = property_set
        self.warnings: List[str] = []

    def extract(self, cls: URIRef, node: ClassNode) -> ClassNode:
        """
        Resolve ``name``, ``displayName`` and ``alternativeNames`` for ``cls``.

        The last rdfs:label wins for both names; a literal of the preferred
        display name property then overrides ``displayName`` only.
        """
        for literal in self.ontology.labels(cls):
            node.name = str(literal)
            node.display_name = str(literal)

        alternative_names = []
        for prop in self.property_set.properties:
            for raw in self.ontology.annotation_values(cls, prop):
                if not isinstance(raw, Literal):
                    self.warnings.append(f"{node.key}: skipped non-literal {prop} value {raw}")
                    continue
                value = str(raw)
                alternative_names.append(value)
                if self.property_set.overrides_display_name(prop):
                    node.display_name = value
        node.alternative_names = alternative_names

        logger.debug(
            f"Annotations for {node.key}: displayName={node.display_name!r}, "
            f"alternativeNames={alternative_names}"
        )
        return node
