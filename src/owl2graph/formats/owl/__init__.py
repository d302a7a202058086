"""
OWL package - ontology parsing and per-class extraction components.

Components:
- owl_parser: OntologySource over an rdflib graph, fatal OntologyLoadError
- name_resolver: node key derivation from class IRIs
- annotation_extractor: rdfs:label and synonym annotations onto ClassNode
- label_classifier: input file name to NodeCategory
"""

from .owl_parser import OntologyLoadError, OntologySource
from .name_resolver import NameResolver, fragment_key, local_name_key
from .annotation_extractor import (
    AnnotationExtractor,
    AnnotationPropertySet,
    resolve_annotation_properties,
)
from .label_classifier import LabelClassifier, classify

__all__ = [
    'OntologyLoadError',
    'OntologySource',
    'NameResolver',
    'fragment_key',
    'local_name_key',
    'AnnotationExtractor',
    'AnnotationPropertySet',
    'resolve_annotation_properties',
    'LabelClassifier',
    'classify',
]
