"""
Ontology to graph mapping pass.

One pass maps one ontology file inside one store transaction:

1. Ask the reasoner whether the ontology is consistent. If not, stop; the
   store is never touched.
2. Open a write transaction, make sure the ``owl:Thing`` root exists, then for
   every class of the signature: get or create its node, write its label and
   synonym properties, tag it with the file's category and write its direct
   hierarchy edges.
3. Commit if every class went through, roll back otherwise.

Failures inside a pass are recoverable: they are logged and reported on the
returned MappingResult but never raised to the caller. Fatal load errors are
raised before a pass starts, see ``OntologySource.from_file``.
"""

import logging
import time
from collections import deque
from dataclasses import dataclass
from typing import Deque, Optional, Set

from rdflib import OWL, URIRef
from tqdm import tqdm

from ..constants import GraphSchema, ProcessingLimits, ReasonerConfig
from ..formats.owl.annotation_extractor import (
    AnnotationExtractor,
    AnnotationPropertySet,
    resolve_annotation_properties,
)
from ..formats.owl.name_resolver import NameResolver
from ..formats.owl.owl_parser import OntologySource
from ..models import ClassNode, MappingResult, MappingState, NodeCategory, RelationshipKind
from ..reasoning import InconsistentOntologyError, ReasoningOracle, create_reasoner
from ..store.base import GraphStore, GraphTransaction, NodeHandle
from ..store.registry import NodeRegistry
from .hierarchy_resolver import HierarchyResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MappingContext:
    """Everything one mapping pass reads, fixed before the pass starts."""
    ontology: OntologySource
    oracle: ReasoningOracle
    annotation_properties: AnnotationPropertySet
    category: NodeCategory


def build_mapping_context(
    ontology: OntologySource,
    category: NodeCategory,
    reasoner: str,
    alternative_term_iri: Optional[str] = None,
    preferred_display_name_iri: Optional[str] = None,
    synonym_properties=(),
) -> MappingContext:
    """Resolve the annotation property set and instantiate the reasoner for ``ontology``."""
    kwargs = {}
    if alternative_term_iri is not None:
        kwargs['alternative_term_iri'] = alternative_term_iri
    if preferred_display_name_iri is not None:
        kwargs['preferred_display_name_iri'] = preferred_display_name_iri
    property_set = resolve_annotation_properties(
        ontology, extra_synonym_iris=synonym_properties, **kwargs
    )
    return MappingContext(
        ontology=ontology,
        oracle=create_reasoner(reasoner, ontology),
        annotation_properties=property_set,
        category=category,
    )


class GraphMappingOrchestrator:
    """Runs mapping passes against one graph store."""

    def __init__(
        self,
        store: GraphStore,
        name_resolver: Optional[NameResolver] = None,
        show_progress: bool = True,
    ):
        self.store = store
        self.name_resolver = name_resolver or NameResolver()
        self.show_progress = show_progress

    def map_ontology(self, context: MappingContext) -> MappingResult:
        """
        Map one ontology onto the store.

        Returns:
            MappingResult in state COMMITTED or ABORTED. Never raises for
            inconsistent ontologies or faults during the pass.
        """
        source = context.ontology.source_path
        result = MappingResult(source_path=source, category=context.category)

        try:
            consistent = context.oracle.is_consistent()
        except Exception as e:
            logger.exception(f"Consistency check failed for {source}")
            return self._abort(result, f"{type(e).__name__}: {e}")

        if not consistent:
            error = InconsistentOntologyError(source)
            logger.error(f"{error}; skipping file")
            result.inconsistent = True
            return self._abort(result, str(error))

        self._transition(result, MappingState.CONSISTENCY_CHECKED)

        start = time.perf_counter()
        try:
            with self.store.begin_transaction() as tx:
                self._transition(result, MappingState.MAPPING)
                self._run_pass(context, tx, result)
                tx.success()
        except Exception as e:
            logger.exception(f"Mapping of {source} failed; rolling back its transaction")
            return self._abort(result, f"{type(e).__name__}: {e}")

        self._transition(result, MappingState.COMMITTED)
        logger.info(
            f"Committed {source}: {result.classes_processed} classes, "
            f"{result.nodes_created} new nodes, {result.edge_count} edges "
            f"in {time.perf_counter() - start:.2f}s"
        )
        return result

    def _run_pass(self, context: MappingContext, tx: GraphTransaction, result: MappingResult) -> None:
        registry = NodeRegistry(tx)
        root = self.ensure_root(registry)
        extractor = AnnotationExtractor(context.ontology, context.annotation_properties)
        hierarchy = HierarchyResolver(context.oracle, self.name_resolver, registry, tx, root)

        signature = context.ontology.classes()
        logger.info(f"Total count is: {len(signature)}")

        visited: Set[URIRef] = set(signature)
        pending: Deque[URIRef] = deque()

        progress = tqdm(
            signature,
            desc=f"Mapping {context.category.value.lower()} classes",
            unit="class",
            disable=not self.show_progress or len(signature) < ProcessingLimits.PROGRESS_MIN_ITEMS,
        )
        for cls in progress:
            self._map_class(cls, context, tx, registry, extractor, hierarchy, result, visited, pending)

        # Parents inferred from outside the declared signature still need their own edges
        while pending:
            cls = pending.popleft()
            logger.debug(f"Mapping undeclared superclass {cls}")
            self._map_class(cls, context, tx, registry, extractor, hierarchy, result, visited, pending)

        result.nodes_created = registry.created_count
        result.warnings.extend(extractor.warnings)

    def _map_class(
        self,
        cls: URIRef,
        context: MappingContext,
        tx: GraphTransaction,
        registry: NodeRegistry,
        extractor: AnnotationExtractor,
        hierarchy: HierarchyResolver,
        result: MappingResult,
        visited: Set[URIRef],
        pending: Deque[URIRef],
    ) -> None:
        key = self.name_resolver.key_for(cls)
        handle = registry.get_or_create(key)

        node = extractor.extract(cls, ClassNode(key=key, iri=str(cls)))
        for name, value in node.to_properties().items():
            tx.set_property(handle, name, value)
        tx.add_label(handle, context.category.value)

        resolution = hierarchy.resolve(cls, key, handle)
        result.warnings.extend(resolution.warnings)
        for edge in resolution.edges:
            if edge.kind is RelationshipKind.IS_A:
                result.is_a_edges += 1
            else:
                result.part_of_edges += 1
        for parent in resolution.parents:
            if parent not in visited:
                visited.add(parent)
                pending.append(parent)

        result.classes_processed += 1
        logger.debug(f"Current OWL class is: {key}")

    def ensure_root(self, registry: NodeRegistry) -> NodeHandle:
        """Get or create the singleton ``owl:Thing`` root node."""
        return registry.get_or_create(
            GraphSchema.ROOT_KEY,
            {
                GraphSchema.IRI: str(OWL.Thing),
                GraphSchema.NAME: GraphSchema.ROOT_NAME,
                GraphSchema.DISPLAY_NAME: GraphSchema.ROOT_NAME,
            },
        )

    @staticmethod
    def _transition(result: MappingResult, state: MappingState) -> None:
        logger.debug(f"{result.source_path}: {result.state.value} -> {state.value}")
        result.state = state

    def _abort(self, result: MappingResult, error: str) -> MappingResult:
        result.error = error
        self._transition(result, MappingState.ABORTED)
        return result


def map_ontology(
    store: GraphStore,
    ontology: OntologySource,
    category: NodeCategory,
    reasoner: str = ReasonerConfig.DEFAULT_REASONER,
    name_resolver: Optional[NameResolver] = None,
    show_progress: bool = False,
) -> MappingResult:
    """Convenience wrapper: build the context for ``ontology`` and run one pass."""
    context = build_mapping_context(ontology, category, reasoner)
    orchestrator = GraphMappingOrchestrator(store, name_resolver, show_progress=show_progress)
    return orchestrator.map_ontology(context)
