"""
Load command - maps a batch of OWL files onto a freshly wiped graph store.

Files are processed strictly in the order given. Each file gets its own
mapping pass and transaction; a pass that is rolled back does not stop the
run. A file that cannot be read or parsed ends the run with exit code 1 and
the files after it are not processed.
"""

import argparse
import logging
from dataclasses import replace
from typing import Callable, List, Optional

from ..config import ConfigError, LoaderConfig
from ..constants import ExitCode
from ..formats.owl import LabelClassifier, NameResolver, OntologyLoadError, OntologySource
from ..models import MappingResult
from ..services import GraphMappingOrchestrator, build_mapping_context
from ..store import GraphStore, GraphStoreError, create_graph_store
from .helpers import print_footer, print_header, setup_logging

logger = logging.getLogger(__name__)

StoreFactory = Callable[[LoaderConfig], GraphStore]


def default_store_factory(config: LoaderConfig) -> GraphStore:
    """Wipe and open the store selected by ``config``; raises GraphStoreError on failure."""
    return create_graph_store(config.store_backend, config.db_path, config.neo4j)


def resolve_config(args: argparse.Namespace) -> LoaderConfig:
    """
    Build the run configuration: the JSON file (if any), then command line overrides.

    Raises:
        ConfigError: If the file is unreadable or a value is invalid.
    """
    config = LoaderConfig.from_file(args.config) if args.config else LoaderConfig()

    neo4j = replace(
        config.neo4j,
        **{
            name: value
            for name, value in (
                ('uri', args.neo4j_uri),
                ('username', args.neo4j_user),
                ('database', args.neo4j_database),
            )
            if value is not None
        },
    )
    logging_settings = dict(config.logging_settings)
    if args.log_level:
        logging_settings['level'] = args.log_level
    if args.log_file:
        logging_settings['file'] = args.log_file

    return config.with_overrides(
        db_path=args.db_path,
        reasoner=args.reasoner,
        store_backend=args.store_backend,
        neo4j=neo4j,
        show_progress=False if args.no_progress else None,
        logging_settings=logging_settings,
    )


class LoadCommand:
    """Command to load ontology files into the graph store."""

    def __init__(self, store_factory: Optional[StoreFactory] = None):
        """
        Args:
            store_factory: Builds the (already wiped) store for a config.
                Injected by tests; defaults to ``create_graph_store``.
        """
        self.store_factory = store_factory or default_store_factory
        self.results: List[MappingResult] = []

    def execute(self, args: argparse.Namespace) -> int:
        try:
            config = resolve_config(args)
        except ConfigError as e:
            setup_logging(level=args.log_level, log_file=args.log_file)
            logger.error(f"Configuration error: {e}")
            return ExitCode.ERROR

        setup_logging(config=config.logging_settings)

        paths = [p.strip() for p in args.ontology_paths]
        classifier = LabelClassifier(config.categories)
        name_resolver = NameResolver(config.key_strategy)

        try:
            store = self.store_factory(config)
        except GraphStoreError as e:
            logger.error(f"Fatal: {e}")
            return ExitCode.ERROR
        logger.info(f"Graph store ready: {store!r}")
        try:
            orchestrator = GraphMappingOrchestrator(
                store, name_resolver, show_progress=config.show_progress
            )
            for path in paths:
                self.results.append(self._load_file(path, config, classifier, orchestrator))
        except OntologyLoadError as e:
            logger.error(f"Fatal: {e}")
            logger.error("Remaining ontology files were not processed")
            return ExitCode.ERROR
        finally:
            store.close()

        self._print_report()
        logger.info("Exiting with success...")
        return ExitCode.SUCCESS

    def _load_file(
        self,
        path: str,
        config: LoaderConfig,
        classifier: LabelClassifier,
        orchestrator: GraphMappingOrchestrator,
    ) -> MappingResult:
        logger.info(f"Loading ontology {path}")
        ontology = OntologySource.from_file(path)
        category = classifier.classify_path(path)

        context = build_mapping_context(
            ontology,
            category,
            config.reasoner,
            alternative_term_iri=config.annotations.alternative_term_iri,
            preferred_display_name_iri=config.annotations.preferred_display_name_iri,
            synonym_properties=config.annotations.synonym_properties,
        )
        result = orchestrator.map_ontology(context)
        if result.aborted:
            logger.warning(f"Nothing committed for {path}: {result.error}")
        return result

    def _print_report(self) -> None:
        print_header("Load Report")
        for result in self.results:
            print(result.get_summary())
        committed = sum(1 for r in self.results if r.committed)
        print(f"\nFiles committed: {committed}/{len(self.results)}")
        print_footer()
