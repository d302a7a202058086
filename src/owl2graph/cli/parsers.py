"""
CLI argument parser configuration.

Argument errors exit with status 1, after printing usage and help.
"""

import argparse
import sys
from typing import NoReturn

from ..constants import ExitCode, ReasonerConfig, StoreDefaults


class LoaderArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors with the loader's error status."""

    def error(self, message: str) -> NoReturn:
        self.print_help(sys.stderr)
        self.exit(int(ExitCode.ERROR), f"\n{self.prog}: error: {message}\n")


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the loader argument parser.

    Returns:
        Configured ArgumentParser.
    """
    parser = LoaderArgumentParser(
        prog="owl2graph",
        description="Load reasoned OWL class hierarchies into a property graph",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    %(prog)s -o ontologies/fairsharing-disciplines.owl
    %(prog)s -o SRAO.owl -o DOMAINS.owl -d var/fairsharing.db
    %(prog)s -o ncbitaxon.owl --reasoner structural --log-level DEBUG
    %(prog)s -o SRAO.owl --store neo4j --neo4j-uri bolt://localhost:7687
        """,
    )

    parser.add_argument(
        '-o', '--ontology-path',
        dest='ontology_paths',
        action='append',
        required=True,
        metavar='PATH',
        help='The local location of the OWL file (repeatable, processed in order)'
    )
    parser.add_argument(
        '-d', '--db-path',
        metavar='PATH',
        help=f'The local location of the database (default: {StoreDefaults.GRAPH_DB_PATH})'
    )
    parser.add_argument('-c', '--config', help='Path to a JSON configuration file')
    parser.add_argument(
        '-r', '--reasoner',
        choices=ReasonerConfig.SUPPORTED_REASONERS,
        help=f'Reasoner used for consistency and superclasses (default: {ReasonerConfig.DEFAULT_REASONER})'
    )
    parser.add_argument(
        '--store',
        dest='store_backend',
        choices=StoreDefaults.SUPPORTED_BACKENDS,
        help=f'Graph store backend (default: {StoreDefaults.BACKEND_EMBEDDED})'
    )
    parser.add_argument('--neo4j-uri', help=f'Neo4j bolt URI (default: {StoreDefaults.NEO4J_URI})')
    parser.add_argument('--neo4j-user', help='Neo4j username')
    parser.add_argument('--neo4j-database', help='Neo4j database name')
    parser.add_argument(
        '--log-level',
        choices=("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"),
        type=str.upper,
        help='Logging level (default: INFO)'
    )
    parser.add_argument('--log-file', help='Also write logs to this file')
    parser.add_argument(
        '--no-progress',
        action='store_true',
        help='Hide per-class progress bars'
    )

    return parser
