"""
Store package - property graph backends for the mapping pass.

Components:
- base: GraphStore / GraphTransaction interfaces
- embedded: networkx graph persisted as node-link JSON
- neo4j_store: Neo4j server via the official driver
- registry: NodeRegistry get-or-create over a transaction
"""

from typing import Optional

from neo4j.exceptions import DriverError, Neo4jError

from ..constants import StoreDefaults
from .base import GraphStore, GraphStoreError, GraphTransaction, NodeHandle
from .embedded import EmbeddedGraphStore, EmbeddedTransaction
from .neo4j_store import Neo4jConfig, Neo4jGraphStore, Neo4jTransaction
from .registry import NodeRegistry


def create_graph_store(
    backend: str,
    db_path: str = StoreDefaults.GRAPH_DB_PATH,
    neo4j_config: Optional[Neo4jConfig] = None,
) -> GraphStore:
    """
    Open an empty graph store for a run.

    The run is destructive: the embedded database directory is deleted and
    recreated, a Neo4j database has all its nodes removed.

    Raises:
        GraphStoreError: If the directory cannot be recreated or the Neo4j
            server cannot be reached or prepared.
    """
    if backend == StoreDefaults.BACKEND_EMBEDDED:
        try:
            return EmbeddedGraphStore.recreate(db_path)
        except OSError as e:
            raise GraphStoreError(f"Cannot recreate graph database directory {db_path}: {e}") from e
    if backend == StoreDefaults.BACKEND_NEO4J:
        config = neo4j_config or Neo4jConfig()
        try:
            store = Neo4jGraphStore.connect(config)
        except (DriverError, Neo4jError) as e:
            raise GraphStoreError(f"Cannot connect to Neo4j at {config.uri}: {e}") from e
        try:
            store.reset()
            store.initialize()
        except (DriverError, Neo4jError) as e:
            store.close()
            raise GraphStoreError(f"Cannot prepare Neo4j database {config.database}: {e}") from e
        return store
    raise ValueError(
        f"Unknown store backend '{backend}'. Supported: {', '.join(StoreDefaults.SUPPORTED_BACKENDS)}"
    )


__all__ = [
    'GraphStore',
    'GraphStoreError',
    'GraphTransaction',
    'NodeHandle',
    'EmbeddedGraphStore',
    'EmbeddedTransaction',
    'Neo4jConfig',
    'Neo4jGraphStore',
    'Neo4jTransaction',
    'NodeRegistry',
    'create_graph_store',
]
