"""
Neo4j graph store.

Writes the class hierarchy to a Neo4j server through the official driver.
Every node carries the ``OntologyClass`` base label, backed by a uniqueness
constraint on the dedup key property; category tags become extra labels.

Example:
    >>> store = Neo4jGraphStore.connect(Neo4jConfig(password="secret"))
    >>> store.initialize()
    >>> with store.begin_transaction() as tx:
    ...     node, _ = tx.get_or_create_node("Biology")
    ...     tx.success()
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from neo4j import Driver, GraphDatabase

from ..constants import GraphSchema, StoreDefaults
from ..models import NodeCategory, RelationshipKind
from .base import GraphStore, GraphStoreError, GraphTransaction, NodeHandle

logger = logging.getLogger(__name__)

_LABEL = StoreDefaults.NEO4J_NODE_LABEL
_KEY = GraphSchema.KEY_PROPERTY

# Labels and relationship types cannot be query parameters; only these are interpolated
_ALLOWED_LABELS = frozenset(c.value for c in NodeCategory)
_ALLOWED_REL_TYPES = frozenset(k.value for k in RelationshipKind)


@dataclass
class Neo4jConfig:
    """Connection settings for a Neo4j server."""
    uri: str = StoreDefaults.NEO4J_URI
    username: str = StoreDefaults.NEO4J_USERNAME
    password: str = ""
    database: str = StoreDefaults.NEO4J_DATABASE

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'Neo4jConfig':
        """Create Neo4jConfig from a dictionary, falling back to NEO4J_PASSWORD for the password."""
        return cls(
            uri=config_dict.get('uri', StoreDefaults.NEO4J_URI),
            username=config_dict.get('username', StoreDefaults.NEO4J_USERNAME),
            password=config_dict.get('password') or os.environ.get(StoreDefaults.NEO4J_PASSWORD_ENV, ''),
            database=config_dict.get('database', StoreDefaults.NEO4J_DATABASE),
        )


class Neo4jTransaction(GraphTransaction):
    """Explicit driver transaction on its own session."""

    def __init__(self, driver: Driver, database: str):
        super().__init__()
        self._session = driver.session(database=database)
        self._tx = self._session.begin_transaction()

    def get_or_create_node(
        self,
        key: str,
        initial_properties: Optional[Dict[str, Any]] = None,
    ) -> Tuple[NodeHandle, bool]:
        self._ensure_open()
        record = self._tx.run(
            f"MATCH (n:{_LABEL} {{{_KEY}: $key}}) RETURN elementId(n) AS id LIMIT 1",
            key=key,
        ).single()
        if record is not None:
            return record["id"], False

        properties = dict(initial_properties or {})
        properties[_KEY] = key
        record = self._tx.run(
            f"CREATE (n:{_LABEL}) SET n = $props RETURN elementId(n) AS id",
            props=properties,
        ).single()
        return record["id"], True

    def set_property(self, node: NodeHandle, name: str, value: Any) -> None:
        self._ensure_open()
        if isinstance(value, tuple):
            value = list(value)
        self._tx.run(
            "MATCH (n) WHERE elementId(n) = $id SET n += $props",
            id=node, props={name: value},
        )

    def add_label(self, node: NodeHandle, label: str) -> None:
        self._ensure_open()
        if label not in _ALLOWED_LABELS:
            raise GraphStoreError(f"Refusing to write unknown label: {label!r}")
        self._tx.run(f"MATCH (n) WHERE elementId(n) = $id SET n:{label}", id=node)

    def create_relationship(self, source: NodeHandle, target: NodeHandle, rel_type: str) -> None:
        self._ensure_open()
        if rel_type not in _ALLOWED_REL_TYPES:
            raise GraphStoreError(f"Refusing to write unknown relationship type: {rel_type!r}")
        self._tx.run(
            "MATCH (a) WHERE elementId(a) = $source "
            "MATCH (b) WHERE elementId(b) = $target "
            f"CREATE (a)-[:{rel_type}]->(b)",
            source=source, target=target,
        )

    def _do_commit(self) -> None:
        try:
            self._tx.commit()
        finally:
            self._session.close()

    def _do_rollback(self) -> None:
        try:
            self._tx.rollback()
        finally:
            self._session.close()


class Neo4jGraphStore(GraphStore):
    """Graph store on a Neo4j server."""

    def __init__(self, driver: Driver, config: Optional[Neo4jConfig] = None):
        self.driver = driver
        self.config = config or Neo4jConfig()

    @classmethod
    def connect(cls, config: Neo4jConfig) -> "Neo4jGraphStore":
        driver = GraphDatabase.driver(config.uri, auth=(config.username, config.password))
        logger.info(f"Connected to Neo4j at {config.uri} (database: {config.database})")
        return cls(driver, config)

    def initialize(self) -> None:
        """Create the key uniqueness constraint if it does not exist."""
        with self.driver.session(database=self.config.database) as session:
            session.run(
                f"CREATE CONSTRAINT ontology_class_key IF NOT EXISTS "
                f"FOR (n:{_LABEL}) REQUIRE n.{_KEY} IS UNIQUE"
            )

    def begin_transaction(self) -> Neo4jTransaction:
        return Neo4jTransaction(self.driver, self.config.database)

    def reset(self) -> None:
        logger.info(f"Deleting all nodes in Neo4j database {self.config.database}")
        with self.driver.session(database=self.config.database) as session:
            session.run("MATCH (n) DETACH DELETE n")

    def node_count(self) -> int:
        return self._count("MATCH (n) RETURN count(n) AS c")

    def relationship_count(self) -> int:
        return self._count("MATCH ()-[r]->() RETURN count(r) AS c")

    def _count(self, query: str) -> int:
        with self.driver.session(database=self.config.database) as session:
            record = session.run(query).single()
            return int(record["c"]) if record is not None else 0

    def close(self) -> None:
        self.driver.close()
