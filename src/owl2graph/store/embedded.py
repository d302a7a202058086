"""
Embedded graph store backed by networkx.

The committed graph is a ``networkx.MultiDiGraph`` whose node attributes hold
a ``properties`` dict and a ``labels`` list, and whose edges carry a ``type``.
A transaction stages its writes on a deep copy of the committed graph and
swaps the copy in on commit; rollback simply drops it. A commit first writes
the staged graph as node-link JSON to ``<db_path>/graph.json`` and only swaps
it in once that write succeeded, so a failed write leaves the store untouched.
"""

import copy
import json
import logging
import os
import shutil
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

import networkx as nx
from networkx.readwrite import json_graph

from ..constants import GraphSchema, StoreDefaults
from .base import GraphStore, GraphStoreError, GraphTransaction, NodeHandle

logger = logging.getLogger(__name__)


class EmbeddedTransaction(GraphTransaction):
    """Copy-on-begin transaction over an EmbeddedGraphStore."""

    def __init__(self, store: "EmbeddedGraphStore"):
        super().__init__()
        self._store = store
        self._graph: nx.MultiDiGraph = copy.deepcopy(store.graph)
        self._key_index: Dict[str, int] = dict(store._key_index)
        self._next_id = store._next_id

    def get_or_create_node(
        self,
        key: str,
        initial_properties: Optional[Dict[str, Any]] = None,
    ) -> Tuple[NodeHandle, bool]:
        self._ensure_open()
        existing = self._key_index.get(key)
        if existing is not None:
            return existing, False

        node_id = self._next_id
        self._next_id += 1
        properties = {GraphSchema.KEY_PROPERTY: key}
        properties.update(initial_properties or {})
        self._graph.add_node(node_id, properties=properties, labels=[])
        self._key_index[key] = node_id
        return node_id, True

    def set_property(self, node: NodeHandle, name: str, value: Any) -> None:
        self._ensure_open()
        if isinstance(value, (list, tuple)):
            value = list(value)
        self._node(node)["properties"][name] = value

    def add_label(self, node: NodeHandle, label: str) -> None:
        self._ensure_open()
        labels = self._node(node)["labels"]
        if label not in labels:
            labels.append(label)

    def create_relationship(self, source: NodeHandle, target: NodeHandle, rel_type: str) -> None:
        self._ensure_open()
        self._node(source)
        self._node(target)
        self._graph.add_edge(source, target, type=rel_type)

    def _node(self, node: NodeHandle) -> Dict[str, Any]:
        if node not in self._graph:
            raise GraphStoreError(f"Unknown node handle: {node!r}")
        return self._graph.nodes[node]

    def _do_commit(self) -> None:
        self._store._install(self._graph, self._key_index, self._next_id)

    def _do_rollback(self) -> None:
        logger.debug(
            f"Discarding {self._graph.number_of_nodes() - self._store.graph.number_of_nodes()} "
            f"staged nodes"
        )
        self._graph = nx.MultiDiGraph()


class EmbeddedGraphStore(GraphStore):
    """
    In-process property graph persisted under a database directory.

    Only one write transaction may be open at a time.
    """

    def __init__(self, db_path: Optional[str] = None):
        self.db_path = Path(db_path) if db_path else None
        self.graph = nx.MultiDiGraph()
        self._key_index: Dict[str, int] = {}
        self._next_id = 0
        self._active: Optional[EmbeddedTransaction] = None

    def __repr__(self) -> str:
        return (
            f"EmbeddedGraphStore({str(self.db_path) if self.db_path else None!r}, "
            f"nodes={self.node_count()}, relationships={self.relationship_count()})"
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @classmethod
    def recreate(cls, db_path: str) -> "EmbeddedGraphStore":
        """Delete ``db_path`` if present, recreate it empty and open a store on it."""
        store = cls(db_path)
        store.reset()
        return store

    @classmethod
    def open(cls, db_path: str) -> "EmbeddedGraphStore":
        """Open a store, loading the committed graph if the directory holds one."""
        store = cls(db_path)
        graph_file = store.graph_file
        if graph_file is not None and graph_file.exists():
            with open(graph_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
            graph = json_graph.node_link_graph(data, directed=True, multigraph=True, edges="edges")
            key_index = {
                attrs["properties"][GraphSchema.KEY_PROPERTY]: node_id
                for node_id, attrs in graph.nodes(data=True)
            }
            next_id = max(graph.nodes, default=-1) + 1
            store.graph, store._key_index, store._next_id = graph, key_index, next_id
            logger.info(f"Opened graph store at {db_path}: {store!r}")
        return store

    @property
    def graph_file(self) -> Optional[Path]:
        if self.db_path is None:
            return None
        return self.db_path / StoreDefaults.GRAPH_FILE_NAME

    def begin_transaction(self) -> EmbeddedTransaction:
        if self._active is not None and not self._active.closed:
            raise GraphStoreError("A write transaction is already open on this store")
        self._active = EmbeddedTransaction(self)
        return self._active

    def reset(self) -> None:
        self.graph = nx.MultiDiGraph()
        self._key_index = {}
        self._next_id = 0
        if self.db_path is not None:
            if self.db_path.exists():
                logger.info(f"Deleting graph database directory {self.db_path}")
                shutil.rmtree(self.db_path)
            self.db_path.mkdir(parents=True, exist_ok=True)

    def _install(self, graph: nx.MultiDiGraph, key_index: Dict[str, int], next_id: int) -> None:
        # The committed state only changes once the staged graph is on disk
        self._persist(graph)
        self.graph = graph
        self._key_index = key_index
        self._next_id = next_id

    def _persist(self, graph: nx.MultiDiGraph) -> None:
        graph_file = self.graph_file
        if graph_file is None:
            return
        graph_file.parent.mkdir(parents=True, exist_ok=True)
        data = json_graph.node_link_data(graph, edges="edges")
        tmp_file = graph_file.with_suffix(".json.tmp")
        try:
            with open(tmp_file, 'w', encoding='utf-8') as f:
                json.dump(data, f, ensure_ascii=False)
            os.replace(tmp_file, graph_file)
        except OSError as e:
            tmp_file.unlink(missing_ok=True)
            raise GraphStoreError(f"Failed to persist graph to {graph_file}: {e}") from e
        logger.debug(f"Persisted graph to {graph_file}")

    # ------------------------------------------------------------------
    # Read access (committed state)
    # ------------------------------------------------------------------

    def node_count(self) -> int:
        return self.graph.number_of_nodes()

    def relationship_count(self) -> int:
        return self.graph.number_of_edges()

    def find_node(self, key: str) -> Optional[int]:
        return self._key_index.get(key)

    def node_properties(self, key: str) -> Dict[str, Any]:
        node_id = self._require(key)
        return dict(self.graph.nodes[node_id]["properties"])

    def node_labels(self, key: str) -> List[str]:
        node_id = self._require(key)
        return list(self.graph.nodes[node_id]["labels"])

    def outgoing(self, key: str) -> List[Tuple[str, str]]:
        """(relationship type, target key) pairs leaving the node indexed under ``key``."""
        node_id = self._require(key)
        return [
            (data["type"], self._key_of(target))
            for _, target, data in self.graph.out_edges(node_id, data=True)
        ]

    def relationships(self) -> Iterator[Tuple[str, str, str]]:
        """Yield (source key, relationship type, target key) for every relationship."""
        for source, target, data in self.graph.edges(data=True):
            yield self._key_of(source), data["type"], self._key_of(target)

    def keys(self) -> List[str]:
        return sorted(self._key_index)

    def _key_of(self, node_id: int) -> str:
        return self.graph.nodes[node_id]["properties"][GraphSchema.KEY_PROPERTY]

    def _require(self, key: str) -> int:
        node_id = self._key_index.get(key)
        if node_id is None:
            raise KeyError(key)
        return node_id
