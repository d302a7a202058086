"""
Graph store interface.

A GraphStore hands out write transactions. A GraphTransaction is used as a
context manager: it commits on exit only if ``success()`` was called inside
the block, and rolls back otherwise, including when the block raised.

    with store.begin_transaction() as tx:
        node, created = tx.get_or_create_node("Biology")
        tx.set_property(node, "iri", "http://example.org/onto#Biology")
        tx.success()
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple, Union

logger = logging.getLogger(__name__)

NodeHandle = Union[int, str]


class GraphStoreError(Exception):
    """Raised on graph store failures and misuse."""


class GraphTransaction(ABC):
    """One exclusive unit of work against a GraphStore."""

    def __init__(self) -> None:
        self._marked_success = False
        self._closed = False

    def __enter__(self) -> "GraphTransaction":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._closed:
            return False
        if exc_type is None and self._marked_success:
            self.commit()
        else:
            if exc_type is not None:
                logger.debug(f"Rolling back transaction after {exc_type.__name__}: {exc}")
            self.rollback()
        return False

    @property
    def closed(self) -> bool:
        return self._closed

    def success(self) -> None:
        """Mark the transaction to be committed when the block exits."""
        self._ensure_open()
        self._marked_success = True

    def commit(self) -> None:
        self._ensure_open()
        try:
            self._do_commit()
        finally:
            self._closed = True

    def rollback(self) -> None:
        self._ensure_open()
        try:
            self._do_rollback()
        finally:
            self._closed = True

    def _ensure_open(self) -> None:
        if self._closed:
            raise GraphStoreError("Transaction is already closed")

    @abstractmethod
    def get_or_create_node(
        self,
        key: str,
        initial_properties: Optional[Dict[str, Any]] = None,
    ) -> Tuple[NodeHandle, bool]:
        """
        Look up the node indexed under ``key``, creating it when absent.

        ``initial_properties`` are written only when the node is created.

        Returns:
            Tuple of (node handle, created flag)
        """

    @abstractmethod
    def set_property(self, node: NodeHandle, name: str, value: Any) -> None:
        ...

    @abstractmethod
    def add_label(self, node: NodeHandle, label: str) -> None:
        ...

    @abstractmethod
    def create_relationship(self, source: NodeHandle, target: NodeHandle, rel_type: str) -> None:
        ...

    @abstractmethod
    def _do_commit(self) -> None:
        ...

    @abstractmethod
    def _do_rollback(self) -> None:
        ...


class GraphStore(ABC):
    """Persistent property graph."""

    @abstractmethod
    def begin_transaction(self) -> GraphTransaction:
        ...

    @abstractmethod
    def reset(self) -> None:
        """Remove every node and relationship."""

    @abstractmethod
    def node_count(self) -> int:
        ...

    @abstractmethod
    def relationship_count(self) -> int:
        ...

    def close(self) -> None:
        """Release store resources."""

    def __enter__(self) -> "GraphStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.close()
        return False
