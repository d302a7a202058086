"""
Key to node registry.

Guarantees at most one node per derived key for the lifetime of a run by
delegating to the store's key index inside the current transaction.
"""

import logging
from typing import Any, Dict, Optional

from .base import GraphTransaction, NodeHandle

logger = logging.getLogger(__name__)


class NodeRegistry:
    """Idempotent get-or-create over one transaction."""

    def __init__(self, tx: GraphTransaction):
        self.tx = tx
        self.created_count = 0

    def get_or_create(self, key: str, initial_properties: Optional[Dict[str, Any]] = None) -> NodeHandle:
        """
        Return the node indexed under ``key``, creating it if needed.

        Repeated calls with the same key return the same node and leave it
        unchanged; ``initial_properties`` only apply on creation.
        """
        node, created = self.tx.get_or_create_node(key, initial_properties)
        if created:
            self.created_count += 1
            logger.debug(f"Created node {key!r}")
        return node
