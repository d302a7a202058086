"""
Mapping result types.

One MappingResult is produced per ontology input file and records how far the
file got through the mapping state machine:

    IDLE -> CONSISTENCY_CHECKED -> MAPPING -> COMMITTED | ABORTED

An inconsistent ontology goes straight from IDLE to ABORTED without touching
the store.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from .graph_types import NodeCategory


class MappingState(str, Enum):
    """States of one file's mapping pass."""
    IDLE = "idle"
    CONSISTENCY_CHECKED = "consistency_checked"
    MAPPING = "mapping"
    COMMITTED = "committed"
    ABORTED = "aborted"


@dataclass
class MappingResult:
    """
    Results of mapping one ontology file onto the graph.

    Counters reflect what the pass did inside its transaction; for an aborted
    pass they describe work that was rolled back.
    """
    source_path: str
    category: NodeCategory
    state: MappingState = MappingState.IDLE
    inconsistent: bool = False
    classes_processed: int = 0
    nodes_created: int = 0
    is_a_edges: int = 0
    part_of_edges: int = 0
    error: Optional[str] = None
    warnings: List[str] = field(default_factory=list)

    @property
    def committed(self) -> bool:
        return self.state is MappingState.COMMITTED

    @property
    def aborted(self) -> bool:
        return self.state is MappingState.ABORTED

    @property
    def edge_count(self) -> int:
        return self.is_a_edges + self.part_of_edges

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source_path": self.source_path,
            "category": self.category.value,
            "state": self.state.value,
            "inconsistent": self.inconsistent,
            "classes_processed": self.classes_processed,
            "nodes_created": self.nodes_created,
            "is_a_edges": self.is_a_edges,
            "part_of_edges": self.part_of_edges,
            "error": self.error,
            "warnings": list(self.warnings),
        }

    def get_summary(self) -> str:
        """Generate human-readable summary of the mapping pass."""
        lines = [
            f"Mapping Summary ({self.source_path}):",
            f"  Category: {self.category.value}",
            f"  State: {self.state.value}",
        ]

        if self.committed:
            lines.append(f"  ✓ Classes: {self.classes_processed}")
            lines.append(f"  ✓ Nodes created: {self.nodes_created}")
            lines.append(f"  ✓ isA edges: {self.is_a_edges}")
            lines.append(f"  ✓ partOf edges: {self.part_of_edges}")
        else:
            lines.append("  ✗ Nothing committed for this file")
            if self.error:
                lines.append(f"    Reason: {self.error}")

        if self.warnings:
            lines.append(f"  ⚠ Warnings: {len(self.warnings)}")
            for warning in self.warnings[:3]:
                lines.append(f"      - {warning}")
            if len(self.warnings) > 3:
                lines.append(f"      ... and {len(self.warnings) - 3} more")

        return "\n".join(lines)
