"""
File name to category classification.
"""

import logging
from pathlib import Path
from typing import Iterable, Optional, Sequence, Tuple

from ...constants import CategoryRules
from ...models import NodeCategory

logger = logging.getLogger(__name__)


class LabelClassifier:
    """
    Maps an input file name to one NodeCategory.

    Rules are (keyword, category) pairs tried in order against the lower-cased
    file name; the first keyword found as a substring wins, GENERIC otherwise.
    """

    def __init__(self, rules: Optional[Iterable[Tuple[str, str]]] = None):
        source = CategoryRules.DEFAULT_RULES if rules is None else rules
        self.rules: Sequence[Tuple[str, NodeCategory]] = tuple(
            (keyword.lower(), NodeCategory(category)) for keyword, category in source
        )

    def classify(self, filename: str) -> NodeCategory:
        lowered = str(filename).lower()
        for keyword, category in self.rules:
            if keyword in lowered:
                return category
        return NodeCategory(CategoryRules.FALLBACK)

    def classify_path(self, path: str) -> NodeCategory:
        """Classify on the file name only, ignoring directories."""
        category = self.classify(Path(path).name)
        logger.info(f"Label for {path} is: {category.value}")
        return category


def classify(filename: str) -> NodeCategory:
    """Classify with the default rule set."""
    return LabelClassifier().classify(filename)
