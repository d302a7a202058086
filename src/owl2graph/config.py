"""
Loader configuration.

Settings come from an optional JSON file and are overridden by command line
arguments. Every key is optional; see ``config.sample.json``.
"""

import json
import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Tuple

from .constants import (
    AnnotationIRIs,
    CategoryRules,
    LoggingConfig,
    ReasonerConfig,
    StoreDefaults,
)
from .formats.owl.name_resolver import FRAGMENT_STRATEGY, LOCAL_NAME_STRATEGY
from .models import NodeCategory
from .store.neo4j_store import Neo4jConfig

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised for unreadable or invalid configuration."""


@dataclass(frozen=True)
class AnnotationConfig:
    """Which annotation properties feed the label fields."""
    alternative_term_iri: str = AnnotationIRIs.OBO_ALTERNATIVE_TERM
    preferred_display_name_iri: str = AnnotationIRIs.FAIRSHARING_ALTERNATIVE_TERM
    synonym_properties: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'AnnotationConfig':
        synonyms = config_dict.get('synonym_properties', [])
        if not isinstance(synonyms, list):
            raise ConfigError("annotations.synonym_properties must be a list of IRIs")
        return cls(
            alternative_term_iri=config_dict.get('alternative_term_iri', AnnotationIRIs.OBO_ALTERNATIVE_TERM),
            preferred_display_name_iri=config_dict.get(
                'preferred_display_name_iri', AnnotationIRIs.FAIRSHARING_ALTERNATIVE_TERM
            ),
            synonym_properties=tuple(str(s) for s in synonyms),
        )


@dataclass(frozen=True)
class LoaderConfig:
    """Configuration for one loader run."""
    db_path: str = StoreDefaults.GRAPH_DB_PATH
    reasoner: str = ReasonerConfig.DEFAULT_REASONER
    store_backend: str = StoreDefaults.BACKEND_EMBEDDED
    neo4j: Neo4jConfig = field(default_factory=Neo4jConfig)
    annotations: AnnotationConfig = field(default_factory=AnnotationConfig)
    categories: Tuple[Tuple[str, str], ...] = CategoryRules.DEFAULT_RULES
    key_strategy: str = FRAGMENT_STRATEGY
    show_progress: bool = True
    logging_settings: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.reasoner not in ReasonerConfig.SUPPORTED_REASONERS:
            raise ConfigError(
                f"Unknown reasoner '{self.reasoner}'. "
                f"Supported: {', '.join(ReasonerConfig.SUPPORTED_REASONERS)}"
            )
        if self.store_backend not in StoreDefaults.SUPPORTED_BACKENDS:
            raise ConfigError(
                f"Unknown store backend '{self.store_backend}'. "
                f"Supported: {', '.join(StoreDefaults.SUPPORTED_BACKENDS)}"
            )
        if self.key_strategy not in (FRAGMENT_STRATEGY, LOCAL_NAME_STRATEGY):
            raise ConfigError(f"Unknown key strategy '{self.key_strategy}'")
        valid = {c.value for c in NodeCategory}
        for keyword, category in self.categories:
            if category not in valid:
                raise ConfigError(f"Unknown category '{category}' for keyword '{keyword}'")
        log_format = str(self.logging_settings.get('format', LoggingConfig.DEFAULT_FORMAT_STYLE)).lower()
        if log_format not in LoggingConfig.SUPPORTED_FORMATS:
            raise ConfigError(
                f"Unknown logging format '{log_format}'. "
                f"Supported: {', '.join(LoggingConfig.SUPPORTED_FORMATS)}"
            )

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'LoaderConfig':
        """Create LoaderConfig from a dictionary."""
        store_cfg = config_dict.get('store', {}) or {}
        categories = config_dict.get('categories')
        if categories is None:
            rules = CategoryRules.DEFAULT_RULES
        else:
            try:
                rules = tuple((str(keyword), str(category)) for keyword, category in categories)
            except (TypeError, ValueError):
                raise ConfigError("categories must be a list of [keyword, category] pairs") from None

        return cls(
            db_path=config_dict.get('db_path', StoreDefaults.GRAPH_DB_PATH),
            reasoner=str(config_dict.get('reasoner', ReasonerConfig.DEFAULT_REASONER)).lower(),
            store_backend=str(store_cfg.get('backend', StoreDefaults.BACKEND_EMBEDDED)).lower(),
            neo4j=Neo4jConfig.from_dict(store_cfg.get('neo4j', {}) or {}),
            annotations=AnnotationConfig.from_dict(config_dict.get('annotations', {}) or {}),
            categories=rules,
            key_strategy=config_dict.get('key_strategy', FRAGMENT_STRATEGY),
            show_progress=bool(config_dict.get('show_progress', True)),
            logging_settings=dict(config_dict.get('logging', {}) or {}),
        )

    @classmethod
    def from_file(cls, config_path: str) -> 'LoaderConfig':
        """Load configuration from a JSON file."""
        if not config_path:
            raise ConfigError("config_path cannot be empty")

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                config_dict = json.load(f)
        except FileNotFoundError:
            raise ConfigError(f"Configuration file not found: {config_path}") from None
        except json.JSONDecodeError as e:
            raise ConfigError(
                f"Invalid JSON in configuration file {config_path} at line {e.lineno}, "
                f"column {e.colno}: {e.msg}"
            ) from None
        except UnicodeDecodeError as e:
            raise ConfigError(f"File encoding error in {config_path}: {e}") from None
        except PermissionError:
            raise ConfigError(f"Permission denied reading {config_path}") from None

        if not isinstance(config_dict, dict):
            raise ConfigError(f"Configuration file must contain a JSON object, got {type(config_dict).__name__}")

        return cls.from_dict(config_dict)

    def with_overrides(self, **overrides: Any) -> 'LoaderConfig':
        """Return a copy with every non-None override applied."""
        applied = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **applied) if applied else self
