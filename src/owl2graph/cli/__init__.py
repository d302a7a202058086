"""
CLI package - command line interface for the ontology loader.

Components:
- parsers: argparse configuration
- commands: the batch load command
- helpers: logging setup and console output
"""

from .commands import LoadCommand, resolve_config
from .helpers import JSONFormatter, LogSettings, reset_logging, setup_logging
from .parsers import create_argument_parser

__all__ = [
    'LoadCommand',
    'resolve_config',
    'JSONFormatter',
    'LogSettings',
    'reset_logging',
    'setup_logging',
    'create_argument_parser',
]
