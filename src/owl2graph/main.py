#!/usr/bin/env python3
"""
OWL to property graph loader.

Usage:
    owl2graph -o <ontology.owl> [-o <another.owl> ...] [-d <db-path>] [--config <config.json>]
"""

import sys
from typing import List, Optional

from .cli import LoadCommand, create_argument_parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)
    return int(LoadCommand().execute(args))


if __name__ == "__main__":
    sys.exit(main())
