"""
Formats package - ontology input handling.
"""
