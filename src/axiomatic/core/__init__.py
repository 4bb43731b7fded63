"""Contexts, configuration, errors and value-type dispatch."""
