"""Reusable axioms."""
