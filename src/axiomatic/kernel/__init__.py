"""Class construction: axioms, classes, the core models and the bootstrap."""
