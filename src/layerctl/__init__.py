"""layerctl — structure validator and scaffolder for modular backends."""

__version__ = "0.1.0"
