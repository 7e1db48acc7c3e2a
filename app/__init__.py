"""koko-pic API application package."""
