"""Repository modules (one per table family)."""
