"""Application startup (factory, extensions, wiring)."""
