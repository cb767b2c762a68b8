"""Process entrypoints (WSGI app, seeding CLI)."""
