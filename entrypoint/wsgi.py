#!/usr/bin/env python3
"""WSGI entrypoint.

Exposes ``app`` for production WSGI servers (``gunicorn entrypoint.wsgi:app``)
and runs the development server when executed directly.
"""
from __future__ import annotations

import os

from siteadmin import create_app

app = create_app()


if __name__ == "__main__":
    host = os.environ.get("SITEADMIN_HOST", "127.0.0.1")
    port = int(os.environ.get("SITEADMIN_PORT", "8083"))
    app.run(host=host, port=port)
