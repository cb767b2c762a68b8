#!/usr/bin/env python3
"""Seeding orchestrator.

Creates default rows (roles, content types, anonymous account) and,
optionally, a batch of demo accounts for trying out the people listing.

Exit Codes:
  0 = all ok / or already present
  3 = one or more seed steps failed
"""
from __future__ import annotations

import argparse
import sys
from datetime import datetime, timedelta
from typing import List, Optional

from siteadmin.db import init_engine_once
from siteadmin.db.repositories import users_repo
from siteadmin.db.seed import seed_defaults


def _run_defaults() -> bool:
    try:
        summary = seed_defaults()
    except Exception as exc:
        print(f"[SEED] defaults ERROR {exc}", file=sys.stderr)
        return False
    print(
        f"[SEED] defaults ok roles={summary['roles']} content_types={summary['content_types']} anonymous={summary['anonymous']}"
    )
    return True


def _run_demo_users(count: int, prefix: str) -> bool:
    now = datetime.utcnow()
    created = 0
    for index in range(1, count + 1):
        name = f"{prefix}{index:03d}"
        try:
            users_repo.create_user(
                name,
                email=f"{name}@example.test",
                status=index % 7 != 0,
                created=now - timedelta(days=index),
                access=None if index % 3 == 0 else now - timedelta(hours=index),
            )
            created += 1
        except users_repo.UserAlreadyExistsError:
            continue
        except Exception as exc:
            print(f"[SEED] demo_users ERROR {name}: {exc}", file=sys.stderr)
            return False
    print(f"[SEED] demo_users ok created={created} requested={count}")
    return True


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Seed the site administration database.")
    parser.add_argument("--demo-users", type=int, default=0, help="number of demo accounts to create")
    parser.add_argument("--demo-prefix", default="demo", help="name prefix for demo accounts")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    init_engine_once()
    ok = _run_defaults()
    if ok and args.demo_users > 0:
        ok = _run_demo_users(args.demo_users, args.demo_prefix)
    return 0 if ok else 3


if __name__ == "__main__":
    sys.exit(main())
