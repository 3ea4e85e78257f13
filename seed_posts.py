#!/usr/bin/env python3
"""
Load blog posts from a JSON file into the DevHub SQLite database.

The file must contain a list of objects with at least ``title`` and
``slug``; ``content``, ``excerpt``, ``published``, ``author`` and
``tags`` are optional.  Posts whose slug already exists are skipped.

Usage:
    python seed_posts.py --file posts.json
    python seed_posts.py --file posts.json --db /tmp/devhub.db
"""

import argparse
import asyncio
import json
import os
import sys

from pydantic import ValidationError


def main():
    ap = argparse.ArgumentParser(description="Seed DevHub blog posts (SQLite).")
    ap.add_argument("--file", required=True, help="Path to a JSON file holding a list of posts")
    ap.add_argument("--db", help="Path to the SQLite DB file; defaults to DATABASE_URL")
    args = ap.parse_args()

    if not os.path.exists(args.file):
        print(f"[!] File not found: {args.file}", file=sys.stderr)
        sys.exit(1)

    if args.db:
        os.environ["DATABASE_URL"] = os.path.abspath(args.db)

    # Imported after DATABASE_URL is set: settings are read at import time.
    from devhub_api.app.core.db import init_db
    from devhub_api.app.schemas.blog import BlogCreate
    from devhub_api.app.services.blog_service import BlogService

    with open(args.file, "r", encoding="utf-8") as f:
        raw_posts = json.load(f)
    if not isinstance(raw_posts, list):
        print("[!] Expected a JSON list of posts.", file=sys.stderr)
        sys.exit(1)

    init_db()
    created = skipped = 0
    for index, raw in enumerate(raw_posts):
        try:
            post = BlogCreate(**raw)
        except (TypeError, ValidationError) as exc:
            print(f"[!] Post #{index} is invalid: {exc}", file=sys.stderr)
            sys.exit(2)
        try:
            asyncio.run(BlogService.create_blog(post))
            created += 1
        except ValueError as exc:
            print(f"[-] Skipped: {exc}")
            skipped += 1
    print(f"[+] Created {created} post(s), skipped {skipped}.")


if __name__ == "__main__":
    main()
