#!/usr/bin/env python3
"""
Add a news article from the command line.

Usage:
  python scripts/add_news.py --title "Parish Fete" --content-file fete.txt [--category Community] [--publish]
"""
from __future__ import annotations

import argparse
import pathlib

from pydantic import ValidationError

from parish.core.logs import configure_logging
from parish.domain.records import NewsArticleIn
from parish.services.collections import NewsService
from parish.services.errors import ContentError


def main() -> None:
    ap = argparse.ArgumentParser(description="Add a news article")
    ap.add_argument("--title", required=True, help="Article title")
    ap.add_argument("--content-file", help="Plain text file with the article body")
    ap.add_argument("--excerpt", default="", help="Short summary shown in listings")
    ap.add_argument("--category", default="", help="Category (e.g. Community, Liturgy)")
    ap.add_argument("--author", help="Author (default: Parish Office)")
    ap.add_argument("--date", help="Publication date YYYY-MM-DD (default: today)")
    ap.add_argument("--publish", action="store_true", help="Publish immediately")
    args = ap.parse_args()
    configure_logging()

    title = (args.title or "").strip()
    if not title:
        raise SystemExit("Title is required")
    content = ""
    if args.content_file:
        path = pathlib.Path(args.content_file)
        if not path.is_file():
            raise SystemExit(f"File '{path}' not found")
        content = path.read_text(encoding="utf-8")

    payload = {
        "title": title,
        "content": content,
        "excerpt": args.excerpt,
        "category": args.category,
        "published": args.publish,
    }
    if args.author:
        payload["author"] = args.author
    if args.date:
        payload["date"] = args.date
    try:
        data = NewsArticleIn.model_validate(payload).to_record()
        article = NewsService().create(data)
    except ValidationError as exc:
        raise SystemExit(f"Invalid article: {exc}")
    except ContentError as exc:
        raise SystemExit(exc.message)

    print("OK: article created")
    print(f"  id: {article['id']}")
    print(f"  slug: {article['slug']}")
    print(f"  published: {article['published']}")


if __name__ == "__main__":
    main()
