#!/usr/bin/env python3
"""
Create the products index with its mapping, without starting the API.
Useful before a bulk load, or after deleting a broken index:
  python scripts/create_products_index.py
  python scripts/create_products_index.py --index products-staging

Reads ELASTICSEARCH_URL from .env (default http://localhost:9200).
"""

import argparse
import asyncio
import sys

from product_search.config import get_settings
from product_search.core.logging import configure_logging
from product_search.search.elasticsearch_client import create_elasticsearch
from product_search.search.index import ensure_products_index


async def run(index: str) -> bool:
    settings = get_settings()
    es = create_elasticsearch(settings)
    try:
        return await ensure_products_index(es, index, settings.embedding_dimensions)
    finally:
        await es.close()


def main():
    settings = get_settings()
    ap = argparse.ArgumentParser(description="Create the products index if it does not exist")
    ap.add_argument("--index", default=settings.products_index, help="Index name")
    args = ap.parse_args()

    configure_logging(settings.log_level)
    if not asyncio.run(run(args.index)):
        print(f"Failed to ensure index '{args.index}'. See log for details.")
        sys.exit(1)
    print(f"Index '{args.index}' is ready.")


if __name__ == "__main__":
    main()
