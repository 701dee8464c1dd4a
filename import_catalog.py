#!/usr/bin/env python3
"""
Import the CS2 skin catalog into the database.
Fetches skins from the public ByMykel CSGO-API and upserts skins plus
generated condition prices. Safe to re-run.

Usage: python import_catalog.py [--url URL] [--batch-size N]
"""
import argparse
import sys
import time

import requests
from services.catalog_import import import_skins, fetch_catalog, CATALOG_SKINS_URL, BATCH_SIZE

def main(argv=None):
    parser = argparse.ArgumentParser(description='Import CS2 skins into Lilo Store')
    parser.add_argument('--url', default=CATALOG_SKINS_URL, help='skins.json endpoint')
    parser.add_argument('--batch-size', type=int, default=BATCH_SIZE, help='skins per transaction')
    args = parser.parse_args(argv)

    from app import app

    start = time.time()
    with app.app_context():
        try:
            entries = fetch_catalog(args.url)
        except requests.RequestException as e:
            print(f"❌ Could not download catalog: {e}")
            return 1

        summary = import_skins(entries, batch_size=args.batch_size)

    print("=" * 50)
    print(f"✅ Imported {summary['imported']} skins and {summary['prices']} condition prices "
          f"in {time.time() - start:.2f}s")
    if summary['errors']:
        print(f"⚠️  {summary['errors']} batches failed, re-run to retry them")
        return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())
