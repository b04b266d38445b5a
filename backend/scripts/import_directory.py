"""
Import Supplier Directory Entries

Loads vendor documents from a JSON file into the directory database.
Entries without a listing status are imported as unclaimed placeholders,
which appear in public listings without a verified account.

Usage:
    python backend/scripts/import_directory.py vendors.json [--db PATH] [--dry-run]

File format: a JSON array of vendor documents, e.g.
    [{"company": "Acme Copiers", "services": ["Photocopiers"],
      "location": {"city": "Cardiff", "coverage": ["Cardiff", "Newport"]},
      "products": [{"name": "Canon iR-ADV C5535i"}]}]
"""

import argparse
import json
import sqlite3
import sys
from pathlib import Path
from typing import Any, Dict, List

from supplier_api.config.services import VALID_SERVICES
from supplier_api.dependencies import DB_PATH, Database
from supplier_api.store import insert_product, insert_vendor


def load_vendor_file(path: Path) -> List[Dict[str, Any]]:
    """Read a JSON array of vendor documents."""
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a JSON array of vendor documents")
    return data


def vendor_exists(conn: sqlite3.Connection, vendor_id: str) -> bool:
    """Check if a vendor id is already in the directory."""
    row = conn.execute("SELECT 1 FROM vendors WHERE id = ?", (vendor_id,)).fetchone()
    return row is not None


def import_vendors(conn: sqlite3.Connection, vendors: List[Dict[str, Any]]) -> Dict[str, int]:
    """Insert vendor documents and their products. Returns counters."""
    stats = {'vendors': 0, 'products': 0, 'skipped': 0, 'invalid': 0}

    for doc in vendors:
        if not doc.get('company'):
            stats['invalid'] += 1
            continue
        if doc.get('id') and vendor_exists(conn, doc['id']):
            stats['skipped'] += 1
            continue

        unknown = [s for s in doc.get('services') or [] if s not in VALID_SERVICES]
        if unknown:
            print(f"  Warning: {doc['company']} has unknown services {unknown}")

        vendor = {**doc, 'listing_status': doc.get('listing_status') or 'unclaimed'}
        vendor_id = insert_vendor(conn, vendor)
        stats['vendors'] += 1

        for product in doc.get('products') or []:
            insert_product(conn, vendor_id, product.get('name'), product.get('is_active', True))
            stats['products'] += 1

    return stats


def main():
    parser = argparse.ArgumentParser(description='Import supplier directory entries')
    parser.add_argument('file', type=Path, help='JSON file of vendor documents')
    parser.add_argument('--db', type=Path, default=DB_PATH, help='Database path')
    parser.add_argument('--dry-run', action='store_true', help='Roll back instead of committing')
    args = parser.parse_args()

    print(f"Loading {args.file}")
    vendors = load_vendor_file(args.file)
    print(f"  {len(vendors)} vendor documents")

    database = Database(args.db).open()
    with database.connection() as conn:
        stats = import_vendors(conn, vendors)
        if args.dry_run:
            conn.rollback()
            print("Dry run - rolled back")
        else:
            conn.commit()
    database.close()

    print(
        f"Imported {stats['vendors']} vendors, {stats['products']} products "
        f"({stats['skipped']} existing skipped, {stats['invalid']} invalid)"
    )
    return 0


if __name__ == '__main__':
    sys.exit(main())
