"""Bazaar database management CLI.

Provides commands to create and drop the database schemas of both
domains and of the inventory ledger, and to seed stock counters.

Usage:
    python src/manage.py setup-db             # Create all tables
    python src/manage.py drop-db              # Drop all tables
    python src/manage.py seed-stock stock.json
"""

import argparse
import json
import sys
from pathlib import Path

DOMAIN_NAMES = ["ordering", "notifications"]


def _domains(names=None):
    from notifications.domain import notifications
    from ordering.domain import ordering

    all_domains = {"ordering": ordering, "notifications": notifications}
    return {name: all_domains[name] for name in (names or DOMAIN_NAMES)}


def setup_databases(domains=None):
    """Create database schemas for the specified (or all) domains and the ledger."""
    from inventory.ledger import get_ledger
    from shared.db import setup_db

    for name, domain in _domains(domains).items():
        print(f"Initializing {name} domain...")
        domain.init()
        print(f"Creating {name} database schema...")
        setup_db(domain)
        print(f"  {name} schema ready.")

    get_ledger().create_tables()
    print("  inventory ledger ready.")
    print("Done.")


def drop_databases(domains=None):
    """Drop database schemas for the specified (or all) domains and the ledger."""
    from inventory.ledger import get_ledger
    from shared.db import drop_db

    for name, domain in _domains(domains).items():
        print(f"Initializing {name} domain...")
        domain.init()
        print(f"Dropping {name} database schema...")
        drop_db(domain)
        print(f"  {name} schema dropped.")

    get_ledger().drop_tables()
    print("  inventory ledger dropped.")
    print("Done.")


def seed_stock(path):
    """Load ``{"<product_id>": <quantity>, ...}`` into the ledger."""
    from inventory.ledger import get_ledger

    ledger = get_ledger()
    counts = json.loads(Path(path).read_text(encoding="utf-8"))
    for product_id, quantity in counts.items():
        ledger.put_stock(product_id, int(quantity))
    print(f"Seeded stock for {len(counts)} product(s).")


def main():
    parser = argparse.ArgumentParser(description="Bazaar database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    setup_parser = subparsers.add_parser("setup-db", help="Create all database tables")
    setup_parser.add_argument(
        "--domain",
        choices=DOMAIN_NAMES,
        nargs="*",
        help="Specific domain(s) to set up (default: all)",
    )

    drop_parser = subparsers.add_parser("drop-db", help="Drop all database tables")
    drop_parser.add_argument(
        "--domain",
        choices=DOMAIN_NAMES,
        nargs="*",
        help="Specific domain(s) to drop (default: all)",
    )

    seed_parser = subparsers.add_parser("seed-stock", help="Load stock counters from a JSON file")
    seed_parser.add_argument("path", help='JSON object of {"product_id": quantity}')

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_databases(args.domain)
    elif args.command == "drop-db":
        drop_databases(args.domain)
    elif args.command == "seed-stock":
        seed_stock(args.path)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
