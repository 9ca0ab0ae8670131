"""Stormgate Carts database management CLI.

Creates or drops the SQL schema behind the carts domain. Only meaningful
when the active configuration points at a SQL provider, e.g.
``PROTEAN_ENV=production``.

Usage:
    python src/manage.py setup-db   # Create cart tables
    python src/manage.py drop-db    # Drop cart tables
"""

import argparse
import sys


def setup_databases():
    from carts.domain import carts
    from carts.utils.db import setup_db

    print("Initializing carts domain...")
    carts.init()
    print("Creating carts database schema...")
    setup_db(carts)
    print("Done.")


def drop_databases():
    from carts.domain import carts
    from carts.utils.db import drop_db

    print("Initializing carts domain...")
    carts.init()
    print("Dropping carts database schema...")
    drop_db(carts)
    print("Done.")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Stormgate Carts database management")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("setup-db", help="Create the cart tables")
    subparsers.add_parser("drop-db", help="Drop the cart tables")

    args = parser.parse_args(argv)

    if args.command == "setup-db":
        setup_databases()
    elif args.command == "drop-db":
        drop_databases()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
