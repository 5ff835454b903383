"""Campus Trucks database management CLI.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
"""

import argparse
import sys


def setup_database():
    from shared.utils.db import setup_db

    print("Creating database schema...")
    setup_db()
    print("Done.")


def drop_database():
    from shared.utils.db import drop_db

    print("Dropping database schema...")
    drop_db()
    print("Done.")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Campus Trucks database management")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("setup-db", help="Create database tables")
    subparsers.add_parser("drop-db", help="Drop database tables")

    args = parser.parse_args(argv)

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
