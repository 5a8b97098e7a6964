"""CLI commands for running the server and checking the database."""

import argparse
import sys
from typing import NoReturn

from dotenv import load_dotenv
from flask import Flask

from app import create_app
from app.database import check_db_connection, mask_database_url
from app.server import run


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="backend-server CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser(
        "serve",
        help="Start the HTTP server",
    )
    subparsers.add_parser(
        "check-db",
        help="Verify the configured database is reachable",
    )

    return parser


def handle_check_db(app: Flask) -> None:
    with app.app_context():
        print(f"Using database: {mask_database_url(app.config['SQLALCHEMY_DATABASE_URI'])}")

        if not check_db_connection():
            print("Cannot connect to database.", file=sys.stderr)
            sys.exit(1)

        print("Database connection OK")


def main() -> NoReturn:
    load_dotenv()

    parser = create_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == "serve":
        run()
    elif args.command == "check-db":
        app = create_app(skip_background_services=True)
        handle_check_db(app)
    else:
        print(f"Unknown command: {args.command}", file=sys.stderr)
        sys.exit(1)

    sys.exit(0)


if __name__ == "__main__":
    main()
