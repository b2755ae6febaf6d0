"""Bookstore CLI entry point."""

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError
from pymongo import MongoClient
from pymongo.errors import PyMongoError

load_dotenv(Path.cwd() / ".env")

from bookstore import __version__
from bookstore.config import get_settings
from bookstore.database import (
    AuthorDatabase,
    BookDatabase,
    BookStoreDatabase,
    check_db_connection,
    create_client,
    get_db_info,
)
from bookstore.models import Author, Book, BookStore
from bookstore.observability import configure_logging, initialize_logfire

logger = logging.getLogger(__name__)

CONFIG_TEMPLATE = """# Bookstore Configuration
# Credentials should be stored in .env (MONGODB__USERNAME, MONGODB__PASSWORD).

log_level: INFO

mongodb:
  host: localhost
  port: 27017
  database_name: bookstore
  auth_mechanism: SCRAM-SHA-1
  tls: false
"""


def _open_clients() -> tuple[MongoClient, AuthorDatabase, BookDatabase, BookStoreDatabase]:
    """Create the three clients sharing one MongoClient."""
    settings = get_settings()
    client = create_client(settings.mongodb)
    return (
        client,
        AuthorDatabase(settings.mongodb, client=client),
        BookDatabase(settings.mongodb, client=client),
        BookStoreDatabase(settings.mongodb, client=client),
    )


def cmd_init(args: argparse.Namespace) -> int:
    """Initialize data directory and configuration file."""
    data_dir = Path("data").resolve()

    try:
        data_dir.mkdir(exist_ok=True)
        logger.info(f"Created data directory: {data_dir}")

        config_path = data_dir / "config.yaml"
        if not config_path.exists():
            config_path.write_text(CONFIG_TEMPLATE)
            logger.info(f"Created config template: {config_path}")
        else:
            logger.info(f"Config file already exists: {config_path}")

        print(f"\n✓ Data directory initialized at {data_dir}")
        print("\nNext steps:")
        print("1. Add MongoDB credentials to .env if your server requires them")
        print("2. Run 'python -m bookstore ping' to verify the connection\n")
        return 0

    except OSError as e:
        logger.error(f"Failed to initialize: {e}")
        print(f"\n❌ Initialization failed: {e}\n")
        return 1


def cmd_config(args: argparse.Namespace) -> int:
    """Display merged configuration."""
    settings = get_settings()
    mongodb = settings.mongodb
    print("\n=== Bookstore Configuration ===\n")
    print(f"Data Directory: {settings.data_dir}")
    print(f"Log Level: {settings.log_level}\n")

    print("MongoDB:")
    print(f"  URL: {mongodb.sanitized_url}")
    print(f"  Database: {mongodb.database_name}")
    print(f"  Auth Mechanism: {mongodb.auth_mechanism}")
    print(f"  TLS: {mongodb.tls}")
    print(f"  Server Selection Timeout: {mongodb.server_selection_timeout_ms} ms\n")

    print(f"Logfire: {'✓ Set' if settings.logfire_token else '✗ Not set'}\n")
    return 0


def cmd_ping(args: argparse.Namespace) -> int:
    """Check that the configured MongoDB server is reachable."""
    settings = get_settings()
    client = create_client(settings.mongodb)

    try:
        info = get_db_info(settings.mongodb, client)
    finally:
        client.close()

    print(f"\nMongoDB {info['url']} ({info['database']}): {info['status']}\n")
    return 0 if info["status"] == "connected" else 1


def cmd_stats(args: argparse.Namespace) -> int:
    """Display document counts per collection."""
    client, *databases = _open_clients()

    try:
        print("\n=== Collection Counts ===\n")
        for database in databases:
            print(f"  {database.collection_name}: {database.object_count()}")
        print()
        return 0

    except PyMongoError as e:
        logger.error(f"Failed to read counts: {e}")
        print(f"\n❌ Failed to read counts: {e}\n")
        return 1
    finally:
        client.close()


def cmd_demo(args: argparse.Namespace) -> int:
    """Store two authors, six books and one store, then load the store back."""
    client, author_db, book_db, store_db = _open_clients()

    try:
        if not check_db_connection(client):
            print("\n❌ MongoDB is not reachable. Run 'python -m bookstore ping'.\n")
            return 1

        dan = Author(first_name="Dan", last_name="Brown")
        stephen = Author(first_name="Stephen", last_name="King")
        if not author_db.store_all([dan, stephen]):
            print(f"\n❌ Failed to store authors: {author_db.last_error}\n")
            return 1

        books = [
            Book(author=dan if i % 2 == 0 else stephen, prices=[10.0 + i])
            for i in range(args.books)
        ]
        if not book_db.store_all(books):
            print(f"\n❌ Failed to store books: {book_db.last_error}\n")
            return 1

        store = BookStore(name=args.name, books=books)
        if not store_db.store(store):
            print(f"\n❌ Failed to store bookstore: {store_db.last_error}\n")
            return 1

        loaded = store_db.load(store.id)
        if loaded is None:
            print(f"\n❌ Bookstore {store.id} could not be loaded\n")
            return 1

        print(f"\n=== {loaded.name} ({loaded.id}) ===\n")
        for i, book in enumerate(loaded.books, 1):
            author = book.author
            author_name = f"{author.first_name} {author.last_name}" if author else "(unknown)"
            prices = ", ".join(f"{price:.2f}" for price in book.prices)
            print(f"  {i}. {author_name}: {prices}")
        print()
        return 0

    except PyMongoError as e:
        logger.error(f"Demo failed: {e}", exc_info=True)
        print(f"\n❌ Demo failed: {e}\n")
        return 1
    finally:
        client.close()


def cmd_clear(args: argparse.Namespace) -> int:
    """Remove every document from the bookstore collections."""
    if not args.yes:
        print("\nRefusing to clear collections without --yes\n")
        return 1

    client, *databases = _open_clients()

    try:
        for database in databases:
            removed = database.remove_all()
            print(f"  {database.collection_name}: removed {removed}")
        print()
        return 0

    except PyMongoError as e:
        logger.error(f"Failed to clear collections: {e}")
        print(f"\n❌ Failed to clear collections: {e}\n")
        return 1
    finally:
        client.close()


def main() -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Bookstore: MongoDB data-access layer example",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"Bookstore {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    parser_init = subparsers.add_parser(
        "init",
        help="Initialize data directory and configuration file",
    )
    parser_init.set_defaults(func=cmd_init)

    parser_config = subparsers.add_parser(
        "config",
        help="Display merged configuration",
    )
    parser_config.set_defaults(func=cmd_config)

    parser_ping = subparsers.add_parser(
        "ping",
        help="Check MongoDB connectivity",
    )
    parser_ping.set_defaults(func=cmd_ping)

    parser_stats = subparsers.add_parser(
        "stats",
        help="Display document counts per collection",
    )
    parser_stats.set_defaults(func=cmd_stats)

    parser_demo = subparsers.add_parser(
        "demo",
        help="Store and reload an example bookstore",
    )
    parser_demo.add_argument(
        "--name",
        default="Thalia",
        help="Name of the example bookstore",
    )
    parser_demo.add_argument(
        "--books",
        type=int,
        default=6,
        help="Number of books to create",
    )
    parser_demo.set_defaults(func=cmd_demo)

    parser_clear = subparsers.add_parser(
        "clear",
        help="Remove all authors, books and bookstores",
    )
    parser_clear.add_argument(
        "--yes",
        action="store_true",
        help="Confirm deletion",
    )
    parser_clear.set_defaults(func=cmd_clear)

    args = parser.parse_args()

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        settings = get_settings()
    except ValidationError as e:
        print("\n❌ Configuration Error:\n")
        for error in e.errors():
            print(f"  • {'.'.join(str(x) for x in error['loc'])}: {error['msg']}")
        print()
        return 1

    configure_logging(settings)
    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)
    initialize_logfire(settings)

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
