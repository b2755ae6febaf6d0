"""
MongoDB connection bootstrapping.

This module provides:
- MongoClient creation from a DbAuth object
- Health check utilities
"""

import logging

from pymongo import MongoClient
from pymongo.errors import PyMongoError

from bookstore.config import DbAuth

logger = logging.getLogger(__name__)


def create_client(auth: DbAuth) -> MongoClient:
    """
    Create a MongoClient for the given connection coordinates.

    The driver connects lazily in the background; use check_db_connection()
    to verify that the server is reachable.
    """
    client = MongoClient(
        auth.connection_url,
        tls=auth.tls,
        serverSelectionTimeoutMS=auth.server_selection_timeout_ms,
    )
    logger.info(f"Created MongoDB client for {auth.sanitized_url}")
    return client


def check_db_connection(client: MongoClient | None) -> bool:
    """
    Check if MongoDB connection is healthy.
    """
    if client is None:
        return False

    try:
        client.admin.command("ping")
        return True
    except PyMongoError as e:
        logger.debug(f"MongoDB ping failed: {e}")
        return False


def get_db_info(auth: DbAuth, client: MongoClient | None = None) -> dict:
    """
    Get database connection information and status.
    """
    return {
        "status": "connected" if check_db_connection(client) else "disconnected",
        "url": auth.sanitized_url,
        "database": auth.database_name,
        "auth_mechanism": auth.auth_mechanism if auth.has_credentials else None,
        "tls": auth.tls,
    }
