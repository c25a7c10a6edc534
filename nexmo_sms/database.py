"""
Database Operations Module

Stores sent and received SMS messages in a MySQL database.
"""

import logging
import re

import mysql.connector

# Get logger
logger = logging.getLogger('NexmoSMS')

_IDENTIFIER = re.compile(r'^[A-Za-z_][A-Za-z0-9_]*$')


def connect_database(config):
    """
    Connect to MySQL database with proper configuration.

    Args:
        config: Database configuration dictionary (host, user, password,
            database and optionally port, charset)

    Returns:
        connection: MySQL database connection
    """
    db = mysql.connector.connect(**config, autocommit=False)
    logger.info(f"Connected to MySQL database '{config.get('database')}' at {config.get('host')}")
    return db


def _quote_identifier(name):
    if not _IDENTIFIER.match(str(name)):
        raise ValueError(f"Invalid table or column name: {name!r}")
    return f"`{name}`"


def build_insert(table, fields):
    """
    Build a parameterised INSERT statement.

    Args:
        table: Table name
        fields: Mapping of column name to value

    Returns:
        tuple: (query, values)
    """
    if not fields:
        raise ValueError("Nothing to insert")
    columns = ', '.join(_quote_identifier(column) for column in fields)
    placeholders = ', '.join(['%s'] * len(fields))
    query = f"INSERT INTO {_quote_identifier(table)} ({columns}) VALUES ({placeholders})"
    return query, tuple(fields.values())


def insert(db, table, fields):
    """
    Insert one row and commit.

    Args:
        db: MySQL database connection
        table: Table name
        fields: Mapping of column name to value

    Returns:
        bool: True if the row was stored, False otherwise
    """
    query, values = build_insert(table, fields)
    logger.debug(f"Executing query: {query}")

    cursor = db.cursor()
    try:
        cursor.execute(query, values)
        db.commit()
    except mysql.connector.Error as e:
        logger.error(f"Failed to insert into {table}: {e}")
        db.rollback()
        return False
    finally:
        cursor.close()

    logger.debug(f"Inserted 1 row into {table}")
    return True
