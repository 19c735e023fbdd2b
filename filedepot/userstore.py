"""User accounts kept in a MariaDB ``users`` table with salted SHA-512 hashes."""

from __future__ import annotations

import hashlib
import logging
import os
from collections.abc import Mapping
from typing import Any

import pymysql

logger = logging.getLogger(__name__)

MAX_ID_LENGTH = 20

DB_HOST = "127.0.0.1"
DB_PORT = 3306
DB_USER = "root"
DB_SCHEMA = "test"
SSL_CA = "/etc/mysql/certs/ca.pem"
SSL_CERT = "/etc/mysql/certs/server-cert.pem"
SSL_KEY = "/etc/mysql/certs/server-key.pem"

_SELECT_PW = "SELECT pw FROM users WHERE id = %s"
_INSERT_USER = "INSERT INTO users (id, pw) VALUES (%s, %s)"


def hash_password(password: str, salt: str) -> str:
    """Return the upper-case hex SHA-512 digest of ``password + salt``."""
    return hashlib.sha512((password + salt).encode("utf-8")).hexdigest().upper()


class UserStore:
    """Checks and creates accounts over a DB-API connection."""

    def __init__(self, connection: Any, salt: str) -> None:
        self._connection = connection
        self._salt = salt

    def _require_connection(self) -> Any:
        if self._connection is None:
            raise RuntimeError("user store is closed")
        return self._connection

    def _stored_hash(self, user_id: str) -> str | None:
        connection = self._require_connection()
        with connection.cursor() as cursor:
            cursor.execute(_SELECT_PW, (user_id,))
            row = cursor.fetchone()
        return None if row is None else row[0]

    def match_pw(self, user_id: str, password: str) -> bool:
        """Return True if the account exists and the password matches."""
        stored = self._stored_hash(user_id)
        if stored is None:
            return False
        return hash_password(password, self._salt) == stored

    def create_id(self, user_id: str, password: str) -> bool:
        """Create an account; return False if the id is too long or taken."""
        if len(user_id) > MAX_ID_LENGTH:
            return False
        if self._stored_hash(user_id) is not None:
            return False
        connection = self._require_connection()
        with connection.cursor() as cursor:
            cursor.execute(_INSERT_USER, (user_id, hash_password(password, self._salt)))
        connection.commit()
        return True

    def close(self) -> None:
        """Close the underlying connection; further calls do nothing."""
        if self._connection is not None:
            self._connection.close()
            self._connection = None

    def __enter__(self) -> UserStore:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def open_store(env: Mapping[str, str] | None = None) -> UserStore:
    """Connect to the account database using ``SALT`` and ``DB_PASSWORD``."""
    env = os.environ if env is None else env
    salt = env["SALT"]
    password = env.get("DB_PASSWORD")
    connection = pymysql.connect(
        host=DB_HOST,
        port=DB_PORT,
        user=DB_USER,
        password=password,
        database=DB_SCHEMA,
        ssl={"ca": SSL_CA, "cert": SSL_CERT, "key": SSL_KEY},
    )
    logger.info("database connected")
    return UserStore(connection, salt)