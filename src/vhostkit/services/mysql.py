"""MySQL / MariaDB database creation via the ``mysql`` client."""

from __future__ import annotations

import os

from vhostkit.errors import CommandError, DatabaseError
from vhostkit.services import system


def create_database_sql(db_name: str, charset: str, collation: str) -> str:
    """Idempotent ``CREATE DATABASE`` statement.

    ``db_name`` comes from a validated domain, so it only contains
    ``[a-z0-9_-]`` and is safe inside backticks.
    """
    return (
        f"CREATE DATABASE IF NOT EXISTS `{db_name}` "
        f"CHARACTER SET {charset} COLLATE {collation};"
    )


def create_database(
    db_name: str,
    user: str,
    password: str,
    *,
    charset: str,
    collation: str,
) -> None:
    """Create ``db_name`` with the given credentials. Raises DatabaseError on failure."""
    env = dict(os.environ)
    # MYSQL_PWD keeps the password off the process list.
    if password:
        env["MYSQL_PWD"] = password
    cmd = ["mysql", "-u", user, "-e", create_database_sql(db_name, charset, collation)]
    try:
        result = system._run(cmd, check=False, env=env)
    except CommandError as exc:
        raise DatabaseError(str(exc)) from exc
    if result.returncode != 0:
        raise DatabaseError(
            "Database creation failed. Check the MySQL username/password and make sure "
            f"'{user}' has the necessary privileges.\n{result.stderr}"
        )
