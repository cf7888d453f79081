from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

import mysql.connector


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "DBConfig":
        """Build from a settings DB_CONFIG dict."""
        return cls(
            host=str(values.get("host", "localhost")),
            port=int(values.get("port", 3306)),
            user=str(values.get("user", "root")),
            password=str(values.get("password", "")),
            database=str(values.get("database", "point_system_db")),
        )


class DatabaseConnection:
    """Connection factory bound to one DBConfig.

    Each unit of work opens its own short-lived connection. Named locks hold
    theirs for the duration of the locked block.
    """

    def __init__(self, config: DBConfig):
        self.config = config

    def connect(self, *, database: Optional[str] = None):
        """Open a connection; `database=""` connects without selecting a schema."""
        kwargs = dict(
            host=self.config.host,
            port=self.config.port,
            user=self.config.user,
            password=self.config.password,
        )
        database = self.config.database if database is None else database
        if database:
            kwargs["database"] = database
        return mysql.connector.connect(**kwargs)
