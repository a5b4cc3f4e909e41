"""Service interface codes, database configuration and a cleanup guard."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from types import TracebackType
from typing import Callable, Optional

SERVICE_PATH = "/data/service/el1/public/app_domain_verify_mgr_service"
RDB_VERSION = 3
RDB_NAME = "/advdb.db"
RDB_TABLE_NAME = "verified_domain"


class AgentInterfaceCode(enum.IntEnum):
    """Request codes understood by the verification agent."""

    SINGLE_VERIFY = 0
    CONVERT_TO_EXPLICIT_WANT = 1


class MgrInterfaceCode(enum.IntEnum):
    """Request codes understood by the verification manager."""

    QUERY_VERIFY_STATUS = 0
    VERIFY_DOMAIN = 1
    CLEAR_DOMAIN_VERIFY_RESULT = 2
    FILTER_ABILITIES = 3
    QUERY_ALL_VERIFY_STATUS = 4
    SAVE_VERIFY_STATUS = 5
    IS_ATOMIC_SERVICE_URL = 6
    CONVERT_TO_EXPLICIT_WANT = 7
    UPDATE_WHITE_LIST_URLS = 8
    QUERY_ASSOCIATED_DOMAINS = 9
    QUERY_ASSOCIATED_BUNDLE_NAMES = 10
    GET_DEFERRED_LINK = 11


@dataclass
class RdbConfig:
    """Where the verification database lives and how its table is made."""

    db_path: str = SERVICE_PATH
    db_name: str = ""
    table_name: str = ""
    create_table_sql: str = ""
    version: int = RDB_VERSION

    def database_file(self) -> str:
        """Full path of the database file."""
        return self.db_path + self.db_name


@dataclass
class RdbDataItem:
    """One stored row: the verification state of a domain for a bundle."""

    bundle_name: str = ""
    app_identifier: str = ""
    domain: str = ""
    status: int = 0
    verify_ts: str = ""
    count: int = 0


class ScopeGuard:
    """Runs a cleanup function when its block ends, unless dismissed first."""

    def __init__(self, fn: Callable[[], object]) -> None:
        self._fn = fn
        self.dismissed = False

    def dismiss(self) -> None:
        """Stop the cleanup function from running."""
        self.dismissed = True

    def __enter__(self) -> "ScopeGuard":
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        if not self.dismissed:
            self._fn()