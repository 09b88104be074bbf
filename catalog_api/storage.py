from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, List, Optional
import logging

from fastapi import Depends
from sqlalchemy import text
from sqlalchemy.orm import Session
from sqlalchemy.sql.expression import Executable

from catalog_api.database import get_db

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MutationResult:
    """Outcome of an INSERT, UPDATE or DELETE."""
    changes: int
    last_insert_rowid: Optional[int] = None


class StorageAdapter:
    """
    Executes parameterized SQLAlchemy statements against one session.

    Statements are built with SQLAlchemy Core, so every value reaches the
    database as a bound parameter. Rows come back as plain dictionaries.
    """

    def __init__(self, session: Session):
        self.session = session

    def fetch_all(self, statement: Executable) -> List[dict]:
        """Run a read and return every row."""
        result = self.session.execute(statement)
        return [dict(row) for row in result.mappings().all()]

    def fetch_one(self, statement: Executable) -> Optional[dict]:
        """Run a read and return the first row, or None."""
        result = self.session.execute(statement)
        row = result.mappings().first()
        return dict(row) if row is not None else None

    def execute(self, statement: Executable) -> MutationResult:
        """
        Run a mutation.

        Returns:
            Affected-row count and, for single-row inserts, the generated
            primary key.
        """
        result = self.session.execute(statement)
        last_insert_rowid = None
        if result.is_insert:
            primary_key = result.inserted_primary_key
            if primary_key:
                last_insert_rowid = primary_key[0]
        return MutationResult(changes=result.rowcount, last_insert_rowid=last_insert_rowid)

    @contextmanager
    def transaction(self) -> Iterator["StorageAdapter"]:
        """Commit when the block succeeds, roll back on any exception."""
        try:
            yield self
            self.session.commit()
        except Exception:
            logger.debug("Rolling back transaction")
            self.session.rollback()
            raise

    def ping(self) -> None:
        """Round trip used by readiness checks."""
        self.session.execute(text("SELECT 1"))


def get_storage(db: Session = Depends(get_db)) -> StorageAdapter:
    """Dependency building a storage adapter over the request session."""
    return StorageAdapter(db)
