from __future__ import annotations
import weakref
from typing import Optional, Type, TYPE_CHECKING
from logging import Logger, getLogger as logging_getLogger
from ..exceptions import TransactionError

if TYPE_CHECKING:
    from .database import Database


class Transaction:
    """
    A transaction started with `Database.begin`.

    Only a weak reference to the database is kept, so an open transaction
    never keeps its connection alive.
    """

    def __init__(
        self,
        database: Database,
        autocommit: bool = False,
        logger: Optional[Logger] = None
    ):
        if database is None:
            raise TransactionError("Transaction requires an existing Database instance.")
        self._database = weakref.ref(database)
        self.autocommit = autocommit
        self.logger = logger or logging_getLogger(__name__)
        self._finished = False

    @property
    def database(self) -> Database:
        database = self._database()
        if database is None:
            raise TransactionError("The database of this transaction no longer exists")
        return database

    @property
    def finished(self) -> bool:
        return self._finished

    def __enter__(self) -> Transaction:
        return self

    def __exit__(self, exc_type: Optional[Type[BaseException]],
                 exc_val: Optional[BaseException], exc_tb) -> None:
        """Exit the transaction context."""
        if self._finished:
            return
        if self._database() is None:
            self.logger.warning("No database left to finish the transaction")
            return

        try:
            if exc_type is not None:
                self.rollback()
                self.logger.error(f"ROLLBACK transaction after {exc_type.__name__}")
            elif self.autocommit:
                self.commit()
            else:
                self.rollback()
        except Exception as e:
            self.logger.error(f"Failed to commit/rollback transaction: {e}")
            raise

    def commit(self) -> None:
        """Commit the transaction."""
        self._finish("COMMIT")

    def rollback(self) -> None:
        """Roll the transaction back."""
        self._finish("ROLLBACK")

    def _finish(self, command: str) -> None:
        if self._finished:
            raise TransactionError("Transaction has already been committed or rolled back")
        self.database.driver.do(command)
        self._finished = True
        self.logger.info(f"{command} transaction")
