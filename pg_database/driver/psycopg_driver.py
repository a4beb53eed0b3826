from __future__ import annotations
from typing import Any, List, Optional, Sequence, Tuple
from logging import Logger, getLogger as logging_getLogger
import psycopg
from psycopg import pq, sql
from ..exceptions import DriverError
from ..notification import Notification
from .params import question_to_dollar, to_text

_SUCCESS = (pq.ExecStatus.COMMAND_OK, pq.ExecStatus.TUPLES_OK, pq.ExecStatus.EMPTY_QUERY)


class PsycopgStatement:
    """A named server-side prepared statement and its latest result."""

    __slots__ = ("name", "query", "is_async", "result")

    def __init__(self, name: bytes, query: str, is_async: bool):
        self.name = name
        self.query = query
        self.is_async = is_async
        self.result: Optional[pq.abc.PGresult] = None

    def __repr__(self):
        return f"PsycopgStatement({self.name!r}, {self.query!r}, is_async={self.is_async})"


class PsycopgDriver:
    """
    Driver for `Database` built on the libpq handle of a psycopg connection.

    Statements are prepared with ``PQprepare`` under generated names. Blocking
    statements run with ``PQexecPrepared``; non-blocking ones are sent with
    ``PQsendQueryPrepared`` and collected once ``PQconsumeInput``/``PQisBusy``
    report the result complete. Channel events are read with ``PQnotifies``.

    The psycopg connection should be opened with ``autocommit=True``: the
    driver talks to libpq directly, so psycopg's own transaction tracking is
    bypassed.

    Blocking calls are refused with a `DriverError` while a non-blocking
    result is still outstanding. libpq would otherwise wait for that result
    and throw it away.
    """

    def __init__(self, connection: psycopg.Connection, logger: Optional[Logger] = None):
        self.connection = connection
        self.logger = logger or logging_getLogger(__name__)
        self._counter = 0
        self._discarded: List[bytes] = []

    @property
    def pgconn(self) -> pq.abc.PGconn:
        return self.connection.pgconn

    @property
    def encoding(self) -> str:
        return self.connection.info.encoding

    @property
    def pid(self) -> int:
        return self.pgconn.backend_pid

    # Statements
    def prepare(self, query: str, is_async: bool = False, dollar_only: bool = False) -> PsycopgStatement:
        self._ensure_idle()
        self._deallocate_discarded()
        self._counter += 1
        name = f"pg_database_{self._counter}".encode()
        command = query if dollar_only else question_to_dollar(query)
        try:
            result = self.pgconn.prepare(name, command.encode(self.encoding))
        except psycopg.Error as e:
            raise DriverError(f"Failed to prepare statement: {e}") from e
        self._check(result)
        return PsycopgStatement(name, query, is_async)

    def execute(self, statement: PsycopgStatement, params: Sequence[Any]) -> None:
        values = [to_text(value, self.encoding) for value in params]
        self._ensure_idle()
        statement.result = None
        try:
            if statement.is_async:
                self.pgconn.send_query_prepared(statement.name, values)
                return
            result = self.pgconn.exec_prepared(statement.name, values)
        except psycopg.Error as e:
            raise DriverError(str(e)) from e
        statement.result = self._check(result)

    def is_ready(self, statement: PsycopgStatement) -> bool:
        try:
            self.pgconn.consume_input()
        except psycopg.Error:
            # fetch_result reports the failure
            return True
        return not self.pgconn.is_busy()

    def fetch_result(self, statement: PsycopgStatement, suppress_errors: bool = False) -> Any:
        error: Optional[DriverError] = None
        try:
            for result in iter(self.pgconn.get_result, None):
                if error is not None:
                    continue
                try:
                    statement.result = self._check(result)
                except DriverError as e:
                    error = e
        except psycopg.Error as e:
            error = error or DriverError(str(e))

        if error is None and statement.result is None:
            error = DriverError(self._error_message() or "No result received")
        if error is None:
            return statement.result
        if suppress_errors:
            return error
        raise error

    def discard(self, statement: PsycopgStatement) -> None:
        self._discarded.append(statement.name)

    def _deallocate_discarded(self) -> None:
        while self._discarded:
            name = self._discarded.pop(0)
            try:
                self.pgconn.exec_(b"DEALLOCATE " + name)
            except psycopg.Error as e:
                self.logger.debug(f"Failed to deallocate {name.decode()}: {e}")

    # Results
    def columns(self, statement: PsycopgStatement) -> List[str]:
        result = statement.result
        if result is None:
            return []
        names = (result.fname(i) for i in range(result.nfields))
        return [name.decode(self.encoding) if name is not None else "?column?" for name in names]

    def rows(self, statement: PsycopgStatement) -> List[Tuple[Any, ...]]:
        result = statement.result
        if result is None:
            return []
        return [
            tuple(self._decode(result.get_value(row, col)) for col in range(result.nfields))
            for row in range(result.ntuples)
        ]

    def rowcount(self, statement: PsycopgStatement) -> int:
        result = statement.result
        if result is None:
            return -1
        if result.command_tuples is not None:
            return result.command_tuples
        return result.ntuples if result.status == pq.ExecStatus.TUPLES_OK else -1

    # Notifications
    def next_notification(self) -> Optional[Notification]:
        try:
            self.pgconn.consume_input()
        except psycopg.Error as e:
            raise DriverError(f"Failed to read from connection: {e}") from e
        notify = self.pgconn.notifies()
        if notify is None:
            return None
        return Notification(
            notify.relname.decode(self.encoding),
            notify.be_pid,
            notify.extra.decode(self.encoding),
        )

    # Commands
    def do(self, command: str) -> None:
        self._ensure_idle()
        try:
            result = self.pgconn.exec_(command.encode(self.encoding))
        except psycopg.Error as e:
            raise DriverError(str(e)) from e
        self._check(result)

    def quote_identifier(self, name: str) -> str:
        return sql.Identifier(name).as_string(self.connection)

    def quote_literal(self, value: Any) -> str:
        return sql.Literal(value).as_string(self.connection)

    def fileno(self) -> int:
        try:
            return self.pgconn.socket
        except psycopg.Error as e:
            raise DriverError(f"Failed to get connection socket: {e}") from e

    def ping(self) -> bool:
        self._ensure_idle()
        try:
            result = self.pgconn.exec_(b"SELECT 1")
        except psycopg.Error:
            return False
        return result.status == pq.ExecStatus.TUPLES_OK

    def close(self) -> None:
        self._discarded.clear()
        self.connection.close()

    # Helpers
    def _ensure_idle(self) -> None:
        if self.pgconn.transaction_status == pq.TransactionStatus.ACTIVE:
            raise DriverError("another command is already in progress")

    def _check(self, result: pq.abc.PGresult) -> pq.abc.PGresult:
        if result.status in _SUCCESS:
            return result
        message = result.error_message.decode(self.encoding, "replace").strip()
        sqlstate = result.error_field(pq.DiagnosticField.SQLSTATE)
        raise DriverError(
            message or "Query failed",
            sqlstate=sqlstate.decode() if sqlstate else None,
        )

    def _error_message(self) -> str:
        return self.pgconn.error_message.decode(self.encoding, "replace").strip()

    def _decode(self, value: Optional[bytes]) -> Optional[str]:
        return value.decode(self.encoding) if value is not None else None
