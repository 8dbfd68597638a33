from __future__ import annotations

# ------------------------------------------------------------------------------
# Records every SQL statement sent to the driver
# ------------------------------------------------------------------------------
from sqlalchemy import event
from sqlalchemy.engine import Engine


class StatementRecorder:
    """
    Hooks ``before_cursor_execute`` on a sync engine.

    Pool pre-ping and connection resets bypass cursor events, so only the
    statements a handler issues end up in ``statements``.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self.statements: list[str] = []

    def _record(self, conn, cursor, statement, parameters, context, executemany) -> None:
        self.statements.append(statement)

    def start(self) -> "StatementRecorder":
        event.listen(self.engine, "before_cursor_execute", self._record)
        return self

    def stop(self) -> None:
        event.remove(self.engine, "before_cursor_execute", self._record)
