"""
Fake asyncpg pool, connection and transaction for repository tests.
"""

from contextlib import asynccontextmanager


class FakeTransaction:
    """Records begin/commit/rollback on the owning connection."""

    def __init__(self, conn):
        self.conn = conn

    async def __aenter__(self):
        self.conn.events.append("begin")
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.conn.events.append("rollback" if exc_type else "commit")
        return False


class FakeConnection:
    """
    Stand-in for an asyncpg connection.

    ``fetchrow_results`` is consumed in order; an exception instance in the
    list is raised instead of returned. ``fail_on_execute`` makes the n-th
    ``execute`` call (1-based) raise ``execute_error``.
    """

    def __init__(self, fetchrow_results=None):
        self.fetchrow_results = list(fetchrow_results or [])
        self.events = []
        self.calls = []
        self.fail_on_execute = None
        self.execute_error = RuntimeError("insert failed")

    def transaction(self):
        return FakeTransaction(self)

    async def fetchrow(self, query, *args):
        self.calls.append(("fetchrow", query, args))
        result = self.fetchrow_results.pop(0)
        if isinstance(result, BaseException):
            raise result
        return result

    async def execute(self, query, *args):
        self.calls.append(("execute", query, args))
        executes = sum(1 for call in self.calls if call[0] == "execute")
        if self.fail_on_execute == executes:
            raise self.execute_error
        return "INSERT 0 1"


class FakePool:
    """Stand-in for an asyncpg pool handing out one connection."""

    def __init__(self, conn):
        self.conn = conn
        self.acquired = 0
        self.released = 0

    @asynccontextmanager
    async def acquire(self):
        self.acquired += 1
        try:
            yield self.conn
        finally:
            self.released += 1
