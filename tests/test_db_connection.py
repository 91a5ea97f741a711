import pytest

from db import connection


class DummyPool:
    instances: list["DummyPool"] = []

    def __init__(self, minconn, maxconn, dsn, **kwargs) -> None:
        self.args = (minconn, maxconn, dsn)
        self.kwargs = kwargs
        self.conn = object()
        self.returned = []
        self.closed = False
        DummyPool.instances.append(self)

    def getconn(self):
        return self.conn

    def putconn(self, conn) -> None:
        self.returned.append(conn)

    def closeall(self) -> None:
        self.closed = True


@pytest.fixture()
def dummy_pool(monkeypatch):
    DummyPool.instances = []
    monkeypatch.setattr(connection.pool, "SimpleConnectionPool", DummyPool)
    monkeypatch.setattr(connection, "_pool", None)
    return DummyPool


def test_handle_is_a_single_connection(dummy_pool) -> None:
    with connection.database("postgresql://u:p@db:5432/app"):
        conn = connection.get_connection()
        connection.release_connection(conn)

    (handle,) = dummy_pool.instances
    assert handle.args == (1, 1, "postgresql://u:p@db:5432/app")
    assert handle.kwargs == {"connect_timeout": connection.DB_CONNECT_TIMEOUT}
    assert handle.returned == [handle.conn]
    assert handle.closed
    assert connection._pool is None


def test_handle_is_closed_when_block_raises(dummy_pool) -> None:
    with pytest.raises(ValueError):
        with connection.database():
            raise ValueError("boom")

    assert dummy_pool.instances[0].closed
    assert dummy_pool.instances[0].args[2] == connection.DATABASE_URL


def test_get_connection_requires_init(dummy_pool) -> None:
    with pytest.raises(RuntimeError):
        connection.get_connection()
