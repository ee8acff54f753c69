from kiksht.database import engine_options


def test_sqlite_engine_allows_threadpool_connections():
    options = engine_options("sqlite:///data/dictionary.db")
    assert options["connect_args"] == {"check_same_thread": False}
    assert options["pool_pre_ping"] is True


def test_server_engine_has_no_sqlite_connect_args():
    assert "connect_args" not in engine_options("postgresql://user@localhost/kiksht")
