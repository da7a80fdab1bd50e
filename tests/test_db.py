import os
from unittest.mock import MagicMock, patch

import daflash.db as db_module


class TestEngineOptions:
    def test_sqlite_allows_cross_thread_use(self):
        opts = db_module._engine_options("sqlite:///daflash.db")
        assert opts["connect_args"]["check_same_thread"] is False
        assert "pool_recycle" not in opts

    def test_server_databases_recycle_connections(self):
        opts = db_module._engine_options("postgresql://u:p@localhost/daflash")
        assert opts == {"pool_pre_ping": True, "pool_recycle": 1800}

    def test_describe_url_hides_password(self):
        described = db_module.describe_url("postgresql://owner:hunter2@db/daflash")
        assert "hunter2" not in described
        assert "owner" in described


class TestGetEngine:
    def test_creates_engine(self, monkeypatch):
        monkeypatch.setattr(db_module, "_engine", None)
        with patch.object(db_module, "settings") as mock_settings:
            mock_settings.db_url = "sqlite:///:memory:"
            engine = db_module.get_engine()
            assert engine is not None
            assert db_module._engine is engine

    def test_returns_cached_engine(self, monkeypatch):
        sentinel = MagicMock()
        monkeypatch.setattr(db_module, "_engine", sentinel)
        assert db_module.get_engine() is sentinel


class TestConnection:
    def test_creates_connection(self, monkeypatch):
        monkeypatch.setattr(db_module, "_connection", None)
        mock_engine = MagicMock()
        with patch.object(db_module, "get_engine", return_value=mock_engine):
            conn = db_module.get_connection()
        assert conn is mock_engine.connect.return_value

    def test_returns_cached_connection(self, monkeypatch):
        sentinel = MagicMock()
        monkeypatch.setattr(db_module, "_connection", sentinel)
        assert db_module.get_connection() is sentinel

    def test_close_connection_resets_singleton(self, monkeypatch):
        conn = MagicMock()
        monkeypatch.setattr(db_module, "_connection", conn)
        db_module.close_connection()
        conn.close.assert_called_once()
        assert db_module._connection is None

    def test_close_without_connection_is_noop(self, monkeypatch):
        monkeypatch.setattr(db_module, "_connection", None)
        db_module.close_connection()
        assert db_module._connection is None


class TestAlembicConfig:
    def test_points_at_project_alembic_dir(self):
        cfg = db_module._get_alembic_config()
        location = cfg.get_main_option("script_location")
        assert os.path.basename(location) == "alembic"
        assert os.path.isdir(location)


class TestInitializeDb:
    @patch("daflash.db.command")
    @patch("daflash.db._get_alembic_config")
    def test_calls_alembic_upgrade(self, mock_config, mock_command):
        db_module.initialize_db()
        mock_command.upgrade.assert_called_once_with(mock_config.return_value, "head")
