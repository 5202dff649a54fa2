import importlib
import logging

from category_tree.core.config import Settings
from category_tree.core.logging_config import setup_logging


class TestSettings:
    """Tests for Settings."""

    def test_default_database_url_uses_asyncpg(self, monkeypatch):
        """Test that the Postgres fields build an asyncpg URL."""
        monkeypatch.delenv("DATABASE_URL_OVERRIDE", raising=False)
        settings = Settings(
            POSTGRES_SERVER="db",
            POSTGRES_USER="u",
            POSTGRES_PASSWORD="p",
            POSTGRES_DB="cats",
            POSTGRES_PORT="5433",
            DATABASE_URL_OVERRIDE=None,
        )

        assert settings.DATABASE_URL == "postgresql+asyncpg://u:p@db:5433/cats"

    def test_database_url_override(self):
        """Test that an explicit URL wins over the Postgres fields."""
        settings = Settings(DATABASE_URL_OVERRIDE="sqlite+aiosqlite:///./categories.db")

        assert settings.DATABASE_URL == "sqlite+aiosqlite:///./categories.db"

    def test_settings_read_environment(self, monkeypatch):
        """Test that environment variables are picked up case-insensitively."""
        monkeypatch.setenv("db_connect_max_retries", "9")

        assert Settings().DB_CONNECT_MAX_RETRIES == 9


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_console_only(self):
        root = setup_logging(Settings(LOG_LEVEL="debug", LOG_FILE_PATH=None))

        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1

    def test_file_handler_created(self, tmp_path):
        log_file = tmp_path / "logs" / "app.log"

        root = setup_logging(Settings(LOG_LEVEL="INFO", LOG_FILE_PATH=str(log_file)))
        logging.getLogger("category_tree.test").info("hello")
        for handler in root.handlers:
            handler.flush()

        assert log_file.exists()
        assert "hello" in log_file.read_text()
        for handler in root.handlers:
            handler.close()
        root.handlers.clear()


class TestMainModuleImport:
    """Tests for the side effects of importing category_tree.main."""

    def test_import_leaves_logging_and_engine_alone(self):
        """Test that importing the module neither reconfigures logging nor builds an app."""
        from category_tree import main

        root = logging.getLogger()
        handlers_before = list(root.handlers)

        importlib.reload(main)

        assert root.handlers == handlers_before
        assert not hasattr(main, "app")
        assert callable(main.create_app)
