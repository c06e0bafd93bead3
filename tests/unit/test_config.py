"""
Unit tests for settings and logging setup.
"""
from decimal import Decimal

import structlog

from night_audit.config import Settings, get_settings
from night_audit.logging_config import configure_logging
from night_audit.parsing import AccountLineParser, ParserConfig


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self):
        """Test default settings."""
        settings = Settings(_env_file=None)

        assert settings.log_level == "INFO"
        assert settings.log_json is True
        assert settings.minimum_amount == Decimal("0.01")
        assert settings.include_zero_amounts is False
        assert settings.combine_payment_methods is True
        assert settings.credit_card_deposit_account == "1010"

    def test_environment_override(self, monkeypatch):
        """Test NIGHT_AUDIT_* variables override defaults."""
        monkeypatch.setenv("NIGHT_AUDIT_MINIMUM_AMOUNT", "5.00")
        monkeypatch.setenv("NIGHT_AUDIT_COMBINE_PAYMENT_METHODS", "false")

        settings = get_settings()

        assert settings.minimum_amount == Decimal("5.00")
        assert settings.combine_payment_methods is False

    def test_settings_cached(self):
        """Test get_settings returns one instance."""
        assert get_settings() is get_settings()


class TestParserConfigFromSettings:
    """Tests for ParserConfig.from_settings."""

    def test_from_settings(self, monkeypatch):
        """Test parser options follow settings."""
        monkeypatch.setenv("NIGHT_AUDIT_INCLUDE_ZERO_AMOUNTS", "true")

        config = ParserConfig.from_settings(get_settings())

        assert config.include_zero_amounts is True
        assert config.minimum_amount == Decimal("0.01")

    def test_overrides_win(self):
        """Test per-call overrides beat settings."""
        config = ParserConfig.from_settings(get_settings(), minimum_amount=Decimal("2"), valid_source_codes={"rc"})

        parser = AccountLineParser(config)

        assert parser.config.minimum_amount == Decimal("2")
        assert parser.config.valid_source_codes == frozenset({"RC"})


class TestLogging:
    """Tests for configure_logging."""

    def test_configure_console(self):
        """Test console logging can be configured and used."""
        configure_logging(level="DEBUG", json_output=False)
        structlog.get_logger("test").debug("configured", value=1)

    def test_configure_json_from_settings(self):
        """Test JSON logging from defaults."""
        configure_logging()
        structlog.get_logger("test").info("configured")
