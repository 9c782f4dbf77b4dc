"""
Settings loading and logging setup.
"""

import logging
from datetime import timedelta

from quotecart._config import Settings, configure_logging, load_settings


class TestSettings:
    def test_defaults(self) -> None:
        settings = load_settings({})
        assert settings == Settings()
        assert settings.checkout_ttl == timedelta(hours=1)

    def test_from_environment(self) -> None:
        settings = load_settings({
            "QUOTECART_CURRENCY_SYMBOL": "€",
            "QUOTECART_DISPLAY_PLACES": "3",
            "QUOTECART_CHECKOUT_TTL_SECONDS": "0",
            "QUOTECART_UNKNOWN": "ignored",
            "OTHER_LOG_LEVEL": "ignored",
        })
        assert settings.currency_symbol == "€"
        assert settings.display_places == 3
        assert settings.checkout_ttl is None

    def test_overrides_win(self) -> None:
        settings = load_settings({"QUOTECART_LOG_LEVEL": "DEBUG"}, log_level="WARNING")
        assert settings.log_level == "WARNING"

    def test_custom_prefix(self) -> None:
        assert load_settings({"QC_LOG_LEVEL": "ERROR"}, prefix="QC_").log_level == "ERROR"

    def test_configure_logging(self) -> None:
        configure_logging(Settings(log_level="debug"))
        assert logging.getLogger("quotecart").level == logging.DEBUG
        configure_logging(Settings())
        assert logging.getLogger("quotecart.cart").getEffectiveLevel() == logging.INFO
