from decimal import Decimal

import pytest
from pydantic import ValidationError

from chaintax.config import Settings
from chaintax.domain.models.tax import TaxRates
from chaintax.exceptions import InvalidConfigError


class TestSettings:
    def test_defaults(self):
        s = Settings()
        assert s.price_cache_tolerance_seconds == 300
        assert s.defillama_base_url == "https://coins.llama.fi"

    def test_database_url(self):
        s = Settings(db_user="u", db_password="p", db_host="db", db_port=5432, db_name="tax")
        assert s.database_url == "postgresql+asyncpg://u:p@db:5432/tax"

    def test_tolerance_range(self):
        assert Settings(price_cache_tolerance_seconds=3600).price_cache_tolerance_seconds == 3600
        with pytest.raises(ValidationError):
            Settings(price_cache_tolerance_seconds=60)
        with pytest.raises(ValidationError):
            Settings(price_cache_tolerance_seconds=7200)

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("CHAINTAX_LONG_TERM_RATE", "0.2")
        assert Settings().long_term_rate == Decimal("0.2")

    def test_tax_rates(self):
        rates = Settings(ordinary_income_rate=Decimal("0.25")).tax_rates()
        assert isinstance(rates, TaxRates)
        assert rates.ordinary_income_rate == Decimal("0.25")

    def test_invalid_rates_rejected(self):
        with pytest.raises(InvalidConfigError):
            Settings(short_term_rate=Decimal("2")).tax_rates()
