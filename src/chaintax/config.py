from decimal import Decimal

from pydantic import field_validator
from pydantic_settings import BaseSettings

from chaintax.domain.models.tax import TaxRates


class Settings(BaseSettings):
    db_host: str = "localhost"
    db_port: int = 54377
    db_user: str = "postgres"
    db_password: str = "postgres"
    db_name: str = "chaintax"
    defillama_base_url: str = "https://coins.llama.fi"
    evm_rpc_url: str = ""
    http_rate_per_second: float = 5.0
    price_cache_tolerance_seconds: int = 300  # symmetric window around the requested timestamp
    classify_concurrency: int = 8
    ordinary_income_rate: Decimal = Decimal("0.30")
    short_term_rate: Decimal = Decimal("0.30")
    long_term_rate: Decimal = Decimal("0.15")
    long_term_threshold_days: int = 365
    debug: bool = False

    @field_validator("price_cache_tolerance_seconds")
    @classmethod
    def _tolerance_in_range(cls, v: int) -> int:
        if not 300 <= v <= 3600:
            raise ValueError("price_cache_tolerance_seconds must be between 300 and 3600")
        return v

    @property
    def database_url(self) -> str:
        return f"postgresql+asyncpg://{self.db_user}:{self.db_password}@{self.db_host}:{self.db_port}/{self.db_name}"

    def tax_rates(self) -> TaxRates:
        """Build validated tax rates. Raises InvalidConfigError on bad values."""
        return TaxRates(
            ordinary_income_rate=self.ordinary_income_rate,
            short_term_rate=self.short_term_rate,
            long_term_rate=self.long_term_rate,
            long_term_threshold_days=self.long_term_threshold_days,
        )

    class Config:
        env_file = ".env"
        env_prefix = "CHAINTAX_"


settings = Settings()
