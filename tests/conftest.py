import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from chaintax.accounting.ledger import CostBasisLedger
from chaintax.classifier.utils.transfers import TRANSFER_TOPIC
from chaintax.db.session import Base
import chaintax.db.models  # noqa: F401 — register all models
from chaintax.domain.models.transaction import RawLog
from chaintax.infra.price.cache import InMemoryPriceCache
from chaintax.infra.price.service import PriceResolver


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture()
async def engine():
    eng = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await eng.dispose()


@pytest.fixture()
async def session(engine) -> AsyncSession:
    factory = async_sessionmaker(engine, expire_on_commit=False)
    async with factory() as sess:
        yield sess


@pytest.fixture()
def resolver() -> PriceResolver:
    """Offline resolver: stablecoins and yearly fallbacks only."""
    return PriceResolver(InMemoryPriceCache())


@pytest.fixture()
def ledger() -> CostBasisLedger:
    return CostBasisLedger()


@pytest.fixture()
def transfer_log():
    """Build an ERC20 Transfer(from, to, amount) log."""

    def _build(token: str, sender: str, receiver: str, amount: int) -> RawLog:
        topics = [TRANSFER_TOPIC, "0x" + "0" * 24 + sender[2:], "0x" + "0" * 24 + receiver[2:]]
        return RawLog(address=token, topics=topics, data=hex(amount))

    return _build
