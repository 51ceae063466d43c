from datetime import timedelta

from dependency_injector import containers, providers

from chaintax.classifier.registry import build_default_registry
from chaintax.classifier.service import Classifier
from chaintax.config import Settings
from chaintax.db.session import build_engine, build_session_factory
from chaintax.infra.blockchain.evm.rpc_client import EvmRpcClient
from chaintax.infra.http.rate_limited_client import RateLimitedClient
from chaintax.infra.price.defillama import DefiLlamaProvider
from chaintax.infra.price.tokens import TokenRegistry


def build_token_registry(rpc_url: str, http_client: RateLimitedClient) -> TokenRegistry:
    """On-chain decimals lookups only when an RPC endpoint is configured."""
    if not rpc_url:
        return TokenRegistry()
    return TokenRegistry(rpc=EvmRpcClient(rpc_url, http_client))


class Container(containers.DeclarativeContainer):
    settings = providers.Singleton(Settings)

    engine = providers.Singleton(
        build_engine,
        database_url=settings.provided.database_url,
        echo=settings.provided.debug,
    )

    session_factory = providers.Singleton(
        build_session_factory,
        engine=engine,
    )

    http_client = providers.Singleton(
        RateLimitedClient,
        rate_per_second=settings.provided.http_rate_per_second,
    )

    token_registry = providers.Singleton(
        build_token_registry,
        rpc_url=settings.provided.evm_rpc_url,
        http_client=http_client,
    )

    price_provider = providers.Singleton(
        DefiLlamaProvider,
        http_client=http_client,
        base_url=settings.provided.defillama_base_url,
    )

    price_tolerance = providers.Callable(
        timedelta,
        seconds=settings.provided.price_cache_tolerance_seconds,
    )

    protocol_registry = providers.Singleton(build_default_registry)

    classifier = providers.Singleton(
        Classifier,
        registry=protocol_registry,
    )

    tax_rates = providers.Singleton(Settings.tax_rates, settings)
