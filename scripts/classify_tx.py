"""Classify one transaction from a JSON file and print the resulting events.

The JSON holds a RawTransaction (hash, timestamp, from_address, to_address,
value, gas_used, gas_price, method_selector, logs[]).

Usage:
    PYTHONPATH=src python scripts/classify_tx.py tx.json 0xUSER [--network ethereum] [--price]
"""

import argparse
import asyncio
import json
import logging
from pathlib import Path

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)-5s %(name)s - %(message)s")
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)


async def main(path: Path, user: str, network: str, price: bool) -> None:
    from chaintax.classifier.enrich import EventPricer
    from chaintax.container import Container
    from chaintax.domain.models.transaction import RawTransaction
    from chaintax.infra.price.cache import InMemoryPriceCache
    from chaintax.infra.price.service import PriceResolver

    container = Container()
    tx = RawTransaction.model_validate(json.loads(path.read_text()))
    events = container.classifier().classify(tx, user, network)

    if price:
        resolver = PriceResolver(
            InMemoryPriceCache(),
            provider=container.price_provider(),
            tokens=container.token_registry(),
            tolerance=container.price_tolerance(),
        )
        try:
            await EventPricer(resolver).price_all(events, network)
        finally:
            await container.http_client().close()

    print(f"TX {tx.hash}  ({len(events)} event(s))")
    for event in events:
        print(json.dumps(event.model_dump(mode="json", exclude_none=True), indent=2))


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("tx_file", type=Path)
    parser.add_argument("user")
    parser.add_argument("--network", default="ethereum")
    parser.add_argument("--price", action="store_true", help="resolve USD values via DefiLlama")
    args = parser.parse_args()
    asyncio.run(main(args.tx_file, args.user, args.network, args.price))
