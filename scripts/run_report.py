"""Run a tax report for one address over transactions exported to a JSON file.

The JSON file holds a list of RawTransaction objects. Prices, cost lots and the
report record are persisted to the configured database.

Usage:
    PYTHONPATH=src python scripts/run_report.py txs.json 0xUSER 2024 [--month 3] [--network ethereum] [--reset]
"""

import argparse
import asyncio
import json
import logging
import time
from pathlib import Path

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)-5s %(name)s - %(message)s")
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


class JsonFileSource:
    def __init__(self, path: Path) -> None:
        from chaintax.domain.models.transaction import RawTransaction

        self._txs = [RawTransaction.model_validate(item) for item in json.loads(path.read_text())]

    async def fetch(self, address, period, network):
        return [tx for tx in self._txs if period.contains(tx.timestamp)]


async def main(
    path: Path, user: str, year: int, month: int | None, network: str, live: bool, reset: bool
) -> None:
    from chaintax.container import Container
    from chaintax.db.repos import CostLotRepo, PriceCacheRepo, TaxReportRepo
    from chaintax.infra.price.service import PriceResolver
    from chaintax.report.models import ReportPeriod, ReportRequest
    from chaintax.report.service import ReportService

    container = Container()
    settings = container.settings()
    request = ReportRequest(
        address=user,
        period=ReportPeriod(year=year, month=month),
        network=network,
        live_unrealized=live,
    )

    try:
        async with container.session_factory()() as session:
            resolver = PriceResolver(
                PriceCacheRepo(session),
                provider=container.price_provider(),
                tokens=container.token_registry(),
                tolerance=container.price_tolerance(),
            )
            service = ReportService(
                JsonFileSource(path),
                resolver,
                classifier=container.classifier(),
                lot_stores=CostLotRepo(session),
                rates=container.tax_rates(),
                concurrency=settings.classify_concurrency,
                report_repo=TaxReportRepo(session),
            )

            if reset:
                await service.delete_reports(user)

            t0 = time.time()
            job = await service.run(request)
            await session.commit()
    finally:
        await container.http_client().close()
        await container.engine().dispose()

    print(f"\nReport {request.period.label} for {request.address}: {job.stage.value} ({time.time() - t0:.1f}s)")
    if job.error:
        print(f"  error: {job.error}")
        return
    for tx_hash, reason in job.skipped_transactions.items():
        print(f"  skipped {tx_hash}: {reason}")
    print(json.dumps(job.summary.model_dump(mode="json"), indent=2))


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("tx_file", type=Path)
    parser.add_argument("user")
    parser.add_argument("year", type=int)
    parser.add_argument("--month", type=int)
    parser.add_argument("--network", default="ethereum")
    parser.add_argument("--live", action="store_true", help="value open positions now instead of at period end")
    parser.add_argument("--reset", action="store_true", help="drop stored reports and lots for the user first")
    args = parser.parse_args()
    asyncio.run(main(args.tx_file, args.user, args.year, args.month, args.network, args.live, args.reset))
