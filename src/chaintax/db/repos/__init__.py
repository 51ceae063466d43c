from chaintax.db.repos.cost_lot_repo import CostLotRepo
from chaintax.db.repos.price_cache_repo import PriceCacheRepo
from chaintax.db.repos.tax_report_repo import TaxReportRepo

__all__ = ["CostLotRepo", "PriceCacheRepo", "TaxReportRepo"]
