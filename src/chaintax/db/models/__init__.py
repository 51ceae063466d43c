from chaintax.db.models.cost_lot import CostLotRecord
from chaintax.db.models.price_quote import PriceQuoteRecord
from chaintax.db.models.tax_report import TaxReportRecord

__all__ = ["CostLotRecord", "PriceQuoteRecord", "TaxReportRecord"]
