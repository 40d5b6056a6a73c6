"""Response schemas for the reseller analytics endpoint.

Field names are snake_case in Python and camelCase on the wire
(``chartData``, ``topProducts``, ``totalSales``...)."""
from typing import List

from ...common.schemas import CamelModel


class PeriodTotals(CamelModel):
    revenue: float
    profit: float
    orders: int
    customers: int


class GrowthRates(CamelModel):
    """Percent change of each metric against the previous window."""
    revenue: float
    profit: float
    orders: float
    customers: float


class AnalyticsOverview(CamelModel):
    current_month: PeriodTotals
    growth: GrowthRates


class DailyStats(CamelModel):
    date: str  # YYYY-MM-DD, UTC
    revenue: float
    profit: float
    orders: int
    customers: int


class TopProduct(CamelModel):
    title: str
    total_sales: int
    revenue: float


class AnalyticsResponse(CamelModel):
    overview: AnalyticsOverview
    chart_data: List[DailyStats]
    top_products: List[TopProduct]
