"""
Analytics Service Module

Builds the reseller analytics report: a daily revenue/profit series for the
trailing window, the top products by revenue and window-over-window growth.
Filtering and the product join run in the database; day grouping, distinct
customer counts and ranking run here, which keeps the queries portable
between SQLite and PostgreSQL.
"""

import asyncio
import datetime
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional

from tortoise.backends.base.client import BaseDBAsyncClient

from ...core.config import ANALYTICS_WINDOW_DAYS, TOP_PRODUCTS_LIMIT
from ..orders.models import Order, OrderItem, OrderStatus
from ..stores.service import get_store_for_reseller
from .schemas import (
    AnalyticsOverview, AnalyticsResponse, DailyStats, GrowthRates,
    PeriodTotals, TopProduct,
)

logger = logging.getLogger(__name__)

ZERO_BASELINE_GROWTH = 100.0


@dataclass
class PeriodSummary:
    revenue: float = 0.0
    cost: float = 0.0
    orders: int = 0
    customer_ids: set = field(default_factory=set)

    @property
    def profit(self) -> float:
        return self.revenue - self.cost

    @property
    def customers(self) -> int:
        return len(self.customer_ids)

    def add(self, row: dict[str, Any]) -> None:
        self.revenue += row["total"] or 0.0
        self.cost += row["cost"] or 0.0
        self.orders += 1
        self.customer_ids.add(row["customer_id"])


def calculate_growth(current: float, previous: float) -> float:
    """Percent change from ``previous`` to ``current``.

    A zero baseline reports exactly 100 rather than dividing by zero. A
    negative baseline is divided as-is, so the sign of the result flips.
    """
    if previous == 0:
        return ZERO_BASELINE_GROWTH
    return (current - previous) / previous * 100


def _day_key(created_at: datetime.datetime) -> str:
    if created_at.tzinfo is not None:
        created_at = created_at.astimezone(datetime.timezone.utc)
    return created_at.strftime("%Y-%m-%d")


def summarize(rows: Iterable[dict[str, Any]]) -> PeriodSummary:
    summary = PeriodSummary()
    for row in rows:
        summary.add(row)
    return summary


def build_daily_series(rows: Iterable[dict[str, Any]]) -> List[DailyStats]:
    """Groups order rows by UTC day. Days without orders get no entry."""
    by_day: dict[str, PeriodSummary] = defaultdict(PeriodSummary)
    for row in rows:
        by_day[_day_key(row["created_at"])].add(row)

    return [
        DailyStats(
            date=day,
            revenue=summary.revenue,
            profit=summary.profit,
            orders=summary.orders,
            customers=summary.customers,
        )
        for day, summary in sorted(by_day.items())
    ]


def rank_top_products(rows: Iterable[dict[str, Any]], limit: int = TOP_PRODUCTS_LIMIT) -> List[TopProduct]:
    product_sales: dict[int, dict[str, Any]] = {}
    for row in rows:
        entry = product_sales.setdefault(
            row["product_id"], {"title": row["product__title"], "quantity": 0, "revenue": 0.0}
        )
        entry["quantity"] += row["quantity"]
        entry["revenue"] += row["price"] * row["quantity"]

    ranked = sorted(product_sales.values(), key=lambda p: p["revenue"], reverse=True)
    return [
        TopProduct(title=p["title"], total_sales=p["quantity"], revenue=p["revenue"])
        for p in ranked[:limit]
    ]


async def _fetch_completed_orders(
    reseller_id: int,
    start: datetime.datetime,
    end: datetime.datetime,
    conn: BaseDBAsyncClient,
    include_end: bool = True,
) -> List[dict[str, Any]]:
    query = Order.filter(
        reseller_id=reseller_id, status=OrderStatus.COMPLETED, created_at__gte=start
    )
    if include_end:
        query = query.filter(created_at__lte=end)
    else:
        query = query.filter(created_at__lt=end)
    return await query.using_db(conn).values("total", "cost", "customer_id", "created_at")


async def _fetch_completed_line_items(
    reseller_id: int,
    start: datetime.datetime,
    end: datetime.datetime,
    conn: BaseDBAsyncClient,
) -> List[dict[str, Any]]:
    return await (
        OrderItem.filter(
            order__reseller_id=reseller_id,
            order__status=OrderStatus.COMPLETED,
            order__created_at__gte=start,
            order__created_at__lte=end,
        )
        .using_db(conn)
        .values("product_id", "product__title", "quantity", "price")
    )


async def generate_analytics_report(
    reseller_id: int,
    conn: BaseDBAsyncClient,
    now: Optional[datetime.datetime] = None,
    window_days: int = ANALYTICS_WINDOW_DAYS,
    top_limit: int = TOP_PRODUCTS_LIMIT,
) -> AnalyticsResponse:
    """
    Generates the analytics report for one reseller.

    The current window is ``[now - window_days, now]`` and the previous window
    has the same length and ends exactly where the current one starts. The
    three reads (current orders, previous orders, current line items) are
    independent and run concurrently; any one failing fails the report.

    Args:
        reseller_id: Id of the authenticated reseller.
        conn: Connection from the application's pool.
        now: End of the current window, defaults to the current UTC time.
        window_days: Length of each window in days.
        top_limit: Maximum number of products in ``top_products``.

    Returns:
        AnalyticsResponse with the overview, daily chart data and top products.

    Raises:
        StoreNotFoundError: The reseller has no store.
    """
    await get_store_for_reseller(reseller_id, conn)

    end = now or datetime.datetime.now(datetime.timezone.utc)
    start = end - datetime.timedelta(days=window_days)
    previous_start = start - datetime.timedelta(days=window_days)

    current_rows, previous_rows, item_rows = await asyncio.gather(
        _fetch_completed_orders(reseller_id, start, end, conn),
        _fetch_completed_orders(reseller_id, previous_start, start, conn, include_end=False),
        _fetch_completed_line_items(reseller_id, start, end, conn),
    )
    logger.debug(
        f"Reseller {reseller_id}: {len(current_rows)} current orders, "
        f"{len(previous_rows)} previous orders, {len(item_rows)} line items"
    )

    current = summarize(current_rows)
    previous = summarize(previous_rows)

    overview = AnalyticsOverview(
        current_month=PeriodTotals(
            revenue=current.revenue,
            profit=current.profit,
            orders=current.orders,
            customers=current.customers,
        ),
        growth=GrowthRates(
            revenue=calculate_growth(current.revenue, previous.revenue),
            profit=calculate_growth(current.profit, previous.profit),
            orders=calculate_growth(current.orders, previous.orders),
            customers=calculate_growth(current.customers, previous.customers),
        ),
    )

    return AnalyticsResponse(
        overview=overview,
        chart_data=build_daily_series(current_rows),
        top_products=rank_top_products(item_rows, limit=top_limit),
    )
