"""Purchase insights: stock deliveries grouped by time window and quality."""

from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Iterable, Optional, Sequence

from stockledger.database.base import Database
from stockledger.domain.entities import QualityCategory, Transaction, TransactionKind
from stockledger.domain.money import Money
from stockledger.utils.date_parser import get_date_range


class TimeWindow(str, Enum):
    """Reporting window for insights."""

    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    ALL = "all"


@dataclass(frozen=True)
class CategoryInsight:
    """Totals for one quality category."""

    quality_category: QualityCategory
    count: int
    total_quantity: Decimal
    total_amount: Money


@dataclass(frozen=True)
class DailyInsight:
    """Totals for one quality category on one day."""

    day: date
    quality_category: QualityCategory
    total_quantity: Decimal
    total_amount: Money


@dataclass(frozen=True)
class InsightsSummary:
    """Grand totals across the selected deliveries."""

    total_purchases: int
    total_amount: Money
    total_quantity: Decimal


@dataclass(frozen=True)
class InsightsReport:
    """Insights for a time window and category filter."""

    window: TimeWindow
    start_date: Optional[date]
    end_date: Optional[date]
    quality_categories: tuple[QualityCategory, ...]
    per_category: tuple[CategoryInsight, ...]
    daily: tuple[DailyInsight, ...]
    summary: InsightsSummary


def window_range(window: TimeWindow, today: Optional[date] = None) -> tuple[Optional[date], Optional[date]]:
    """Return inclusive (start, end) dates for a window; ``ALL`` is unbounded."""
    if window is TimeWindow.ALL:
        return None, None
    return get_date_range(window.value, today=today)


def _category_order(category: QualityCategory) -> int:
    return list(QualityCategory).index(category)


def build_insights(
    transactions: Iterable[Transaction],
    window: TimeWindow = TimeWindow.ALL,
    quality_categories: Sequence[QualityCategory] = (),
    today: Optional[date] = None,
) -> InsightsReport:
    """Group stock records by quality category within a time window.

    Payment records are ignored. An empty ``quality_categories`` includes
    every category.

    Args:
        transactions: Transaction records (any kinds, any customers)
        window: Time window to report on
        quality_categories: Categories to include
        today: Reference date for the window, defaults to today

    Returns:
        InsightsReport with per-category, per-day and overall totals
    """
    start, end = window_range(window, today=today)
    selected = set(quality_categories)

    counts: dict[QualityCategory, int] = defaultdict(int)
    quantities: dict[QualityCategory, Decimal] = defaultdict(Decimal)
    amounts: dict[QualityCategory, Money] = defaultdict(Money.zero)
    daily_quantities: dict[tuple[date, QualityCategory], Decimal] = defaultdict(Decimal)
    daily_amounts: dict[tuple[date, QualityCategory], Money] = defaultdict(Money.zero)

    for txn in transactions:
        if txn.kind is not TransactionKind.STOCK:
            continue
        if selected and txn.quality_category not in selected:
            continue
        day = txn.occurred_at.date()
        if start is not None and day < start:
            continue
        if end is not None and day > end:
            continue

        category = txn.quality_category
        amount = txn.amount
        counts[category] += 1
        quantities[category] += txn.quantity
        amounts[category] = amounts[category] + amount
        daily_quantities[(day, category)] += txn.quantity
        daily_amounts[(day, category)] = daily_amounts[(day, category)] + amount

    per_category = tuple(
        CategoryInsight(
            quality_category=category,
            count=counts[category],
            total_quantity=quantities[category],
            total_amount=amounts[category],
        )
        for category in sorted(counts, key=_category_order)
    )
    daily = tuple(
        DailyInsight(
            day=day,
            quality_category=category,
            total_quantity=daily_quantities[(day, category)],
            total_amount=daily_amounts[(day, category)],
        )
        for day, category in sorted(
            daily_quantities, key=lambda key: (key[0], _category_order(key[1]))
        )
    )
    summary = InsightsSummary(
        total_purchases=sum(item.count for item in per_category),
        total_amount=Money.total(item.total_amount for item in per_category),
        total_quantity=sum((item.total_quantity for item in per_category), Decimal(0)),
    )

    return InsightsReport(
        window=window,
        start_date=start,
        end_date=end,
        quality_categories=tuple(sorted(selected, key=_category_order)),
        per_category=per_category,
        daily=daily,
        summary=summary,
    )


class InsightsService:
    """Service for building purchase insights from stored transactions."""

    def __init__(self, db: Database):
        """Initialize insights service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_insights(
        self,
        window: TimeWindow = TimeWindow.ALL,
        quality_categories: Sequence[QualityCategory] = (),
        customer_id: Optional[int] = None,
        today: Optional[date] = None,
    ) -> InsightsReport:
        """Build insights over stored stock deliveries.

        Args:
            window: Time window to report on
            quality_categories: Categories to include (empty for all)
            customer_id: Optional customer filter
            today: Reference date for the window

        Returns:
            InsightsReport
        """
        start, end = window_range(window, today=today)
        transactions = self.db.list_transactions(
            customer_id=customer_id,
            start_date=start,
            end_date=end,
            kind=TransactionKind.STOCK,
        )
        return build_insights(
            transactions,
            window=window,
            quality_categories=quality_categories,
            today=today,
        )
