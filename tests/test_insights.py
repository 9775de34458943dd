"""Tests for purchase insights."""

import pytest
from datetime import date, datetime
from decimal import Decimal

from stockledger.domain.entities import QualityCategory, StockItem
from stockledger.domain.insights import TimeWindow, build_insights, window_range
from stockledger.domain.money import Money

from builders import make_payment, make_stock

# A Wednesday
TODAY = date(2024, 3, 13)


def _when(day, month=3):
    return datetime(2024, month, day, 11, 0)


@pytest.fixture
def deliveries():
    return [
        make_stock(1, 10, 5, _when(13), category=QualityCategory.TYPE_1),
        make_stock(2, 4, 20, _when(12), category=QualityCategory.TYPE_2),
        make_stock(3, 2, 5, _when(11), category=QualityCategory.TYPE_1),
        make_stock(4, 1, 100, _when(4), category=QualityCategory.TYPE_3),
        make_stock(5, 3, 10, _when(28, month=2), category=QualityCategory.TYPE_2),
        make_payment(6, 500, _when(13)),
    ]


class TestWindowRange:
    """Tests for window boundaries."""

    def test_today(self):
        assert window_range(TimeWindow.TODAY, today=TODAY) == (TODAY, TODAY)

    def test_week_starts_monday(self):
        assert window_range(TimeWindow.WEEK, today=TODAY) == (date(2024, 3, 11), TODAY)

    def test_month_starts_on_first(self):
        assert window_range(TimeWindow.MONTH, today=TODAY) == (date(2024, 3, 1), TODAY)

    def test_all_is_unbounded(self):
        assert window_range(TimeWindow.ALL, today=TODAY) == (None, None)


class TestBuildInsights:
    """Tests for aggregation."""

    def test_all_time_per_category(self, deliveries):
        report = build_insights(deliveries, window=TimeWindow.ALL, today=TODAY)

        by_category = {item.quality_category: item for item in report.per_category}
        assert [item.quality_category for item in report.per_category] == [
            QualityCategory.TYPE_1,
            QualityCategory.TYPE_2,
            QualityCategory.TYPE_3,
        ]
        assert by_category[QualityCategory.TYPE_1].count == 2
        assert by_category[QualityCategory.TYPE_1].total_quantity == Decimal("12")
        assert by_category[QualityCategory.TYPE_1].total_amount == Money("60")
        assert by_category[QualityCategory.TYPE_2].total_amount == Money("110")

    def test_payments_are_ignored(self, deliveries):
        report = build_insights(deliveries, today=TODAY)
        assert report.summary.total_purchases == 5
        assert report.summary.total_amount == Money("270")
        assert report.summary.total_quantity == Decimal("20")

    def test_week_window(self, deliveries):
        report = build_insights(deliveries, window=TimeWindow.WEEK, today=TODAY)
        assert report.start_date == date(2024, 3, 11)
        assert report.end_date == TODAY
        assert report.summary.total_purchases == 3
        assert report.summary.total_amount == Money("140")

    def test_today_window(self, deliveries):
        report = build_insights(deliveries, window=TimeWindow.TODAY, today=TODAY)
        assert report.summary.total_purchases == 1
        assert report.per_category[0].quality_category is QualityCategory.TYPE_1

    def test_month_window(self, deliveries):
        report = build_insights(deliveries, window=TimeWindow.MONTH, today=TODAY)
        assert report.summary.total_purchases == 4
        assert report.summary.total_amount == Money("240")

    def test_category_filter(self, deliveries):
        report = build_insights(
            deliveries,
            quality_categories=[QualityCategory.TYPE_3, QualityCategory.TYPE_2],
            today=TODAY,
        )
        assert report.quality_categories == (QualityCategory.TYPE_2, QualityCategory.TYPE_3)
        assert [item.quality_category for item in report.per_category] == [
            QualityCategory.TYPE_2,
            QualityCategory.TYPE_3,
        ]
        assert report.summary.total_amount == Money("210")

    def test_daily_rows(self, deliveries):
        report = build_insights(deliveries, window=TimeWindow.WEEK, today=TODAY)
        assert [(row.day, row.quality_category) for row in report.daily] == [
            (date(2024, 3, 11), QualityCategory.TYPE_1),
            (date(2024, 3, 12), QualityCategory.TYPE_2),
            (date(2024, 3, 13), QualityCategory.TYPE_1),
        ]
        assert report.daily[-1].total_amount == Money("50")

    def test_empty(self):
        report = build_insights([], window=TimeWindow.TODAY, today=TODAY)
        assert report.per_category == ()
        assert report.summary.total_purchases == 0
        assert report.summary.total_amount == Money.zero()


class TestInsightsService:
    """Tests for insights over stored deliveries."""

    def test_get_insights_reads_stored_stock(self, temp_db, sample_customer, transaction_service):
        from stockledger.domain.insights import InsightsService

        transaction_service.record_stock(
            sample_customer.id,
            [
                StockItem(QualityCategory.TYPE_1, Decimal("10"), Decimal("5")),
                StockItem(QualityCategory.TYPE_2, Decimal("2"), Decimal("25")),
            ],
            occurred_at=_when(12),
        )
        transaction_service.record_stock(
            sample_customer.id,
            [StockItem(QualityCategory.TYPE_1, Decimal("1"), Decimal("7"))],
            occurred_at=_when(1, month=1),
        )

        service = InsightsService(temp_db)
        week = service.get_insights(window=TimeWindow.WEEK, today=TODAY)
        assert week.summary.total_purchases == 2
        assert week.summary.total_amount == Money("100")

        everything = service.get_insights(
            quality_categories=[QualityCategory.TYPE_1], customer_id=sample_customer.id
        )
        assert everything.summary.total_purchases == 2
        assert everything.summary.total_amount == Money("57")
