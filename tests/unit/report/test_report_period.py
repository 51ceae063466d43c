from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from chaintax.report.models import ReportPeriod, ReportRequest


class TestReportPeriod:
    def test_full_year(self):
        period = ReportPeriod(year=2024)
        assert period.start == datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert period.end == datetime(2025, 1, 1, tzinfo=timezone.utc)
        assert period.label == "2024"

    def test_month(self):
        period = ReportPeriod(year=2024, month=3)
        assert period.start == datetime(2024, 3, 1, tzinfo=timezone.utc)
        assert period.end == datetime(2024, 4, 1, tzinfo=timezone.utc)
        assert period.label == "2024-03"

    def test_december_rolls_year(self):
        assert ReportPeriod(year=2025, month=12).end == datetime(2026, 1, 1, tzinfo=timezone.utc)

    def test_contains_is_half_open(self):
        period = ReportPeriod(year=2024, month=2)
        assert period.contains(datetime(2024, 2, 1, tzinfo=timezone.utc))
        assert period.contains(datetime(2024, 2, 29, 23, 59, tzinfo=timezone.utc))
        assert not period.contains(datetime(2024, 3, 1, tzinfo=timezone.utc))

    def test_invalid_month(self):
        with pytest.raises(ValidationError):
            ReportPeriod(year=2024, month=13)


class TestReportRequest:
    def test_key_normalized(self):
        request = ReportRequest(address="0xABCdef", period=ReportPeriod(year=2024), network="Mantle")
        assert request.key == ("0xabcdef", "2024", "mantle")

    def test_unknown_network_rejected(self):
        with pytest.raises(ValidationError):
            ReportRequest(address="0xabc", period=ReportPeriod(year=2024), network="dogechain")
