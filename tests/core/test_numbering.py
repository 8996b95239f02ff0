"""
Tests for core.documents.numbering — invoice and job order number formats.
"""

import pytest
from datetime import date, datetime

from hypothesis import given
from hypothesis import strategies as st

from core.documents.numbering import (
    InvoiceNumberParts,
    JobOrderNumberParts,
    format_invoice_number,
    format_job_order_number,
    parse_invoice_number,
    parse_job_order_number,
    to_roman_month,
)


class TestInvoiceNumber:
    def test_format(self):
        assert format_invoice_number(2025, 1) == "INV-2025-0001"
        assert format_invoice_number(2025, 9999) == "INV-2025-9999"

    @pytest.mark.parametrize("year,sequence", [(2025, 0), (2025, 10000), (999, 1), (2025, True)])
    def test_out_of_range(self, year, sequence):
        with pytest.raises(ValueError):
            format_invoice_number(year, sequence)

    def test_parse(self):
        assert parse_invoice_number("INV-2024-0042") == InvoiceNumberParts(2024, 42)

    @pytest.mark.parametrize(
        "text", ["INV-2024-42", "INV-24-0042", "inv-2024-0042", "INV-2024-0000", "", None]
    )
    def test_parse_malformed(self, text):
        assert parse_invoice_number(text) is None

    @given(st.integers(1000, 9999), st.integers(1, 9999))
    def test_parse_inverts_format(self, year, sequence):
        assert parse_invoice_number(format_invoice_number(year, sequence)) == (year, sequence)


class TestJobOrderNumber:
    @pytest.mark.parametrize(
        "month,numeral", [(1, "I"), (4, "IV"), (9, "IX"), (12, "XII")]
    )
    def test_roman_month(self, month, numeral):
        assert to_roman_month(month) == numeral

    def test_roman_month_out_of_range(self):
        with pytest.raises(ValueError):
            to_roman_month(13)

    def test_format(self):
        assert format_job_order_number(1, date(2025, 12, 3)) == "JO-0001/CARGO/XII/2025"

    def test_format_accepts_datetime(self):
        assert format_job_order_number(57, datetime(2025, 3, 1, 8)) == "JO-0057/CARGO/III/2025"

    def test_sequence_beyond_padding(self):
        assert format_job_order_number(12345, date(2025, 1, 1)) == "JO-12345/CARGO/I/2025"

    def test_parse(self):
        assert parse_job_order_number("JO-0057/CARGO/III/2025") == JobOrderNumberParts(57, 3, 2025)

    def test_parse_malformed(self):
        assert parse_job_order_number("JO-0057/CARGO/XIII/2025") is None
        assert parse_job_order_number("JO-0057/FREIGHT/III/2025") is None
