"""Tests for investment calculators."""

import pytest
from decimal import Decimal

from dealdesk.domain.calculators import (
    analyze_rental,
    calculate_roi,
    cap_rate,
    cash_on_cash_return,
    estimate_arv,
    estimate_rehab,
    max_allowable_offer,
)
from dealdesk.domain.errors import ValidationError


class TestArv:
    """Tests for estimate_arv."""

    def test_average_of_comps(self):
        # 200000/1000 = 200, 330000/1500 = 220
        result = estimate_arv([(200000, 1000), (330000, 1500)], 1200)
        assert result.avg_price_per_sqft == Decimal("210.00")
        assert result.arv == Decimal("252000")

    def test_average_rounded_to_cents_before_scaling(self):
        # 100000/900 = 111.111... -> 111.11, times 1000 sqft
        result = estimate_arv([(100000, 900)], 1000)
        assert result.avg_price_per_sqft == Decimal("111.11")
        assert result.arv == Decimal("111110")

    def test_needs_comps(self):
        with pytest.raises(ValidationError, match="At least one comp"):
            estimate_arv([], 1000)

    @pytest.mark.parametrize("comp", [(0, 1000), (200000, 0), (-1, 10)])
    def test_invalid_comp(self, comp):
        with pytest.raises(ValidationError, match="Comp 2"):
            estimate_arv([(200000, 1000), comp], 1000)

    def test_subject_size_positive(self):
        with pytest.raises(ValidationError, match="Subject square footage"):
            estimate_arv([(200000, 1000)], 0)


class TestRoi:
    """Tests for calculate_roi."""

    def test_flip(self):
        result = calculate_roi(
            purchase_price=150000, rehab_cost=30000, sale_price=240000, holding_costs=5000
        )
        assert result.total_investment == Decimal("185000")
        assert result.profit == Decimal("55000")
        # 55000 / 185000 = 29.7297...
        assert result.roi == Decimal("29.73")

    def test_loss(self):
        result = calculate_roi(100000, 0, 90000)
        assert result.profit == Decimal("-10000")
        assert result.roi == Decimal("-10.00")

    def test_nothing_invested(self):
        assert calculate_roi(0, 0, 1000).roi == Decimal("0")

    def test_sale_price_positive(self):
        with pytest.raises(ValidationError, match="Sale price"):
            calculate_roi(100000, 0, 0)

    def test_negative_cost(self):
        with pytest.raises(ValidationError, match="Rehab cost"):
            calculate_roi(100000, -1, 150000)


class TestRatios:
    """Tests for cash-on-cash return and cap rate."""

    def test_cash_on_cash(self):
        assert cash_on_cash_return(6000, 50000) == Decimal("12.00")
        assert cash_on_cash_return(-1000, 30000) == Decimal("-3.33")

    def test_cash_on_cash_needs_investment(self):
        with pytest.raises(ValidationError, match="Total cash invested"):
            cash_on_cash_return(6000, 0)

    def test_cap_rate(self):
        assert cap_rate(18000, 240000) == Decimal("7.50")

    def test_cap_rate_needs_value(self):
        with pytest.raises(ValidationError, match="Property value"):
            cap_rate(18000, -5)


class TestRehab:
    """Tests for estimate_rehab."""

    def test_groups_by_category(self):
        result = estimate_rehab(
            [("Roof", 12000), ("Kitchen", "18000.50"), ("Roof", 1500), ("Paint", 0)]
        )
        assert result.breakdown == {
            "Roof": Decimal("13500"),
            "Kitchen": Decimal("18000.50"),
            "Paint": Decimal("0"),
        }
        assert list(result.breakdown) == ["Roof", "Kitchen", "Paint"]
        assert result.total_cost == Decimal("31500.50")

    def test_needs_items(self):
        with pytest.raises(ValidationError, match="At least one rehab item"):
            estimate_rehab([])

    def test_blank_category(self):
        with pytest.raises(ValidationError, match="Item 1 needs a category"):
            estimate_rehab([("  ", 100)])

    def test_negative_cost(self):
        with pytest.raises(ValidationError, match="Item 2 cost"):
            estimate_rehab([("Roof", 100), ("Paint", -1)])


class TestMaxAllowableOffer:
    """Tests for max_allowable_offer."""

    def test_seventy_percent_rule(self):
        # 300000 * 0.70 - 40000 - 10000
        assert max_allowable_offer(300000, 40000, 10000) == Decimal("160000.00")

    def test_custom_discount(self):
        assert max_allowable_offer(200000, 25000, discount_percent=75) == Decimal("125000.00")

    def test_rounds_to_cents(self):
        assert max_allowable_offer("123456.789", 0, discount_percent=70) == Decimal("86419.75")

    def test_unworkable_deal_goes_negative(self):
        assert max_allowable_offer(100000, 80000) == Decimal("-10000.00")

    def test_arv_positive(self):
        with pytest.raises(ValidationError, match="ARV"):
            max_allowable_offer(0, 0)

    @pytest.mark.parametrize("discount", [0, 101])
    def test_discount_range(self, discount):
        with pytest.raises(ValidationError, match="Discount"):
            max_allowable_offer(100000, 0, discount_percent=discount)


class TestRental:
    """Tests for analyze_rental."""

    def test_analysis(self):
        result = analyze_rental(
            purchase_price=200000,
            monthly_rent=2000,
            vacancy_percent=5,
            property_tax=250,
            insurance=100,
            maintenance=150,
            mortgage_payment=900,
        )
        # effective rent 1900, expenses 500 + 900
        assert result.monthly_cash_flow == Decimal("500.00")
        assert result.annual_cash_flow == Decimal("6000.00")
        assert result.cash_on_cash == Decimal("3.00")
        # NOI (1900 - 500) * 12 = 16800
        assert result.cap_rate == Decimal("8.40")

    def test_negative_cash_flow(self):
        result = analyze_rental(purchase_price=100000, monthly_rent=800, mortgage_payment=1000)
        assert result.monthly_cash_flow == Decimal("-200.00")
        assert result.cap_rate == Decimal("9.60")

    @pytest.mark.parametrize("vacancy", [-1, 101])
    def test_vacancy_range(self, vacancy):
        with pytest.raises(ValidationError, match="Vacancy"):
            analyze_rental(purchase_price=100000, monthly_rent=800, vacancy_percent=vacancy)

    def test_rent_positive(self):
        with pytest.raises(ValidationError, match="Monthly rent"):
            analyze_rental(purchase_price=100000, monthly_rent=0)

    def test_price_positive(self):
        with pytest.raises(ValidationError, match="Purchase price"):
            analyze_rental(purchase_price=0, monthly_rent=800)
