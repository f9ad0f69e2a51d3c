from decimal import Decimal

from pricing import ProductCostBasis, aggregate, format_brl, format_currency, format_percent, format_report
from pricing.channels import AmazonFBAConfig, SiteProprioConfig


def test_format_currency_has_explicit_sign():
    assert format_currency(Decimal("72.5")) == "+72.50"
    assert format_currency(Decimal("-15")) == "-15.00"
    assert format_currency(Decimal("0")) == "+0.00"


def test_format_currency_avoids_negative_zero():
    """Testa se -0.001 não vira '-0.00'"""
    assert format_currency(Decimal("-0.001")) == "+0.00"


def test_format_percent():
    assert format_percent(Decimal("48.3333")) == "+48.33%"
    assert format_percent(Decimal("-18.75")) == "-18.75%"


def test_format_brl():
    assert format_brl(Decimal("1234.5")) == "R$ 1.234,50"
    assert format_brl(Decimal("-15")) == "-R$ 15,00"
    assert format_brl(Decimal("0.2")) == "R$ 0,20"


def test_format_report_contract():
    """Testa o contrato consumido pela interface"""
    basis = ProductCostBasis(base_cost=Decimal("50"), tax_percent=Decimal("10"))
    site = SiteProprioConfig(
        sale_price=Decimal("150"),
        shipping_cost=Decimal("10"),
        fixed_cost_percent=Decimal("5"),
        packaging_cost_value=Decimal("5"),
    )
    fba = AmazonFBAConfig(
        sale_price=Decimal("80"),
        commission_percent=Decimal("15"),
        shipping_cost=Decimal("8"),
        product_cost_fba=Decimal("20"),
    )

    report = format_report(*aggregate(basis, [site, fba]))

    assert report.channels[0].net_profit == "+72.50"
    assert report.channels[0].net_profit_brl == "R$ 72,50"
    assert report.channels[0].profit_margin_percent == "+48.33%"
    assert report.channels[1].net_profit == "-15.00"
    assert report.channels[1].is_profitable is False
    assert report.summary.best_channel == "SITE_PROPRIO"
    assert report.summary.worst_channel == "AMAZON_FBA"
    assert report.summary.average_margin_percent == "+14.79%"
    assert report.summary.total_potential_profit == "+72.50"
    assert report.summary.health == "good"


def test_format_report_empty_portfolio():
    report = format_report(*aggregate(ProductCostBasis(), []))

    assert report.channels == []
    assert report.summary.best_channel is None
    assert report.summary.health == "no_data"
    assert report.summary.average_margin_percent == "+0.00%"
