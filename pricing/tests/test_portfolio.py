from decimal import Decimal

import pytest
from pricing import (
    ChannelType,
    HealthCategory,
    ProductCostBasis,
    UnknownChannelType,
    aggregate,
    evaluate,
    fingerprint,
    sort_calculations,
)
from pricing.channels import AmazonFBAConfig, SiteProprioConfig, StandardChannelConfig


@pytest.fixture
def cost_basis():
    return ProductCostBasis(base_cost=Decimal("50"), tax_percent=Decimal("10"))


@pytest.fixture
def site():
    return SiteProprioConfig(
        sale_price=Decimal("150"),
        shipping_cost=Decimal("10"),
        fixed_cost_percent=Decimal("5"),
        packaging_cost_value=Decimal("5"),
    )


@pytest.fixture
def fba():
    return AmazonFBAConfig(
        sale_price=Decimal("80"),
        commission_percent=Decimal("15"),
        shipping_cost=Decimal("8"),
        product_cost_fba=Decimal("20"),
    )


def _shopee(price, enabled=True):
    return StandardChannelConfig(channel_type="SHOPEE", sale_price=Decimal(price), enabled=enabled)


def _ml(price):
    return StandardChannelConfig(channel_type="ML_ME1", sale_price=Decimal(price))


def test_portfolio_scenario(cost_basis, site, fba):
    """Testa cenário de referência com site próprio e Amazon FBA"""
    calculations, summary = aggregate(cost_basis, [site, fba])

    assert [c.channel_type for c in calculations] == [ChannelType.SITE_PROPRIO, ChannelType.AMAZON_FBA]
    assert summary.enabled_channel_count == 2
    assert summary.profitable_channel_count == 1
    assert summary.best_channel.channel_type == ChannelType.SITE_PROPRIO
    assert summary.worst_channel.channel_type == ChannelType.AMAZON_FBA
    assert summary.total_potential_profit == Decimal("72.50")
    assert summary.average_margin_percent == Decimal("14.79")
    assert summary.health == HealthCategory.GOOD


def test_average_matches_independent_evaluations(cost_basis, site, fba):
    """Testa se a média bate com avaliações individuais"""
    configs = [site, fba, _shopee("70"), _ml("61.37")]

    _, summary = aggregate(cost_basis, configs)

    margins = [evaluate(cost_basis, c).profit_margin_percent for c in configs]
    expected = (sum(margins) / len(margins)).quantize(Decimal("0.01"))
    assert summary.average_margin_percent == expected


def test_empty_portfolio_has_no_data(cost_basis):
    """Testa portfólio sem canais"""
    calculations, summary = aggregate(cost_basis, [])

    assert calculations == []
    assert summary.health == HealthCategory.NO_DATA
    assert summary.best_channel is None
    assert summary.worst_channel is None
    assert summary.profitable_channel_count == 0
    assert summary.average_margin_percent == 0
    assert summary.total_potential_profit == 0


def test_only_disabled_channels_has_no_data(cost_basis):
    """Testa portfólio apenas com canais desativados"""
    calculations, summary = aggregate(cost_basis, [_shopee("100", enabled=False)])

    assert calculations == []
    assert summary.health == HealthCategory.NO_DATA
    assert summary.best_channel is None


def test_disabled_channels_are_excluded(cost_basis, site):
    """Testa se canais desativados não entram nas estatísticas"""
    calculations, summary = aggregate(cost_basis, [_shopee("10", enabled=False), site])

    assert len(calculations) == 1
    assert summary.worst_channel.channel_type == ChannelType.SITE_PROPRIO
    assert summary.average_margin_percent == Decimal("48.33")


def test_best_channel_tie_keeps_first(cost_basis):
    """Testa desempate: vence o primeiro da lista"""
    first = _shopee("100")
    second = _ml("100")

    _, summary = aggregate(cost_basis, [_shopee("60"), first, second])

    assert summary.best_channel.channel_type == ChannelType.SHOPEE
    assert summary.best_channel.sale_price == Decimal("100.00")

    _, summary = aggregate(cost_basis, [second, first])
    assert summary.best_channel.channel_type == ChannelType.ML_ME1


def test_worst_channel_tie_keeps_first(cost_basis):
    """Testa desempate do pior canal"""
    _, summary = aggregate(cost_basis, [_ml("40"), _shopee("40"), _shopee("90")])

    assert summary.worst_channel.channel_type == ChannelType.ML_ME1


def test_all_loss_portfolio(cost_basis):
    """Testa portfólio só com prejuízo"""
    _, summary = aggregate(cost_basis, [_shopee("30"), _ml("50")])

    assert summary.profitable_channel_count == 0
    assert summary.total_potential_profit == Decimal("0.00")
    assert summary.health == HealthCategory.LOSS
    assert summary.best_channel.channel_type == ChannelType.ML_ME1
    assert "2 canais com prejuízo." in summary.notes


def test_losses_do_not_reduce_potential_profit(cost_basis):
    """Testa se prejuízos não subtraem do lucro potencial"""
    _, summary = aggregate(cost_basis, [_shopee("75"), _ml("20")])

    assert summary.total_potential_profit == Decimal("20.00")


def test_aggregate_accepts_raw_dicts(cost_basis):
    """Testa se registros do cadastro podem ser usados diretamente"""
    calculations, summary = aggregate(
        cost_basis,
        [{"channel_type": "amazon_fbm", "sale_price": "100", "commission_percent": "15"}],
    )

    assert calculations[0].net_profit == Decimal("30.00")
    assert summary.health == HealthCategory.EXCELLENT


def test_unknown_channel_aborts_aggregation(cost_basis, site):
    """Testa se canal desconhecido aborta o cálculo inteiro"""
    with pytest.raises(UnknownChannelType):
        aggregate(cost_basis, [site, {"channel_type": "TIKTOKSHOP", "sale_price": 10}])


def test_sort_calculations(cost_basis, site, fba):
    """Testa ordenação por margem, lucro e ROI"""
    calculations, _ = aggregate(cost_basis, [fba, _shopee("100"), site])

    by_profit = sort_calculations(calculations, "profit")
    assert [c.channel_type for c in by_profit] == [
        ChannelType.SITE_PROPRIO, ChannelType.SHOPEE, ChannelType.AMAZON_FBA
    ]
    assert sort_calculations(calculations, "margin")[-1].channel_type == ChannelType.AMAZON_FBA
    assert sort_calculations(calculations, "roi")[0].channel_type == ChannelType.SITE_PROPRIO


def test_sort_calculations_is_stable(cost_basis):
    """Testa se empates mantêm a ordem de entrada"""
    calculations, _ = aggregate(cost_basis, [_ml("100"), _shopee("100")])

    ordered = sort_calculations(calculations, "profit")

    assert [c.channel_type for c in ordered] == [ChannelType.ML_ME1, ChannelType.SHOPEE]


def test_sort_calculations_rejects_unknown_key():
    with pytest.raises(ValueError):
        sort_calculations([], "nome")


def test_fingerprint_changes_with_content(cost_basis, site, fba):
    """Testa se o fingerprint identifica o conteúdo das entradas"""
    assert fingerprint(cost_basis, [site, fba]) == fingerprint(cost_basis, [site, fba])
    assert fingerprint(cost_basis, [site, fba]) != fingerprint(cost_basis, [fba, site])
    assert fingerprint(cost_basis, [site]) != fingerprint(ProductCostBasis(base_cost=Decimal("51")), [site])


def test_fingerprint_ignores_decimal_exponent(cost_basis):
    """Testa se 150 e 150.00 geram o mesmo fingerprint"""
    a = _shopee("150")
    b = _shopee("150.00")

    assert evaluate(cost_basis, a) == evaluate(cost_basis, b)
    assert fingerprint(cost_basis, [a]) == fingerprint(cost_basis, [b])
    assert fingerprint(ProductCostBasis(base_cost=Decimal("50.0"), tax_percent=Decimal("10")), [a]) == \
        fingerprint(cost_basis, [a])
