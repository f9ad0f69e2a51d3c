from decimal import Decimal

import pytest
from pricing import PricingValidationError, ProductCostBasis, ensure_valid, validate_inputs
from pricing.channels import AmazonFBAOnSiteConfig, SiteProprioConfig, StandardChannelConfig


def test_valid_inputs_have_no_errors():
    basis = ProductCostBasis(base_cost=Decimal("50"), tax_percent=Decimal("10"))
    configs = [SiteProprioConfig(sale_price=Decimal("150"), marketing_cost_percent=Decimal("100"))]

    assert validate_inputs(basis, configs) == []
    ensure_valid(basis, configs)


def test_negative_cost_and_tax_out_of_range():
    errors = validate_inputs(ProductCostBasis(base_cost=Decimal("-1"), tax_percent=Decimal("101")), [])

    assert "base_cost não pode ser negativo" in errors
    assert "tax_percent deve estar entre 0 e 100" in errors


def test_channel_errors_point_to_field():
    """Testa mensagens por canal e campo"""
    configs = [
        StandardChannelConfig(channel_type="SHOPEE", sale_price=Decimal("-10")),
        AmazonFBAOnSiteConfig(sale_price=Decimal("10"), tacos_cost_percent=Decimal("120"), rebate_value=Decimal("-1")),
    ]

    errors = validate_inputs(ProductCostBasis(), configs)

    assert "SHOPEE[0]: sale_price não pode ser negativo" in errors
    assert "AMAZON_FBA_ONSITE[1]: tacos_cost_percent deve estar entre 0 e 100" in errors
    assert "AMAZON_FBA_ONSITE[1]: rebate_value não pode ser negativo" in errors
    assert len(errors) == 3


def test_ensure_valid_raises_with_all_errors():
    configs = [StandardChannelConfig(channel_type="ML_FLEX", commission_percent=Decimal("-5"))]

    with pytest.raises(PricingValidationError) as exc_info:
        ensure_valid(ProductCostBasis(base_cost=Decimal("-1")), configs)

    assert len(exc_info.value.errors) == 2
    assert isinstance(exc_info.value, ValueError)


def test_amounts_above_twelve_digits_are_rejected():
    """Testa limite de magnitude para preço, custo e valores absolutos"""
    configs = [
        StandardChannelConfig(channel_type="SHOPEE", sale_price=Decimal("1E30")),
        SiteProprioConfig(sale_price=Decimal("999999999999.99"), packaging_cost_value=Decimal("1E12")),
    ]

    errors = validate_inputs(ProductCostBasis(base_cost=Decimal("1E13")), configs)

    assert "base_cost excede o limite de 12 dígitos" in errors
    assert "SHOPEE[0]: sale_price excede o limite de 12 dígitos" in errors
    assert "SITE_PROPRIO[1]: packaging_cost_value excede o limite de 12 dígitos" in errors
    assert len(errors) == 3
