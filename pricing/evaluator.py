import logging
from decimal import Context, Decimal, ROUND_HALF_EVEN, localcontext
from typing import Optional

from pricing.channels import BaseChannelConfig
from pricing.health import HealthThresholds, classify
from pricing.interface import (
    CHANNEL_DISPLAY_NAMES,
    CostBreakdown,
    PricingCalculation,
    ProductCostBasis,
)
from pricing.registry import FeeKind, FeeModelRegistry

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")
TWO_PLACES = Decimal("0.01")

# Precisão folgada para valores altos; o contexto padrão (28 dígitos) não
# comporta quantize em 2 casas acima de ~1e26
_CONTEXT = Context(prec=60, rounding=ROUND_HALF_EVEN)


def quantize(value: Decimal) -> Decimal:
    """Arredonda para 2 casas (half-even). Usar só na saída."""
    with localcontext(_CONTEXT):
        return Decimal(value).quantize(TWO_PLACES, rounding=ROUND_HALF_EVEN)


def _field_value(config: BaseChannelConfig, name: str, default) -> Decimal:
    value = getattr(config, name, None)
    if value is None:
        value = default
    return Decimal(value)


def evaluate(
    cost_basis: ProductCostBasis,
    config: BaseChannelConfig,
    thresholds: Optional[HealthThresholds] = None,
) -> PricingCalculation:
    """
    Calcula lucro líquido e margem de um canal para o preço informado.

    Custos são compostos de forma aditiva: percentuais sobre o preço são
    somados antes de multiplicar pelo preço (nunca compostos entre si),
    valores absolutos são somados e o custo unitário recebe imposto e
    eventuais custos logísticos do canal (FBA, ML Full).

    Não valida faixas nem verifica ``enabled``: entradas devem chegar
    validadas pelo chamador.

    Args:
        cost_basis: Custo base e imposto do produto
        config: Configuração do canal
        thresholds: Faixas de saúde (opcional, padrão das settings)

    Returns:
        PricingCalculation com valores arredondados em 2 casas

    Raises:
        UnknownChannelType: Se o canal não estiver no registro de taxas
    """
    channel_type = FeeModelRegistry.resolve(config.channel_type)
    fields = FeeModelRegistry.fields_for(channel_type)

    with localcontext(_CONTEXT):
        sale_price = Decimal(config.sale_price)
        base_cost = Decimal(cost_basis.base_cost)

        tax_cost = base_cost * (Decimal(cost_basis.tax_percent) / HUNDRED)

        price_rate = ZERO
        cost_rate = ZERO
        unit_cost_additions = ZERO
        absolute_costs = ZERO

        for field in fields:
            if field.kind == FeeKind.OPAQUE_PASSTHROUGH:
                continue

            value = _field_value(config, field.name, field.default)

            if field.kind == FeeKind.PERCENT_OF_PRICE:
                price_rate += value
            elif field.kind == FeeKind.PERCENT_OF_COST:
                cost_rate += value
            elif field.unit_cost:
                unit_cost_additions += value
            else:
                absolute_costs += value

        effective_unit_cost = base_cost + tax_cost + unit_cost_additions
        percent_costs = sale_price * price_rate / HUNDRED + base_cost * cost_rate / HUNDRED

        total_costs = effective_unit_cost + percent_costs + absolute_costs
        net_profit = sale_price - total_costs

        margin_percent = ZERO if sale_price == 0 else net_profit / sale_price * HUNDRED
        roi_percent = ZERO if total_costs == 0 else net_profit / total_costs * HUNDRED

        rounded_profit = quantize(net_profit)
        rounded_margin = quantize(margin_percent)

        logger.debug(
            f"Canal {channel_type.value}: preço={sale_price} custos={total_costs} "
            f"lucro={net_profit} margem={margin_percent}"
        )

        return PricingCalculation(
            channel_type=channel_type,
            display_name=CHANNEL_DISPLAY_NAMES[channel_type],
            sale_price=quantize(sale_price),
            total_costs=quantize(total_costs),
            net_profit=rounded_profit,
            profit_margin_percent=rounded_margin,
            roi_percent=quantize(roi_percent),
            is_profitable=rounded_profit > 0,
            health=classify(rounded_margin, thresholds),
            breakdown=CostBreakdown(
                product_cost=quantize(base_cost),
                tax_cost=quantize(tax_cost),
                unit_cost_additions=quantize(unit_cost_additions),
                percent_costs=quantize(percent_costs),
                absolute_costs=quantize(absolute_costs),
            ),
        )
