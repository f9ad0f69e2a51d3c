from decimal import Decimal
from typing import Iterable, List

from pricing.channels import BaseChannelConfig
from pricing.interface import ProductCostBasis
from pricing.registry import FeeKind, FeeModelRegistry

HUNDRED = Decimal("100")
MAX_AMOUNT = Decimal("1e12")  # até 12 dígitos inteiros


class PricingValidationError(ValueError):
    """Entradas fora das faixas permitidas"""

    def __init__(self, errors: List[str]):
        self.errors = errors
        super().__init__("; ".join(errors))


def validate_inputs(cost_basis: ProductCostBasis, channel_configs: Iterable[BaseChannelConfig]) -> List[str]:
    """
    Valida faixas numéricas antes de chamar o motor.

    O motor não valida nem corrige valores; essa checagem é
    responsabilidade de quem o chama.

    Returns:
        Lista de mensagens de erro (vazia quando tudo é válido)
    """
    errors = []

    if cost_basis.base_cost < 0:
        errors.append("base_cost não pode ser negativo")
    elif cost_basis.base_cost >= MAX_AMOUNT:
        errors.append("base_cost excede o limite de 12 dígitos")

    if not (0 <= cost_basis.tax_percent <= HUNDRED):
        errors.append("tax_percent deve estar entre 0 e 100")

    for position, config in enumerate(channel_configs):
        label = f"{config.channel_type}[{position}]"

        if config.sale_price < 0:
            errors.append(f"{label}: sale_price não pode ser negativo")
        elif config.sale_price >= MAX_AMOUNT:
            errors.append(f"{label}: sale_price excede o limite de 12 dígitos")

        for field in FeeModelRegistry.fields_for(config.channel_type):
            if field.kind == FeeKind.OPAQUE_PASSTHROUGH:
                continue

            value = getattr(config, field.name)
            if field.kind in (FeeKind.PERCENT_OF_PRICE, FeeKind.PERCENT_OF_COST):
                if not (0 <= value <= HUNDRED):
                    errors.append(f"{label}: {field.name} deve estar entre 0 e 100")
            elif value < 0:
                errors.append(f"{label}: {field.name} não pode ser negativo")
            elif value >= MAX_AMOUNT:
                errors.append(f"{label}: {field.name} excede o limite de 12 dígitos")

    return errors


def ensure_valid(cost_basis: ProductCostBasis, channel_configs: Iterable[BaseChannelConfig]) -> None:
    """
    Raises:
        PricingValidationError: Se houver qualquer valor fora de faixa
    """
    errors = validate_inputs(cost_basis, channel_configs)
    if errors:
        raise PricingValidationError(errors)
