import hashlib
import json
import logging
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from config import settings
from pricing.channels import BaseChannelConfig, parse_channel_config
from pricing.evaluator import ZERO, evaluate, quantize
from pricing.health import HealthThresholds, classify
from pricing.interface import HealthCategory, PortfolioSummary, PricingCalculation, ProductCostBasis

logger = logging.getLogger(__name__)

ChannelInput = Union[BaseChannelConfig, Dict[str, Any]]

_SORT_KEYS = {
    "margin": lambda calc: calc.profit_margin_percent,
    "profit": lambda calc: calc.net_profit,
    "roi": lambda calc: calc.roi_percent,
}


def _empty_summary() -> PortfolioSummary:
    return PortfolioSummary(
        enabled_channel_count=0,
        profitable_channel_count=0,
        average_margin_percent=ZERO,
        average_roi_percent=ZERO,
        best_channel=None,
        worst_channel=None,
        total_potential_profit=ZERO,
        health=HealthCategory.NO_DATA,
        notes=["Nenhum canal de venda ativo."],
    )


def _build_notes(calculations: Sequence[PricingCalculation]) -> List[str]:
    notes = []

    low_margin = [c for c in calculations if c.profit_margin_percent < settings.low_margin_alert_percent]
    if low_margin:
        notes.append(
            f"{len(low_margin)} canais com margem abaixo de {settings.low_margin_alert_percent}%."
        )

    losing = [c for c in calculations if not c.is_profitable]
    if losing:
        notes.append(f"{len(losing)} canais com prejuízo.")

    low_roi = [c for c in calculations if c.roi_percent < settings.low_roi_alert_percent]
    if low_roi:
        notes.append(f"{len(low_roi)} canais com ROI baixo (<{settings.low_roi_alert_percent}%).")

    return notes


def aggregate(
    cost_basis: ProductCostBasis,
    channel_configs: Iterable[ChannelInput],
    thresholds: Optional[HealthThresholds] = None,
) -> Tuple[List[PricingCalculation], PortfolioSummary]:
    """
    Avalia todos os canais ativos de um produto e resume o portfólio.

    Canais desativados são ignorados por completo. Melhor e pior canal
    são decididos pelo lucro líquido; em empate vence o que aparece
    primeiro na lista recebida.

    Args:
        cost_basis: Custo base e imposto do produto
        channel_configs: Configurações de canal (modelos ou dicts do cadastro)
        thresholds: Faixas de saúde (opcional)

    Returns:
        (lista de PricingCalculation na ordem de entrada, PortfolioSummary)

    Raises:
        UnknownChannelType: Se algum canal não for suportado
    """
    configs = [parse_channel_config(config) for config in channel_configs]
    calculations = [evaluate(cost_basis, config, thresholds) for config in configs if config.enabled]

    if not calculations:
        logger.info("Portfólio sem canais ativos")
        return [], _empty_summary()

    best = calculations[0]
    worst = calculations[0]
    for calc in calculations[1:]:
        if calc.net_profit > best.net_profit:
            best = calc
        if calc.net_profit < worst.net_profit:
            worst = calc

    count = Decimal(len(calculations))
    average_margin = quantize(sum((c.profit_margin_percent for c in calculations), ZERO) / count)
    average_roi = quantize(sum((c.roi_percent for c in calculations), ZERO) / count)
    total_potential = sum((max(ZERO, c.net_profit) for c in calculations), ZERO)

    summary = PortfolioSummary(
        enabled_channel_count=len(calculations),
        profitable_channel_count=sum(1 for c in calculations if c.is_profitable),
        average_margin_percent=average_margin,
        average_roi_percent=average_roi,
        best_channel=best,
        worst_channel=worst,
        total_potential_profit=quantize(total_potential),
        health=classify(average_margin, thresholds),
        notes=_build_notes(calculations),
    )

    logger.info(
        f"Portfólio avaliado: {summary.enabled_channel_count} canais ativos, "
        f"{summary.profitable_channel_count} lucrativos, margem média {average_margin}%"
    )

    return calculations, summary


def sort_calculations(calculations: Iterable[PricingCalculation], by: str = "margin") -> List[PricingCalculation]:
    """
    Ordena resultados do maior para o menor por margem, lucro ou ROI.
    Ordenação estável: empates mantêm a ordem original.
    """
    key = _SORT_KEYS.get(by)
    if key is None:
        raise ValueError(
            f"Critério de ordenação '{by}' inválido. "
            f"Critérios disponíveis: {', '.join(_SORT_KEYS)}"
        )
    return sorted(calculations, key=key, reverse=True)


def _canonical(data: Dict[str, Any]) -> Dict[str, Any]:
    # 150 e 150.00 devem gerar o mesmo hash
    return {
        key: format(value.normalize(), "f") if isinstance(value, Decimal) else value
        for key, value in data.items()
    }


def fingerprint(cost_basis: ProductCostBasis, channel_configs: Iterable[ChannelInput]) -> str:
    """Hash SHA-256 do conteúdo das entradas, para cache do lado do chamador"""
    payload = {
        "cost_basis": _canonical(cost_basis.model_dump()),
        "channels": [_canonical(parse_channel_config(c).model_dump()) for c in channel_configs],
    }
    canonical = json.dumps(payload, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
