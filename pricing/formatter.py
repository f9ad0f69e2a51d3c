"""
Contrato de saída para UI e relatórios.

Único ponto que conhece formatação de exibição: valores monetários e
percentuais viram strings com 2 casas e sinal explícito.
"""
from decimal import Decimal
from typing import List, Optional, Sequence

from pydantic import BaseModel

from pricing.evaluator import quantize
from pricing.interface import PortfolioSummary, PricingCalculation


class FormattedCalculation(BaseModel):
    channel_type: str
    display_name: str
    sale_price: str
    total_costs: str
    net_profit: str
    net_profit_brl: str
    profit_margin_percent: str
    roi_percent: str
    is_profitable: bool
    health: str


class FormattedSummary(BaseModel):
    enabled_channel_count: int
    profitable_channel_count: int
    average_margin_percent: str
    average_roi_percent: str
    best_channel: Optional[str] = None
    worst_channel: Optional[str] = None
    total_potential_profit: str
    total_potential_profit_brl: str
    health: str
    notes: List[str]


class PortfolioReport(BaseModel):
    channels: List[FormattedCalculation]
    summary: FormattedSummary


def _signed(value: Decimal) -> str:
    rounded = quantize(value)
    if rounded == 0:
        rounded = abs(rounded)  # sem "-0.00"
    return f"{rounded:+.2f}"


def format_currency(value: Decimal) -> str:
    """72.5 -> '+72.50'"""
    return _signed(value)


def format_percent(value: Decimal) -> str:
    """-18.75 -> '-18.75%'"""
    return f"{_signed(value)}%"


def format_brl(value: Decimal) -> str:
    """1234.5 -> 'R$ 1.234,50'; negativos como '-R$ 15,00'"""
    rounded = quantize(value)
    text = f"{abs(rounded):,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    sign = "-" if rounded < 0 else ""
    return f"{sign}R$ {text}"


def format_calculation(calc: PricingCalculation) -> FormattedCalculation:
    return FormattedCalculation(
        channel_type=calc.channel_type.value,
        display_name=calc.display_name,
        sale_price=format_currency(calc.sale_price),
        total_costs=format_currency(calc.total_costs),
        net_profit=format_currency(calc.net_profit),
        net_profit_brl=format_brl(calc.net_profit),
        profit_margin_percent=format_percent(calc.profit_margin_percent),
        roi_percent=format_percent(calc.roi_percent),
        is_profitable=calc.is_profitable,
        health=calc.health.value,
    )


def format_report(calculations: Sequence[PricingCalculation], summary: PortfolioSummary) -> PortfolioReport:
    """Monta o contrato estável consumido pela interface e pelos relatórios"""
    return PortfolioReport(
        channels=[format_calculation(calc) for calc in calculations],
        summary=FormattedSummary(
            enabled_channel_count=summary.enabled_channel_count,
            profitable_channel_count=summary.profitable_channel_count,
            average_margin_percent=format_percent(summary.average_margin_percent),
            average_roi_percent=format_percent(summary.average_roi_percent),
            best_channel=summary.best_channel.channel_type.value if summary.best_channel else None,
            worst_channel=summary.worst_channel.channel_type.value if summary.worst_channel else None,
            total_potential_profit=format_currency(summary.total_potential_profit),
            total_potential_profit_brl=format_brl(summary.total_potential_profit),
            health=summary.health.value,
            notes=list(summary.notes),
        ),
    )
