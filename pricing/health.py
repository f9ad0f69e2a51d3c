from decimal import Decimal
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, model_validator

from config import settings
from pricing.interface import HealthCategory


class HealthThresholds(BaseModel):
    """Limites (em %) das faixas de saúde; limite inferior inclusivo"""
    model_config = ConfigDict(frozen=True)

    excellent_min: Decimal = settings.health_excellent_min_margin
    good_min: Decimal = settings.health_good_min_margin

    @model_validator(mode="after")
    def _check_order(self) -> "HealthThresholds":
        if not (self.excellent_min > self.good_min > 0):
            raise ValueError("Limites devem respeitar: excellent_min > good_min > 0")
        return self

    def table(self) -> List[Tuple[Decimal, bool, HealthCategory]]:
        """
        Tabela ordenada (limite, inclusivo, categoria). A primeira linha
        satisfeita decide; abaixo de todas é prejuízo.
        """
        return [
            (self.excellent_min, True, HealthCategory.EXCELLENT),
            (self.good_min, True, HealthCategory.GOOD),
            (Decimal("0"), False, HealthCategory.FAIR),
            (Decimal("0"), True, HealthCategory.POOR),
        ]


DEFAULT_THRESHOLDS = HealthThresholds()


def classify(margin: Optional[Decimal], thresholds: Optional[HealthThresholds] = None) -> HealthCategory:
    """
    Classifica uma margem (%) em uma categoria de saúde.

    Serve tanto para a margem média do portfólio quanto para a margem de
    um único canal. ``None`` significa ausência de dados.
    """
    if margin is None:
        return HealthCategory.NO_DATA

    thresholds = thresholds or DEFAULT_THRESHOLDS
    value = Decimal(margin)

    for bound, inclusive, category in thresholds.table():
        if value > bound or (inclusive and value == bound):
            return category

    return HealthCategory.LOSS
