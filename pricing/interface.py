from decimal import Decimal
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict


class ChannelType(str, Enum):
    """Tipos de canal de venda suportados pelo motor de precificação"""
    SITE_PROPRIO = "SITE_PROPRIO"
    AMAZON_FBM = "AMAZON_FBM"
    AMAZON_FBA = "AMAZON_FBA"
    AMAZON_FBA_ONSITE = "AMAZON_FBA_ONSITE"
    AMAZON_DBA = "AMAZON_DBA"
    ML_ME1 = "ML_ME1"
    ML_FLEX = "ML_FLEX"
    ML_ENVIOS = "ML_ENVIOS"
    ML_FULL = "ML_FULL"
    SHOPEE = "SHOPEE"
    MARKETPLACE_OTHER = "MARKETPLACE_OTHER"


CHANNEL_DISPLAY_NAMES: Dict[ChannelType, str] = {
    ChannelType.SITE_PROPRIO: "Site Próprio",
    ChannelType.AMAZON_FBM: "Amazon FBM",
    ChannelType.AMAZON_FBA_ONSITE: "Amazon FBA On Site",
    ChannelType.AMAZON_DBA: "Amazon DBA",
    ChannelType.AMAZON_FBA: "Amazon FBA",
    ChannelType.ML_ME1: "Mercado Livre ME1",
    ChannelType.ML_FLEX: "Mercado Livre Flex",
    ChannelType.ML_ENVIOS: "Mercado Livre Envios",
    ChannelType.ML_FULL: "Mercado Livre FULL",
    ChannelType.SHOPEE: "Shopee",
    ChannelType.MARKETPLACE_OTHER: "Outro Marketplace",
}


class HealthCategory(str, Enum):
    """Classificação de saúde de uma margem"""
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    LOSS = "loss"
    NO_DATA = "no_data"


class ProductCostBasis(BaseModel):
    """Lado de custo do produto (comum a todos os canais)"""
    model_config = ConfigDict(frozen=True)

    base_cost: Decimal = Decimal("0")    # custo unitário de aquisição/produção
    tax_percent: Decimal = Decimal("0")  # imposto sobre o custo, 0 a 100


class CostBreakdown(BaseModel):
    """Componentes de custo de um canal, já arredondados"""
    model_config = ConfigDict(frozen=True)

    product_cost: Decimal
    tax_cost: Decimal
    unit_cost_additions: Decimal  # ex: custo FBA / custo ML Full
    percent_costs: Decimal        # taxas percentuais sobre o preço
    absolute_costs: Decimal       # frete, embalagem, rebate, outros


class PricingCalculation(BaseModel):
    """Resultado da avaliação de um canal"""
    model_config = ConfigDict(frozen=True)

    channel_type: ChannelType
    display_name: str
    sale_price: Decimal
    total_costs: Decimal
    net_profit: Decimal
    profit_margin_percent: Decimal
    roi_percent: Decimal
    is_profitable: bool
    health: HealthCategory
    breakdown: CostBreakdown


class PortfolioSummary(BaseModel):
    """Estatísticas agregadas dos canais ativos de um produto"""
    model_config = ConfigDict(frozen=True)

    enabled_channel_count: int
    profitable_channel_count: int
    average_margin_percent: Decimal
    average_roi_percent: Decimal
    best_channel: Optional[PricingCalculation] = None
    worst_channel: Optional[PricingCalculation] = None
    total_potential_profit: Decimal
    health: HealthCategory
    notes: List[str] = []
