"""
Configurações de canal de venda.

Cada canal é um modelo próprio contendo apenas os campos que se aplicam a
ele; ``ChannelConfig`` é a união discriminada por ``channel_type``. Campos
que não pertencem ao canal são descartados na validação e nunca chegam ao
cálculo.
"""
from decimal import Decimal
from typing import Annotated, Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator

from pricing.registry import FeeModelRegistry


class BaseChannelConfig(BaseModel):
    """Campos comuns a todos os canais"""
    model_config = ConfigDict(frozen=True)

    enabled: bool = True
    sale_price: Decimal = Decimal("0")
    commission_percent: Decimal = Decimal("0")  # % sobre o preço
    shipping_cost: Decimal = Decimal("0")
    other_cost_value: Decimal = Decimal("0")
    fixed_cost_percent: Decimal = Decimal("0")  # % sobre o preço
    other_cost_percent: Decimal = Decimal("0")  # % sobre o preço
    product_code: Optional[str] = None  # SKU/ASIN/MLB, não entra no cálculo

    @model_validator(mode="before")
    @classmethod
    def _empty_as_zero(cls, data: Any) -> Any:
        # Campos vazios no cadastro chegam como null
        if not isinstance(data, dict):
            return data
        return {
            name: Decimal("0") if value is None and name in cls.model_fields
            and cls.model_fields[name].annotation is Decimal else value
            for name, value in data.items()
        }


class SiteProprioConfig(BaseChannelConfig):
    channel_type: Literal["SITE_PROPRIO"] = "SITE_PROPRIO"
    packaging_cost_value: Decimal = Decimal("0")
    financial_cost_percent: Decimal = Decimal("0")
    marketing_cost_percent: Decimal = Decimal("0")


class AmazonFBAConfig(BaseChannelConfig):
    channel_type: Literal["AMAZON_FBA"] = "AMAZON_FBA"
    product_cost_fba: Decimal = Decimal("0")  # somado ao custo base


class AmazonFBAOnSiteConfig(BaseChannelConfig):
    channel_type: Literal["AMAZON_FBA_ONSITE"] = "AMAZON_FBA_ONSITE"
    rebate_value: Decimal = Decimal("0")
    rebate_percent: Decimal = Decimal("0")
    tacos_cost_percent: Decimal = Decimal("0")
    installment_percent: Decimal = Decimal("0")
    packaging_cost_value: Decimal = Decimal("0")


class MercadoLivreFullConfig(BaseChannelConfig):
    channel_type: Literal["ML_FULL"] = "ML_FULL"
    tacos_cost_percent: Decimal = Decimal("0")
    product_cost_ml_full: Decimal = Decimal("0")  # somado ao custo base


class StandardChannelConfig(BaseChannelConfig):
    """Canais que usam apenas os campos comuns"""
    channel_type: Literal[
        "AMAZON_FBM",
        "AMAZON_DBA",
        "ML_ME1",
        "ML_FLEX",
        "ML_ENVIOS",
        "SHOPEE",
        "MARKETPLACE_OTHER",
    ]


ChannelConfig = Annotated[
    Union[
        SiteProprioConfig,
        AmazonFBAConfig,
        AmazonFBAOnSiteConfig,
        MercadoLivreFullConfig,
        StandardChannelConfig,
    ],
    Field(discriminator="channel_type"),
]

_channel_config_adapter = TypeAdapter(ChannelConfig)


def parse_channel_config(data: Union[BaseChannelConfig, Dict[str, Any]]) -> BaseChannelConfig:
    """
    Converte um registro do cadastro no modelo de canal correspondente.

    Args:
        data: dict com ``channel_type`` e os campos do canal (ou modelo pronto)

    Returns:
        Instância do modelo de canal

    Raises:
        UnknownChannelType: Se ``channel_type`` ausente ou não suportado
        pydantic.ValidationError: Se algum campo tiver formato inválido
    """
    if isinstance(data, BaseChannelConfig):
        return data

    payload = dict(data)
    channel_type = FeeModelRegistry.resolve(payload.get("channel_type"))
    payload["channel_type"] = channel_type.value

    return _channel_config_adapter.validate_python(payload)
