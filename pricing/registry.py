import logging
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, NamedTuple, Tuple, Union

from pricing.interface import ChannelType, CHANNEL_DISPLAY_NAMES

logger = logging.getLogger(__name__)


class FeeKind(str, Enum):
    """Natureza de um campo de taxa"""
    PERCENT_OF_PRICE = "percent_of_price"
    PERCENT_OF_COST = "percent_of_cost"
    ABSOLUTE_CURRENCY = "absolute_currency"
    OPAQUE_PASSTHROUGH = "opaque_passthrough"


class FeeField(NamedTuple):
    name: str
    kind: FeeKind
    default: Any = Decimal("0")
    unit_cost: bool = False  # valor absoluto somado ao custo unitário


class UnknownChannelType(ValueError):
    """Canal não reconhecido pelo registro de taxas"""

    def __init__(self, channel_type: Any):
        self.channel_type = channel_type
        self.supported_channels = FeeModelRegistry.get_supported_channels()
        super().__init__(
            f"Canal '{channel_type}' não suportado. "
            f"Canais disponíveis: {', '.join(self.supported_channels)}"
        )


_PCT = FeeKind.PERCENT_OF_PRICE
_ABS = FeeKind.ABSOLUTE_CURRENCY

_COMMON_FIELDS: Tuple[FeeField, ...] = (
    FeeField("commission_percent", _PCT),
    FeeField("shipping_cost", _ABS),
    FeeField("other_cost_value", _ABS),
    FeeField("fixed_cost_percent", _PCT),
    FeeField("other_cost_percent", _PCT),
    FeeField("product_code", FeeKind.OPAQUE_PASSTHROUGH, None),
)


class FeeModelRegistry:
    """
    Registro canônico channel_type -> campos de taxa.

    Único ponto que decide quais campos entram na conta de cada canal e
    de que forma (percentual do preço, percentual do custo, valor absoluto
    ou identificador opaco).
    """

    # Campos específicos por canal (somados aos campos comuns)
    _FEE_MODELS: Dict[ChannelType, Tuple[FeeField, ...]] = {
        ChannelType.SITE_PROPRIO: (
            FeeField("packaging_cost_value", _ABS),
            FeeField("financial_cost_percent", _PCT),
            FeeField("marketing_cost_percent", _PCT),
        ),
        ChannelType.AMAZON_FBM: (),
        ChannelType.AMAZON_FBA: (
            FeeField("product_cost_fba", _ABS, unit_cost=True),
        ),
        ChannelType.AMAZON_FBA_ONSITE: (
            FeeField("rebate_value", _ABS),
            FeeField("rebate_percent", _PCT),
            FeeField("tacos_cost_percent", _PCT),
            FeeField("installment_percent", _PCT),
            FeeField("packaging_cost_value", _ABS),
        ),
        ChannelType.AMAZON_DBA: (),
        ChannelType.ML_ME1: (),
        ChannelType.ML_FLEX: (),
        ChannelType.ML_ENVIOS: (),
        ChannelType.ML_FULL: (
            FeeField("tacos_cost_percent", _PCT),
            FeeField("product_cost_ml_full", _ABS, unit_cost=True),
        ),
        ChannelType.SHOPEE: (),
        ChannelType.MARKETPLACE_OTHER: (),
    }

    @classmethod
    def resolve(cls, channel_type: Union[ChannelType, str, None]) -> ChannelType:
        """
        Normaliza o tipo de canal (case-insensitive).

        Raises:
            UnknownChannelType: Se o canal não estiver registrado
        """
        if isinstance(channel_type, ChannelType):
            resolved = channel_type
        else:
            try:
                resolved = ChannelType(str(channel_type).strip().upper())
            except ValueError:
                logger.error(f"Tipo de canal desconhecido: {channel_type!r}")
                raise UnknownChannelType(channel_type) from None

        if resolved not in cls._FEE_MODELS:
            logger.error(f"Canal sem modelo de taxas registrado: {resolved.value}")
            raise UnknownChannelType(channel_type)

        return resolved

    @classmethod
    def fields_for(cls, channel_type: Union[ChannelType, str]) -> List[FeeField]:
        """
        Retorna os campos de taxa aplicáveis ao canal, na ordem:
        campos comuns primeiro, depois os específicos do canal.

        Raises:
            UnknownChannelType: Se o canal não for suportado
        """
        resolved = cls.resolve(channel_type)
        return list(_COMMON_FIELDS) + list(cls._FEE_MODELS[resolved])

    @classmethod
    def get_supported_channels(cls) -> list:
        """Retorna lista de canais suportados"""
        return [channel.value for channel in cls._FEE_MODELS]

    @classmethod
    def is_supported(cls, channel_type: Union[ChannelType, str, None]) -> bool:
        """Verifica se um canal é suportado"""
        try:
            cls.resolve(channel_type)
        except UnknownChannelType:
            return False
        return True

    @classmethod
    def describe(cls) -> Dict[str, Dict[str, Any]]:
        """Tabela de campos por canal, pronta para serialização JSON"""
        return {
            channel.value: {
                "display_name": CHANNEL_DISPLAY_NAMES[channel],
                "fields": [
                    {"name": field.name, "kind": field.kind.value, "unit_cost": field.unit_cost}
                    for field in cls.fields_for(channel)
                ],
            }
            for channel in cls._FEE_MODELS
        }
