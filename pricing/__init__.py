from .interface import (
    ChannelType,
    CHANNEL_DISPLAY_NAMES,
    CostBreakdown,
    HealthCategory,
    PortfolioSummary,
    PricingCalculation,
    ProductCostBasis,
)
from .registry import FeeField, FeeKind, FeeModelRegistry, UnknownChannelType
from .channels import ChannelConfig, parse_channel_config
from .health import HealthThresholds, classify
from .evaluator import evaluate
from .portfolio import aggregate, fingerprint, sort_calculations
from .formatter import PortfolioReport, format_brl, format_currency, format_percent, format_report
from .validation import PricingValidationError, ensure_valid, validate_inputs

__all__ = [
    "ChannelType",
    "CHANNEL_DISPLAY_NAMES",
    "CostBreakdown",
    "HealthCategory",
    "PortfolioSummary",
    "PricingCalculation",
    "ProductCostBasis",
    "FeeField",
    "FeeKind",
    "FeeModelRegistry",
    "UnknownChannelType",
    "ChannelConfig",
    "parse_channel_config",
    "HealthThresholds",
    "classify",
    "evaluate",
    "aggregate",
    "fingerprint",
    "sort_calculations",
    "PortfolioReport",
    "format_brl",
    "format_currency",
    "format_percent",
    "format_report",
    "PricingValidationError",
    "ensure_valid",
    "validate_inputs",
]
