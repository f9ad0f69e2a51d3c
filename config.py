# config.py
from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    dev_mode: bool = False

    app_slug: str = "channel-pricing"

    # Faixas de saúde da margem (%), limite inferior inclusivo
    health_excellent_min_margin: Decimal = Decimal("20")
    health_good_min_margin: Decimal = Decimal("10")

    # Alertas do resumo do portfólio
    low_margin_alert_percent: Decimal = Decimal("20")
    low_roi_alert_percent: Decimal = Decimal("30")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )


settings = Settings()
