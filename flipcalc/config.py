from decimal import Decimal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "FLIPCALC_"}

    # App
    debug: bool = False
    log_level: str = "INFO"

    # CLI
    api_base_url: str = "http://localhost:8000"

    # Exit strategy estimates (rough industry figures, override per deal)
    transactional_funding_pct: Decimal = Decimal("2")  # Double-close funding, % of contract price
    refinance_cost_pct: Decimal = Decimal("2")  # Non-itemized refinance costs, % of ARV

    # 70% rule: purchase + rehab should not exceed this share of ARV
    seventy_percent_rule_pct: Decimal = Decimal("70")


settings = Settings()
