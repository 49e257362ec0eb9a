from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    # Regulatory Fee (0.00015% of transaction value)
    REGULATORY_FEE_RATE: float = 0.0000015

    # Capital Gains Tax (sell side only)
    CGT_RATE_INDIVIDUAL: float = 0.05
    CGT_RATE_INSTITUTION: float = 0.10

    # Odd Lot
    MIN_LOT_SIZE: int = 10

    # Form Defaults
    DEFAULT_PENALTY_PERCENT: float = 20.0
    DEFAULT_DEPOSITORY_CHARGE: float = 25.0

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    class Config:
        env_file = ".env"
        extra = "ignore"

config = Settings()
