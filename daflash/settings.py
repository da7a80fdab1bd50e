import logging
import secrets
from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict

from daflash.models.tax import TaxConfiguration

logger = logging.getLogger(__name__)

_INSECURE_DEFAULT_KEY = "change-me-in-production"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="DAFLASH_", extra="ignore")

    db_url: str = "sqlite:///daflash.db"

    log_level: str = "INFO"
    log_json: bool = False

    secret_key: str = _INSECURE_DEFAULT_KEY
    admin_emails: list[str] = []
    admin_password_hash: str = ""

    login_rate_limit_max: int = 5
    login_rate_limit_window_seconds: int = 60

    default_tax_rate: Decimal = Decimal("8.25")
    default_tax_enabled: bool = True
    default_jurisdiction_exemption: bool = True

    numbering_mode: str = "scan"  # "scan" | "counter"

    invoice_due_days: int = 30
    quote_expiry_days: int = 30

    demo_content: bool = True

    def default_tax_config(self) -> TaxConfiguration:
        return TaxConfiguration(
            tax_enabled=self.default_tax_enabled,
            tax_rate_percent=self.default_tax_rate,
            jurisdiction_exemption_enabled=self.default_jurisdiction_exemption,
        )

    def get_secret_key(self) -> str:
        if self.secret_key == _INSECURE_DEFAULT_KEY:
            logger.warning(
                "DAFLASH_SECRET_KEY is not set, using a random key. "
                "Admin sessions will not survive restarts. "
                "Set DAFLASH_SECRET_KEY in your environment or .env file."
            )
            self.secret_key = secrets.token_urlsafe(32)
        return self.secret_key


settings = Settings()
