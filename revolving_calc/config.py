"""Configuration management using Pydantic Settings"""

from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Rule assets
    assets_base_url: str = "http://localhost:8001/assets/"
    tier_rules_file_a: str = "revolving_bands_1250.json"
    tier_rules_file_b: str = "revolving_bands_1250_5000.json"
    tier_rules_file_c: str = "revolving_bands_5000_plus.json"
    legacy_rules_file: str = "revolvingRates.json"

    # Widget
    language: str = "fr"
    use_i18n_legal: bool = False  # Force localized legal text over JSON legal_lines

    # Service
    service_name: str = "revolving-calc"
    log_level: str = "INFO"

    # HTTP Client
    http_timeout_seconds: float = 5.0

    @property
    def tier_rules_urls(self) -> List[str]:
        return [
            self.assets_base_url + self.tier_rules_file_a,
            self.assets_base_url + self.tier_rules_file_b,
            self.assets_base_url + self.tier_rules_file_c,
        ]

    @property
    def legacy_rules_url(self) -> str:
        return self.assets_base_url + self.legacy_rules_file


settings = Settings()
