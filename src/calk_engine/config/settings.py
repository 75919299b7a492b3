"""Service settings — read from ``CALK_*`` environment variables or a .env file."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

NBKR_DAILY_RATES_URL = "https://www.nbkr.kg/XML/daily.xml"


class ServiceSettings(BaseSettings):
    """Runtime settings for the API process.

    Environment variables take precedence over the .env file.
    """

    model_config = SettingsConfigDict(env_prefix="CALK_", env_file=".env", extra="ignore")

    reference_dir: str | None = Field(
        default=None,
        description="Directory holding the reference YAML tables. "
                    "None = the tables bundled with the package.",
    )
    rates_url: str = Field(default=NBKR_DAILY_RATES_URL, description="Upstream daily-rates XML feed")
    rates_ttl_seconds: float = Field(default=3600.0, gt=0, description="Currency-rate cache lifetime")
    rates_timeout_seconds: float = Field(default=10.0, gt=0, description="Upstream request timeout")
    log_level: str = Field(default="INFO")
    log_json: bool = Field(default=False, description="Render log lines as JSON instead of console format")
