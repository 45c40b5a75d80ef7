"""Service-specific settings for compliance-ledger.

Settings use the COMPLIANCE_LEDGER_ prefix and cover:
- The fixed owner identity of the registry
- Structured logging output
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings for compliance-ledger.

    Environment variable prefix: COMPLIANCE_LEDGER_
    """

    service_name: str = "compliance-ledger"

    # -------------------------------------------------------------------------
    # Access control
    # -------------------------------------------------------------------------

    owner_id: str = Field(
        description="Identity of the registry owner. Fixed for the lifetime of the registry; "
        "only this identity may initialize the officer set, manage officers, and register frameworks.",
        min_length=1,
    )

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------

    log_level: str = Field(
        default="INFO",
        description="Minimum log level: DEBUG | INFO | WARNING | ERROR.",
    )
    log_json: bool = Field(
        default=True,
        description="Render log lines as JSON. Set to false for human-readable console output.",
    )

    model_config = SettingsConfigDict(env_prefix="COMPLIANCE_LEDGER_")
