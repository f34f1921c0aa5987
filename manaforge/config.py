import logging

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="MANAFORGE_")

    app_name: str = "manaforge"
    debug: bool = False
    log_level: str = "INFO"

    default_hand_size: int = 7

    # Enumeration bounds. Exceeding one raises ResourceError.
    max_support_size: int = 250_000
    max_tree_depth: int = 12
    max_tree_nodes: int = 2_000_000


settings = Settings()


def configure_logging(level: str | None = None) -> None:
    """Configure root logging from settings (idempotent)."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
