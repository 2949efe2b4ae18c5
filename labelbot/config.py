"""Process settings for the label bot."""
import logging
import os
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


@dataclass
class Config:
    """Bot configuration loaded from environment variables."""

    # GitHub
    github_token: str = field(default_factory=lambda: os.getenv("GITHUB_TOKEN", ""))
    github_token_path: str = field(default_factory=lambda: os.getenv("GITHUB_TOKEN_PATH", ""))
    delete_token_file: bool = field(
        default_factory=lambda: os.getenv("DELETE_TOKEN_FILE", "true").lower() == "true"
    )
    github_api_url: str | None = field(
        default_factory=lambda: os.getenv("GITHUB_API_URL") or None
    )

    # Webhook server
    webhook_secret: str = field(default_factory=lambda: os.getenv("WEBHOOK_SECRET", ""))
    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8888")))

    # Repository policies
    robot_config_path: str = field(
        default_factory=lambda: os.getenv("ROBOT_CONFIG_PATH", "config.yaml")
    )

    # Logging
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    def __post_init__(self) -> None:
        """Read the token from its file when no token is given directly."""
        if self.github_token or not self.github_token_path:
            return
        try:
            with open(self.github_token_path) as f:
                self.github_token = f.read().strip()
        except OSError as e:
            logger.error(f"Could not read token file {self.github_token_path}: {e}")
            return
        if self.delete_token_file:
            try:
                os.remove(self.github_token_path)
            except OSError as e:
                logger.error(f"Could not delete token file {self.github_token_path}: {e}")

    def validate(self) -> list[str]:
        """Validate required configuration. Returns list of errors."""
        errors = []
        if not self.github_token:
            errors.append("Either GITHUB_TOKEN or a readable GITHUB_TOKEN_PATH is required")
        if not self.robot_config_path:
            errors.append("ROBOT_CONFIG_PATH is required")
        if not self.webhook_secret:
            logger.warning("WEBHOOK_SECRET is not set, webhook signatures will not be verified")
        return errors
