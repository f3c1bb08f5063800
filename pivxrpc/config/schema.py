"""Configuration schema using Pydantic."""

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientConfig(BaseSettings):
    """Connection and call-policy settings for a PIVX node client."""
    url: str = "http://127.0.0.1:51473"
    rpc_user: str | None = None
    rpc_password: SecretStr | None = None
    max_parallel_requests: int = Field(default=3, ge=1)
    max_retries: int = Field(default=10, ge=0)
    timeout_ms: int = Field(default=1000, gt=0)
    retry_delay_seconds: float = Field(default=0.5, ge=0)

    @property
    def auth(self) -> tuple[str, str] | None:
        """Basic-auth pair, or None when no user is configured."""
        if not self.rpc_user:
            return None
        password = self.rpc_password.get_secret_value() if self.rpc_password else ""
        return (self.rpc_user, password)

    model_config = SettingsConfigDict(
        env_prefix="PIVX_RPC_",
    )
