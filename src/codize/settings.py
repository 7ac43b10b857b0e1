"""Runtime configuration from environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from codize import constants


class Settings(BaseSettings):
    """Runtime configuration from environment variables.

    All settings can be overridden via environment variables with CODIZE_ prefix.
    Example: CODIZE_API_KEY=sk-...

    Only the CLI and CodizeClient.from_settings() read these; the
    CodizeClient constructor never touches the environment.
    """

    model_config = SettingsConfigDict(
        env_prefix=constants.ENV_PREFIX,
        extra="ignore",
    )

    api_key: str = ""
    base_url: str = constants.DEFAULT_BASE_URL
    log_level: str | None = None
