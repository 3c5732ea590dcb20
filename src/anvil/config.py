"""Configuration management using Pydantic settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Tool settings loaded from ``ANVIL_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="ANVIL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Per-project data folder, relative to the build folder
    data_folder_name: str = ".anvil"

    # Plugin list read by PluginManager.initialize_plugins_from_config_file()
    plugin_config_filename: str = "plugins.json"

    # Workspace (monorepo) detection
    workspace_marker: str = "anvil-workspace.json"
    workspace_config_folder: str = "config/anvil"  # relative to workspace root

    # Logging
    verbose: bool = False
    log_format: str = "<level>{level: <8}</level> | {message}"


settings = Settings()
