from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_parse_none_str="null",
    )

    # GitHub account that owns the published repositories
    # Personal access token needs the `repo` scope (and `delete_repo` for cleanup)
    github_token: str = ""
    github_owner: str = ""

    # GitHub endpoints - override for GitHub Enterprise Server
    github_api_url: str = "https://api.github.com"
    github_web_url: str = "https://github.com"
    github_api_version: str = "2022-11-28"

    # HTTP timeouts (seconds) for the shared client
    request_timeout: float = 30.0
    connect_timeout: float = 5.0

    # Repository defaults
    repository_private: bool = False
    # Used only when the create-repository response omits default_branch
    default_branch: str = "main"
    commit_message: str = "Add generated project"

    # Maximum blob uploads in flight at once (1 = sequential, deterministic)
    upload_concurrency: int = 8

    # Commit author email when /user/emails has no usable address.
    # None (FALLBACK_EMAIL=null) = fail the publish instead of substituting a placeholder.
    fallback_email: str | None = "noreply@github.com"

    # Opt-in: delete the freshly created repository when a later stage fails.
    # Off by default; the repository is left for the caller to inspect or delete.
    delete_repository_on_failure: bool = False

    debug: bool = False

    @property
    def github_configured(self) -> bool:
        """Check if GitHub credentials are present."""
        return bool(self.github_token and self.github_owner)


settings = Settings()
