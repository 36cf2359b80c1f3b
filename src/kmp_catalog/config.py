"""Configuration settings for the KMP library catalog."""

from pydantic import SecretStr
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Catalog build configuration.

    Environment variables:
    - GITHUB_TOKEN: Bearer token for the GitHub API (optional).
        Unauthenticated requests are limited to 60 req/hr.
    - REPO_NAME: Repository name the site is deployed under
        (e.g. GitHub Pages). Produces the base path "/<REPO_NAME>".
    - SOURCE_REPO / SOURCE_PATH: Where the README catalog lives.
    - LIBRARIES_SECTION: Heading line that opens the catalog section.
    - OUTPUT_DIR: Directory the static site is written to.
    """

    # GitHub
    github_token: SecretStr | None = None
    github_api_url: str = "https://api.github.com"
    request_timeout: float = 15.0

    # Catalog source
    source_repo: str = "AAkira/Kotlin-Multiplatform-Libraries"
    source_path: str = "README.md"
    libraries_section: str = "## Libraries"

    # Site
    repo_name: str | None = None
    output_dir: str = "out"
    site_title: str = "Kotlin Multiplatform Libraries"

    # Logging
    log_level: str = "INFO"

    model_config = {"env_prefix": "", "case_sensitive": False}

    def get_base_path(self) -> str:
        """Return the URL path prefix for deployed assets ('' at the root)."""
        if self.repo_name:
            return "/" + self.repo_name.strip("/")
        return ""

    def auth_headers(self) -> dict[str, str]:
        """Return GitHub API headers, including the bearer token if set."""
        headers = {"Accept": "application/vnd.github+json"}
        if self.github_token:
            token = self.github_token.get_secret_value()
            if token:
                headers["Authorization"] = f"Bearer {token}"
        return headers


settings = Settings()
