"""
Configuration management (SSOT).

This module defines ALL configuration for the PandaDoc CLI.
All config keys are defined here; no other module should invent config keys.

Key invariants:
- Secrets are never stored in config, only the NAME of the environment
  variable that holds them (TokenConfig.env)
- Only the credential fetcher resolves that variable; command and client
  code never see the token value
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

DEFAULT_CONFIG_PATH = Path("~/.config/pandadoc/config.yaml")
DEFAULT_CREDENTIAL = "pandadoc"


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""

    pass


@dataclass
class TokenPlacement:
    """Where the fetcher puts the secret on an outgoing request.

    - type "header": header ``name`` set to ``format`` with ``{token}`` replaced
    - type "query": query parameter ``name`` set to the raw token
    """

    type: str = "header"
    name: str = "Authorization"
    format: str = "API-Key {token}"

    def render(self, token: str) -> str:
        return self.format.replace("{token}", token)


@dataclass
class TokenConfig:
    """A named credential the fetcher can attach to requests."""

    env: str
    type: str = "api_key"
    domains: list[str] = field(default_factory=list)
    placement: TokenPlacement = field(default_factory=TokenPlacement)

    def allows_host(self, host: str) -> bool:
        host = host.lower()
        return any(host == d.lower() for d in self.domains)


@dataclass
class ApiConfig:
    """PandaDoc API endpoints and per-call timeouts (seconds)."""

    base_url: str = "https://api.pandadoc.com/public/v1"
    base_url_v2: str = "https://api.pandadoc.com/public/v2"
    timeout_seconds: float = 15
    download_timeout_seconds: float = 60


def default_tokens() -> dict[str, TokenConfig]:
    return {
        DEFAULT_CREDENTIAL: TokenConfig(
            env="PANDADOC_API_KEY",
            type="api_key",
            domains=["api.pandadoc.com"],
            placement=TokenPlacement(),
        )
    }


@dataclass
class Config:
    """Application configuration (SSOT)."""

    api: ApiConfig = field(default_factory=ApiConfig)
    tokens: dict[str, TokenConfig] = field(default_factory=default_tokens)
    credential: str = DEFAULT_CREDENTIAL
    # Default directory for downloads without -o
    download_dir: Path = field(default_factory=lambda: Path("tmp"))
    source_path: Path | None = None

    def validate(self) -> list[str]:
        """Validate configuration completeness and consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors: list[str] = []

        if not self.api.base_url:
            errors.append("api.base_url is required")
        if not self.api.base_url_v2:
            errors.append("api.base_url_v2 is required")
        if self.api.timeout_seconds <= 0:
            errors.append("api.timeout_seconds must be > 0")
        if self.api.download_timeout_seconds <= 0:
            errors.append("api.download_timeout_seconds must be > 0")

        for name, token in self.tokens.items():
            if not token.env:
                errors.append(f"tokens.{name}.env is required")
            if token.placement.type not in ("header", "query"):
                errors.append(
                    f"tokens.{name}.placement.type must be 'header' or 'query', "
                    f"got {token.placement.type!r}"
                )

        return errors


def resolve_config_path(explicit: str | None = None) -> Path:
    """--config wins, then PANDADOC_CONFIG, then the default location."""
    raw = explicit or os.environ.get("PANDADOC_CONFIG") or str(DEFAULT_CONFIG_PATH)
    return Path(raw).expanduser()


def _parse_token(name: str, data: dict) -> TokenConfig:
    if not isinstance(data, dict):
        raise ConfigValidationError(f"tokens.{name} must be a mapping")
    placement_data = data.get("placement") or {}
    placement = TokenPlacement(
        type=placement_data.get("type", "header"),
        name=placement_data.get("name", "Authorization"),
        format=placement_data.get("format", "{token}"),
    )
    domains = data.get("domains") or []
    if isinstance(domains, str):
        domains = [domains]
    return TokenConfig(
        env=data.get("env", ""),
        type=data.get("type", "api_key"),
        domains=list(domains),
        placement=placement,
    )


def load_config(config_path: Path) -> Config:
    """
    Load configuration from YAML file.

    A missing file is not an error: defaults apply and the token is read
    from PANDADOC_API_KEY.

    Environment variables can override config values:
    - PANDADOC_API_URL
    - PANDADOC_API_URL_V2
    - PANDADOC_TIMEOUT (seconds)
    - PANDADOC_DOWNLOAD_DIR
    """
    if config_path.exists():
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
        source_path: Path | None = config_path
    else:
        data = {}
        source_path = None

    if not isinstance(data, dict):
        raise ConfigValidationError(f"{config_path}: top level must be a mapping")

    # API config
    api_data = data.get("api", {})
    defaults = ApiConfig()
    api = ApiConfig(
        base_url=os.environ.get("PANDADOC_API_URL", api_data.get("base_url", defaults.base_url)),
        base_url_v2=os.environ.get(
            "PANDADOC_API_URL_V2", api_data.get("base_url_v2", defaults.base_url_v2)
        ),
        timeout_seconds=float(
            os.environ.get("PANDADOC_TIMEOUT", api_data.get("timeout_seconds", defaults.timeout_seconds))
        ),
        download_timeout_seconds=float(
            api_data.get("download_timeout_seconds", defaults.download_timeout_seconds)
        ),
    )

    # Tokens: file entries extend/replace the built-in default
    tokens = default_tokens()
    for name, token_data in (data.get("tokens") or {}).items():
        tokens[name] = _parse_token(name, token_data)

    download_dir = os.environ.get("PANDADOC_DOWNLOAD_DIR", data.get("download_dir", "tmp"))

    config = Config(
        api=api,
        tokens=tokens,
        credential=data.get("credential", DEFAULT_CREDENTIAL),
        download_dir=Path(download_dir),
        source_path=source_path,
    )

    errors = config.validate()
    if errors:
        raise ConfigValidationError("; ".join(errors))

    return config
