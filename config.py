"""Configuration loading and validation for n3h-pin."""

import tomllib
from dataclasses import dataclass
from pathlib import Path


DEFAULT_CONFIG_PATH = Path("config.toml")

DEFAULTS = {
    "host": "github.com",
    "api_host": "api.github.com",
    "org": "holochain",
    "repo": "n3h",
    "output_path": "n3h_pin.json",
    "user_agent": "Mozilla/5.0 (X11; Linux x86_64; rv:60.0) Gecko/20100101 Firefox/60.0",
    "max_redirects": 5,
    "timeout": 30.0,
}


@dataclass
class Config:
    host: str
    api_host: str
    org: str
    repo: str
    output_path: Path
    user_agent: str
    max_redirects: int
    timeout: float

    def package_url(self, tag: str) -> str:
        """URL of the package descriptor (package.json) at the given tag."""
        return f"https://{self.host}/{self.org}/{self.repo}/raw/{tag}/package.json"

    def release_url(self, tag: str) -> str:
        """URL of the release descriptor in the host's REST API."""
        return f"https://{self.api_host}/repos/{self.org}/{self.repo}/releases/tags/{tag}"

    def artifact_url(self, tag: str, version: str, descriptor: str) -> str:
        return (
            f"https://{self.host}/{self.org}/{self.repo}/releases/download/"
            f"{tag}/{self.repo}-{version}-{descriptor}"
        )

    def checksum_url(self, tag: str, version: str, descriptor: str) -> str:
        return self.artifact_url(tag, version, descriptor) + ".sha256"

    @classmethod
    def load(
        cls,
        config_path: Path | None = None,
        output_override: str | None = None,
        host_override: str | None = None,
        repo_override: str | None = None,
    ) -> "Config":
        """Load configuration from TOML file with defaults."""
        config_data = dict(DEFAULTS)

        path = config_path or DEFAULT_CONFIG_PATH
        if path.exists():
            with open(path, "rb") as f:
                file_config = tomllib.load(f)
                config_data.update(file_config)

        if output_override:
            config_data["output_path"] = output_override
        if host_override:
            config_data["host"] = host_override
        if repo_override:
            config_data["repo"] = repo_override

        max_redirects = int(config_data["max_redirects"])
        if max_redirects < 0:
            raise ValueError(f"max_redirects must be >= 0, got {max_redirects}")

        timeout = float(config_data["timeout"])
        if timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout}")

        return cls(
            host=config_data["host"],
            api_host=config_data["api_host"],
            org=config_data["org"],
            repo=config_data["repo"],
            output_path=Path(config_data["output_path"]).expanduser(),
            user_agent=config_data["user_agent"],
            max_redirects=max_redirects,
            timeout=timeout,
        )
