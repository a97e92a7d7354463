"""Configuration management for gitwrap."""

import os
from pathlib import Path
from typing import Optional
from dataclasses import dataclass, field
from dotenv import load_dotenv
import yaml

from .errors import ConfigurationError

# Load environment variables from .env file
load_dotenv()

DEFAULT_CONFIG_FILE = ".gitwrap.yaml"


def _env_flag(name: str) -> Optional[bool]:
    value = os.getenv(name)
    if value is None:
        return None
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class OAuthConfig:
    """GitHub OAuth application configuration."""
    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    scope: str = "repo"
    callback_host: str = "localhost"
    callback_port: int = 8000
    callback_path: str = "/callback"
    authorize_url: str = "https://github.com/login/oauth/authorize"
    token_url: str = "https://github.com/login/oauth/access_token"
    timeout: float = 300.0
    request_timeout: float = 30.0
    open_browser: bool = True

    @property
    def redirect_uri(self) -> str:
        return f"http://{self.callback_host}:{self.callback_port}{self.callback_path}"

    @classmethod
    def from_env(cls) -> 'OAuthConfig':
        """Create config from environment variables."""
        config = cls(
            client_id=os.getenv("GITHUB_CLIENT_ID"),
            client_secret=os.getenv("GITHUB_CLIENT_SECRET"),
        )
        try:
            if os.getenv("GITWRAP_OAUTH_PORT"):
                config.callback_port = int(os.environ["GITWRAP_OAUTH_PORT"])
            if os.getenv("GITWRAP_OAUTH_TIMEOUT"):
                config.timeout = float(os.environ["GITWRAP_OAUTH_TIMEOUT"])
        except ValueError as e:
            raise ConfigurationError(f"Invalid OAuth setting in environment: {e}", e)
        return config


@dataclass
class GitConfig:
    """Git executable and commit identity configuration."""
    executable: str = "git"
    author_name: Optional[str] = None
    author_email: Optional[str] = None

    @classmethod
    def from_env(cls) -> 'GitConfig':
        """Create config from environment variables."""
        return cls(
            executable=os.getenv("GITWRAP_GIT", "git"),
            author_name=os.getenv("GITWRAP_AUTHOR_NAME"),
            author_email=os.getenv("GITWRAP_AUTHOR_EMAIL"),
        )


@dataclass
class Config:
    """Main configuration for gitwrap."""
    oauth: OAuthConfig = field(default_factory=OAuthConfig)
    git: GitConfig = field(default_factory=GitConfig)
    verbose: bool = False
    debug: bool = False
    strict_exit: bool = False
    log_file: Optional[str] = None

    @classmethod
    def load(cls, path: Optional[Path] = None) -> 'Config':
        """Load configuration from file and environment."""
        config = cls()

        # Load from file if exists
        if path and path.exists():
            try:
                with open(path, 'r', encoding='utf-8') as f:
                    data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid config file {path}: {e}", e)

            if not isinstance(data, dict):
                raise ConfigurationError(f"Config file {path} must contain a mapping")

            for section in ('oauth', 'git'):
                values = data.get(section) or {}
                if not isinstance(values, dict):
                    raise ConfigurationError(f"Section '{section}' in {path} must be a mapping")
                target = getattr(config, section)
                for key, value in values.items():
                    if hasattr(target, key):
                        setattr(target, key, value)

            config.verbose = data.get('verbose', False)
            config.debug = data.get('debug', False)
            config.strict_exit = data.get('strict_exit', False)
            config.log_file = data.get('log_file')

        # Override with environment variables
        env_oauth = OAuthConfig.from_env()
        defaults = OAuthConfig()
        for key in ['client_id', 'client_secret', 'callback_port', 'timeout']:
            value = getattr(env_oauth, key)
            if value is not None and value != getattr(defaults, key):
                setattr(config.oauth, key, value)

        env_git = GitConfig.from_env()
        for key in ['author_name', 'author_email']:
            if getattr(env_git, key):
                setattr(config.git, key, getattr(env_git, key))
        if env_git.executable != "git":
            config.git.executable = env_git.executable

        strict = _env_flag("GITWRAP_STRICT_EXIT")
        if strict is not None:
            config.strict_exit = strict
        if os.getenv("GITWRAP_LOG_FILE"):
            config.log_file = os.environ["GITWRAP_LOG_FILE"]

        config.validate()
        return config

    def validate(self):
        """Coerce numeric settings, rejecting values of the wrong type."""
        oauth = self.oauth
        try:
            if isinstance(oauth.callback_port, bool):
                raise ValueError(oauth.callback_port)
            oauth.callback_port = int(oauth.callback_port)
            oauth.timeout = float(oauth.timeout)
            oauth.request_timeout = float(oauth.request_timeout)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid OAuth setting: {e}", e)
        if not 0 <= oauth.callback_port <= 65535:
            raise ConfigurationError(f"Invalid OAuth callback port: {oauth.callback_port}")
        if oauth.timeout <= 0:
            raise ConfigurationError(f"OAuth timeout must be positive: {oauth.timeout:g}")

    def save(self, path: Path):
        """Save configuration to file."""
        data = {
            'oauth': {
                'client_id': self.oauth.client_id,
                'scope': self.oauth.scope,
                'callback_host': self.oauth.callback_host,
                'callback_port': self.oauth.callback_port,
                'callback_path': self.oauth.callback_path,
                'timeout': self.oauth.timeout,
                'open_browser': self.oauth.open_browser,
            },
            'git': {
                'executable': self.git.executable,
                'author_name': self.git.author_name,
                'author_email': self.git.author_email,
            },
            'verbose': self.verbose,
            'debug': self.debug,
            'strict_exit': self.strict_exit,
            'log_file': self.log_file,
        }

        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            yaml.dump(data, f, default_flow_style=False)
