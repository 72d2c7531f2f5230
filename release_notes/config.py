"""
Configuration for the release notes generator.

Resolves command line arguments and environment variables into a single
immutable ReleaseNotesConfig record that is passed to every component.
"""

import enum
import os
from dataclasses import dataclass
from typing import Mapping, Optional

# Environment variable names for configuration
ENV_GITHUB_TOKEN = "GITHUB_TOKEN"
ENV_GITHUB_USERNAME = "GITHUB_USERNAME"

# Default values for configuration parameters
DEFAULT_ORGANIZATION = "podman-desktop"
DEFAULT_REPOSITORY = "podman-desktop"
DEFAULT_OUTPUT_DIR = "."

# Constants for GitHub API interaction
GITHUB_PER_PAGE = 100
BOT_USER_TYPE = "Bot"
BOT_LOGINS = ("podman-desktop-bot", "step-security-bot")

# Messages shown when required configuration is missing.
MISSING_MODEL_MESSAGE = "When using --ollama, you need to specify --model argument"
MISSING_TOKEN_MESSAGE = "No token found. Use either GITHUB_TOKEN or pass it as an argument"
MISSING_USERNAME_MESSAGE = "No username found. Use either GITHUB_USERNAME or pass it as an argument"


class ConfigurationError(ValueError):
    """Raised when a required setting is missing."""


class LlmBackend(enum.Enum):
    """Local language model service flavors, with their default port and endpoint."""

    AI_LAB = ("45621", "/v1/chat/completions")
    OLLAMA = ("11434", "/api/generate")

    @property
    def default_port(self) -> str:
        return self.value[0]

    @property
    def default_endpoint(self) -> str:
        return self.value[1]


@dataclass(frozen=True)
class ReleaseNotesConfig:
    token: str
    organization: str
    repository: str
    milestone: str
    username: str
    model: Optional[str]
    port: str
    endpoint: str
    backend: LlmBackend = LlmBackend.AI_LAB
    template_path: Optional[str] = None
    output_dir: str = DEFAULT_OUTPUT_DIR

    @property
    def use_ollama(self) -> bool:
        return self.backend is LlmBackend.OLLAMA

    @property
    def service_url(self) -> str:
        return f"http://localhost:{self.port}{self.endpoint}"


def build_config(args, environ: Optional[Mapping[str, str]] = None) -> ReleaseNotesConfig:
    """
    Build the run configuration from parsed arguments and the environment.

    Args:
        args: argparse namespace produced by main.build_parser()
        environ: Environment mapping, defaults to os.environ

    Returns:
        Validated ReleaseNotesConfig

    Raises:
        ConfigurationError: If the model (with --ollama), token or username is missing
    """
    if environ is None:
        environ = os.environ

    backend = LlmBackend.OLLAMA if args.ollama else LlmBackend.AI_LAB
    if backend is LlmBackend.OLLAMA and not args.model:
        raise ConfigurationError(MISSING_MODEL_MESSAGE)

    token = args.token or environ.get(ENV_GITHUB_TOKEN)
    if not token:
        raise ConfigurationError(MISSING_TOKEN_MESSAGE)

    username = args.username or environ.get(ENV_GITHUB_USERNAME)
    if not username:
        raise ConfigurationError(MISSING_USERNAME_MESSAGE)

    return ReleaseNotesConfig(
        token=token,
        organization=args.org,
        repository=args.repo,
        milestone=args.milestone,
        username=username,
        model=args.model,
        port=args.port or backend.default_port,
        endpoint=args.endpoint or backend.default_endpoint,
        backend=backend,
        template_path=args.template,
        output_dir=args.output_dir,
    )
