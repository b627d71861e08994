"""
Provider registry: endpoint, credential and model for every provider under test.

Values are read from the environment once, when the registry is built, and
handed to the runner as frozen objects.
"""
import logging
from types import MappingProxyType
from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field, SecretStr

from ..core.environment import get_env

logger = logging.getLogger(__name__)

# Defaults
OPENAI_CHAT_URL = "https://api.openai.com/v1/chat/completions"
OPENAI_MODEL_ID = "gpt-4o-mini"

GEMINI_CHAT_URL = "http://localhost:3000/v1/chat/completions"  # OpenAI-compatible proxy
GEMINI_MODEL_ID = "gemini-1.5-flash-exp-0827"

# Rate-limit policy, fixed for every provider
RATE_LIMIT_MAX_ATTEMPTS = 3
RATE_LIMIT_DELAY_SECONDS = 5.0


class ProviderConfig(BaseModel):
    """Connection settings for one chat-completion endpoint."""
    model_config = ConfigDict(frozen=True)

    name: str
    endpoint_url: str
    api_key: SecretStr = Field(default=SecretStr(""))
    model_id: str


def _provider_from_env(name: str, prefix: str, default_url: str, default_model: str) -> ProviderConfig:
    api_key = get_env(f"{prefix}_API_KEY")
    if not api_key:
        logger.warning(f"⚠️ {prefix}_API_KEY is not set; requests to {name} will likely be rejected")

    return ProviderConfig(
        name=name,
        endpoint_url=get_env(f"{prefix}_CHAT_URL", default_url),
        api_key=SecretStr(api_key),
        model_id=get_env(f"{prefix}_MODEL", default_model),
    )


def build_provider_registry() -> Mapping[str, ProviderConfig]:
    """Build the read-only provider map, in execution order."""
    providers = [
        _provider_from_env("openai", "OPENAI", OPENAI_CHAT_URL, OPENAI_MODEL_ID),
        _provider_from_env("gemini", "GEMINI", GEMINI_CHAT_URL, GEMINI_MODEL_ID),
    ]
    return MappingProxyType({p.name: p for p in providers})


def get_provider(registry: Mapping[str, ProviderConfig], name: str) -> ProviderConfig:
    try:
        return registry[name]
    except KeyError:
        raise KeyError(f"Unknown provider: {name}. Known: {', '.join(registry)}") from None
