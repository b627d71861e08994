from .client import ChatCompletionClient, has_tool_calls
from .config import ProviderConfig, build_provider_registry, get_provider
