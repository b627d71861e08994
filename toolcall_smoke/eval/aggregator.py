import json
import logging
from pathlib import Path
from typing import Callable, Mapping

from ..core.environment import get_results_path
from ..core.prometheus_metrics import SmokeMetricsCollector, metrics as default_metrics
from ..providers.client import ChatCompletionClient
from ..providers.config import ProviderConfig, build_provider_registry
from .models import RunSummary
from .runner import run_provider_tests

logger = logging.getLogger(__name__)

ClientFactory = Callable[[ProviderConfig], ChatCompletionClient]


def render_summary(summary: RunSummary) -> str:
    """Serialize the summary; identical inputs give identical text."""
    payload = {provider: result.to_dict() for provider, result in summary.items()}
    return json.dumps(payload, indent=2, ensure_ascii=False)


def write_summary(summary: RunSummary, path: str | Path) -> bool:
    """Overwrite path with the summary JSON. Errors are logged, not raised."""
    path = Path(path)
    try:
        path.write_text(render_summary(summary), encoding="utf-8")
    except OSError as e:
        logger.error(f"❌ Error saving test results: {e}")
        return False
    logger.info(f"📁 Test results saved to {path}")
    return True


def log_summary(summary: RunSummary) -> None:
    logger.info("📊 Test Results Summary:")
    for provider, result in summary.items():
        if result.success:
            logger.info(f"✅ {provider}: All tests passed 🚀")
        else:
            logger.error(f"❌ {provider}: Some tests failed 😢")


async def run_all(
    registry: Mapping[str, ProviderConfig] | None = None,
    output_path: str | Path | None = None,
    metrics: SmokeMetricsCollector | None = None,
    client_factory: ClientFactory | None = None,
) -> RunSummary:
    """
    Run every provider one after another, then report and persist.

    Args:
        registry: Providers to test, in order (default: built from the environment)
        output_path: Where the summary JSON goes (default: SMOKE_RESULTS_PATH)
        metrics: Collector for run metrics (default: the global one)
        client_factory: Builds the client for a provider (default: a fresh httpx client)

    Returns:
        The RunSummary, keyed by provider name
    """
    registry = registry if registry is not None else build_provider_registry()
    output_path = output_path or get_results_path()
    metrics = metrics or default_metrics

    summary: RunSummary = {}
    for name, provider in registry.items():
        if client_factory is None:
            summary[name] = await run_provider_tests(provider, metrics=metrics)
        else:
            async with client_factory(provider) as client:
                summary[name] = await run_provider_tests(provider, client=client, metrics=metrics)

    log_summary(summary)
    write_summary(summary, output_path)
    return summary
