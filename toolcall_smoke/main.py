#!/usr/bin/env python3
"""
Tool-calling smoke test for OpenAI-compatible providers.

Sends one prompt per tool to every configured provider and checks that the
reply contains a tool call. Results land in test_results.json.
"""

import asyncio
import logging
import sys

from .core.environment import get_metrics_path, load_environment
from .core.logging import setup_logging
from .core.prometheus_metrics import metrics
from .eval.aggregator import run_all
from .providers.config import build_provider_registry

logger = logging.getLogger(__name__)


# Main Entry Point
async def main() -> int:
    """Main entry point. Always returns 0; pass/fail is reported in the logs and results file."""
    load_environment()
    setup_logging()

    registry = build_provider_registry()
    await run_all(registry=registry, metrics=metrics)

    metrics_path = get_metrics_path()
    if metrics_path:
        metrics.write_textfile(metrics_path)
    return 0


def run() -> None:
    """Console-script wrapper."""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
