import json
import logging
from typing import Sequence

from ..core.prometheus_metrics import SmokeMetricsCollector, metrics as default_metrics
from ..exceptions import ProviderError, RateLimitError
from ..providers.client import ChatCompletionClient, has_tool_calls
from ..providers.config import ProviderConfig
from .models import ProviderResult, TestOutcome
from .tools import TEST_CASES, TestCase

logger = logging.getLogger(__name__)


class ProviderTestRunner:
    """Runs the test cases against one provider, stopping at the first failure."""

    def __init__(
        self,
        provider: ProviderConfig,
        client: ChatCompletionClient,
        metrics: SmokeMetricsCollector | None = None,
        test_cases: Sequence[TestCase] = TEST_CASES,
    ):
        self.provider = provider
        self.client = client
        self.metrics = metrics or default_metrics
        self.test_cases = test_cases

    async def run(self) -> ProviderResult:
        """
        Execute every test case in order.

        Returns:
            ProviderResult with success=True only if every case produced a tool call.
            On the first failure the outcomes so far are returned and the
            remaining cases are never sent.
        """
        name = self.provider.name
        result = ProviderResult()
        logger.info(f"🚀 Testing {name}...")

        for case in self.test_cases:
            outcome, label = await self._run_case(case)
            result.record(outcome)
            self.metrics.record_test_case(name, case.tool_name, label)

            if label != "passed":
                self.metrics.record_provider_result(name, False)
                return result

        result.success = True
        self.metrics.record_provider_result(name, True)
        logger.info(f"🎉 All tests passed for {name}")
        return result

    async def _run_case(self, case: TestCase) -> tuple[TestOutcome, str]:
        """Execute a single case; returns the outcome and its metrics label."""
        name = self.provider.name
        tool = case.tool_name
        logger.info(f"🧪 Testing {tool}... content: {case.prompt}")

        try:
            body = await self.client.create_chat_completion(case.prompt)
            tool_called = has_tool_calls(body)
        except RateLimitError as e:
            logger.error(f"❌ {tool} test failed for {name} after multiple retries: {str(e)}")
            return TestOutcome(tool_name=tool, error=str(e)), "rate_limited"
        except ProviderError as e:
            logger.error(f"❌ Error in {tool} test for {name}: {str(e)}")
            return TestOutcome(tool_name=tool, error=str(e)), "error"
        except Exception as e:
            # Anything unexpected still ends only this provider's run
            logger.error(f"❌ Error in {tool} test for {name}: {type(e).__name__}: {str(e)}", exc_info=True)
            return TestOutcome(tool_name=tool, error=f"{type(e).__name__}: {str(e)}"), "error"

        if not tool_called:
            logger.error(f"❌ {tool} test failed for {name} (no tool calls)")
            logger.warning("Response: " + json.dumps(body, indent=2, ensure_ascii=False))
            return TestOutcome(tool_name=tool, response=body), "no_tool_call"

        logger.info(f"✅ {tool} test passed for {name}")
        return TestOutcome(tool_name=tool, response=body), "passed"


async def run_provider_tests(
    provider: ProviderConfig,
    client: ChatCompletionClient | None = None,
    metrics: SmokeMetricsCollector | None = None,
) -> ProviderResult:
    """Run the full test sequence against one provider.

    Opens (and closes) a ChatCompletionClient unless one is passed in.
    """
    metrics = metrics or default_metrics
    if client is not None:
        return await ProviderTestRunner(provider, client, metrics).run()

    async with ChatCompletionClient(provider, metrics=metrics) as owned_client:
        return await ProviderTestRunner(provider, owned_client, metrics).run()
