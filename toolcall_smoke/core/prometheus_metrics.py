import logging
from prometheus_client import Counter, Histogram, Gauge, Info, write_to_textfile
from prometheus_client.core import CollectorRegistry

from .. import __version__
from ..eval.tools import TOOLS_VERSION

logger = logging.getLogger(__name__)


class SmokeMetricsCollector:
    """Prometheus metrics for one harness run.

    Each collector owns its registry so a run (or a test) starts from zero.
    """

    def __init__(self, registry: CollectorRegistry | None = None):
        self.registry = registry or CollectorRegistry()

        self.requests_total = Counter(
            'toolcall_smoke_requests_total',
            'Chat completion requests sent',
            ['provider', 'status'],
            registry=self.registry
        )

        self.request_duration_seconds = Histogram(
            'toolcall_smoke_request_duration_seconds',
            'Chat completion request duration in seconds',
            ['provider'],
            buckets=[0.5, 1.0, 2.0, 5.0, 10.0, 30.0, 60.0],
            registry=self.registry
        )

        self.rate_limited_responses_total = Counter(
            'toolcall_smoke_rate_limited_responses_total',
            'Responses with HTTP 429',
            ['provider'],
            registry=self.registry
        )

        self.test_cases_total = Counter(
            'toolcall_smoke_test_cases_total',
            'Finished test cases by outcome',
            ['provider', 'tool', 'outcome'],
            registry=self.registry
        )

        self.provider_success = Gauge(
            'toolcall_smoke_provider_success',
            '1 when every test case passed for the provider, else 0',
            ['provider'],
            registry=self.registry
        )

        self.system_info = Info(
            'toolcall_smoke',
            'Harness information',
            registry=self.registry
        )
        self.system_info.info({
            'version': __version__,
            'tools_version': TOOLS_VERSION,
            'service': 'toolcall-smoke'
        })

    def record_request(self, provider: str, status: str, duration_seconds: float):
        """Record one HTTP attempt; status is the HTTP code or 'error'"""
        self.requests_total.labels(provider=provider, status=status).inc()
        self.request_duration_seconds.labels(provider=provider).observe(duration_seconds)
        if status == '429':
            self.rate_limited_responses_total.labels(provider=provider).inc()

    def record_test_case(self, provider: str, tool: str, outcome: str):
        """outcome is one of: passed, no_tool_call, rate_limited, error"""
        self.test_cases_total.labels(provider=provider, tool=tool, outcome=outcome).inc()

    def record_provider_result(self, provider: str, success: bool):
        self.provider_success.labels(provider=provider).set(1 if success else 0)

    def write_textfile(self, path: str) -> bool:
        """Write metrics for the node_exporter textfile collector"""
        try:
            write_to_textfile(path, self.registry)
        except OSError as e:
            logger.error(f"❌ Failed to write metrics to {path}: {e}")
            return False
        logger.info(f"📈 Metrics written to {path}")
        return True


# Global instance
metrics = SmokeMetricsCollector()
