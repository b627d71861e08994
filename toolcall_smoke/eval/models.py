from dataclasses import dataclass, field
from typing import Any

# Data Models
@dataclass(frozen=True)
class TestOutcome:
    """Result of one test case: the raw response body, or an error message"""
    __test__ = False  # not a pytest class

    tool_name: str
    response: dict[str, Any] | None = None
    error: str | None = None

    def __post_init__(self):
        if (self.response is None) == (self.error is None):
            raise ValueError("TestOutcome needs exactly one of response or error")

    def to_record(self) -> dict[str, Any]:
        """Body passed through unchanged, or {"error": message}"""
        if self.error is not None:
            return {"error": self.error}
        return self.response


@dataclass
class ProviderResult:
    """All outcomes of one provider run, in execution order"""
    success: bool = False
    results: dict[str, TestOutcome] = field(default_factory=dict)

    def record(self, outcome: TestOutcome) -> None:
        if outcome.tool_name in self.results:
            raise ValueError(f"Outcome for {outcome.tool_name} already recorded")
        self.results[outcome.tool_name] = outcome

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "results": {name: outcome.to_record() for name, outcome in self.results.items()},
        }


# Provider name -> result, in registry order
RunSummary = dict[str, ProviderResult]
