import os

from dotenv import find_dotenv, load_dotenv

DEFAULT_RESULTS_PATH = "test_results.json"
DEFAULT_REQUEST_TIMEOUT = 60.0


def load_environment() -> bool:
    """Loads a .env file from the working directory without overriding real env vars"""
    return load_dotenv(find_dotenv(usecwd=True), override=False)

def get_env(name: str, default: str = "") -> str:
    """Returns an environment variable, falling back to default when unset or blank"""
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()

def get_results_path() -> str:
    """Returns the path the run summary JSON is written to"""
    return get_env("SMOKE_RESULTS_PATH", DEFAULT_RESULTS_PATH)

def get_request_timeout() -> float:
    """Returns the per-request HTTP timeout in seconds"""
    raw = get_env("SMOKE_REQUEST_TIMEOUT")
    if not raw:
        return DEFAULT_REQUEST_TIMEOUT
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"SMOKE_REQUEST_TIMEOUT must be a number, got {raw!r}")

def get_metrics_path() -> str | None:
    """Returns the Prometheus textfile path, or None when metrics export is off"""
    return get_env("SMOKE_METRICS_PATH") or None

def get_log_format() -> str:
    """Returns 'text' or 'json'"""
    return get_env("LOG_FORMAT", "text").lower()

def get_log_level() -> str:
    return get_env("LOG_LEVEL", "INFO").upper()
