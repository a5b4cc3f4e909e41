"""App linking domain verification: asset file parsing, host checks, retry bookkeeping and service settings."""

__version__ = "0.1.0"

__all__ = ["models", "json_util", "domain_verifier", "http_task", "verify_task", "service_config"]