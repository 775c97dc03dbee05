"""Sentry error tracking integration for dartgen-mcp."""
import os
from typing import Any
import sentry_sdk
from dartgen_mcp.constants import LoggingDefaults
from dartgen_mcp.core.logging import get_logger


def init_sentry(service_name: str = "dartgen-mcp") -> None:
    """Initialize Sentry with service tagging.

    Args:
        service_name: Unique service identifier (default: 'dartgen-mcp')
    """
    def _tag_event(event: Any, hint: Any) -> Any:
        """Add service tags to every event."""
        event.setdefault("tags", {})
        event["tags"]["service"] = service_name
        event["tags"]["language"] = "python"
        event["tags"]["component"] = "model-generator"
        return event

    # Only initialize if SENTRY_DSN is set
    dsn = os.getenv("SENTRY_DSN")
    if not dsn:
        return

    sentry_sdk.init(
        dsn=dsn,
        environment=os.getenv("SENTRY_ENVIRONMENT", "development"),
        traces_sample_rate=1.0 if os.getenv("SENTRY_ENVIRONMENT") == "development" else 0.1,
        attach_stacktrace=True,
        max_breadcrumbs=LoggingDefaults.MAX_BREADCRUMBS,
        debug=os.getenv("SENTRY_ENVIRONMENT") == "development",
        before_send=_tag_event,
    )

    sentry_sdk.set_tag("service", service_name)
    sentry_sdk.set_tag("language", "python")
    sentry_sdk.set_tag("component", "model-generator")

    logger = get_logger("sentry")
    logger.info(
        "sentry_initialized",
        service=service_name,
        environment=os.getenv("SENTRY_ENVIRONMENT", "development"),
    )


__all__ = ["init_sentry"]
