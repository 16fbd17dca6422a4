"""Observability configuration using Logfire.

Services, use cases and adapters log straight through logfire::

    with logfire.span("registration_service.bootstrap", provider=provider):
        logfire.info("New account created", user_id=str(user.id))

Session tokens, client secrets and authorization codes never go into a log
attribute or span.
"""

from typing import Any

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from quest.config import ObservabilitySettings, Settings


def _sends_to_cloud(observability: ObservabilitySettings) -> bool:
    """An explicit flag wins; otherwise send only when a token is configured."""
    if observability.send_to_logfire is not None:
        return observability.send_to_logfire
    return bool(observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire once per process, before the app is created.

    Set OBSERVABILITY__LOGFIRE_TOKEN to ship telemetry to Logfire; without
    it everything stays on the console.

    Args:
        settings: Application settings
    """
    send_to_logfire = _sends_to_cloud(settings.observability)

    logfire.configure(
        service_name="quest-api",
        service_version="0.1.0",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=settings.observability.logfire_token,
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        git_sha=settings.git_sha,
        send_to_logfire=send_to_logfire,
    )


def _request_attributes(request: Any, attributes: dict[str, Any]) -> dict[str, Any]:
    """Keep routing metadata; drop query values, which carry OAuth codes."""
    result = {k: v for k, v in attributes.items() if k != "values"}
    if hasattr(request, "method"):
        result["method"] = request.method
    if hasattr(request, "url"):
        result["path"] = request.url.path
    return result


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request handled by the app.

    Headers are not captured: ``Authorization`` holds the bearer token.

    Args:
        app: FastAPI application instance
    """
    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        request_attributes_mapper=_request_attributes,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace queries issued through the engine."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine)


def instrument_httpx() -> None:
    """Trace outbound calls to identity providers."""
    logfire.instrument_httpx()
