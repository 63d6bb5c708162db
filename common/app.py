"""Core FastAPI application utilities for the advisor service."""

from typing import Any

import fastapi
import fastapi.responses

import common.log

# ---------------------------------------------------------------------------
# Health router
# ---------------------------------------------------------------------------

_health_router = fastapi.APIRouter()


@_health_router.api_route('/health', methods=['GET', 'HEAD'])
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {'status': 'healthy'}


# ---------------------------------------------------------------------------
# Error handling
# ---------------------------------------------------------------------------


async def _value_error_handler(
    request: fastapi.Request, exc: Exception
) -> fastapi.responses.JSONResponse:
    """Report argument errors raised by the core as 400 responses."""
    return fastapi.responses.JSONResponse(status_code=400, content={'detail': str(exc)})


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------


def create_app(title: str, **kwargs: Any) -> fastapi.FastAPI:
    """Create a FastAPI app with health endpoint, logging and error handling.

    Additional keyword arguments are forwarded to FastAPI.__init__ (e.g. lifespan).
    """
    app = fastapi.FastAPI(title=title, **kwargs)
    common.log.configure_logging()
    app.include_router(_health_router)
    app.add_exception_handler(ValueError, _value_error_handler)
    return app
