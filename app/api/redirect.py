"""Redirect endpoint for short links."""

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse

from app.core.exceptions import LinkNotFound
from app.core.observability import record_redirect
from app.services.link import LinkRegistry, get_link_registry

logger = structlog.get_logger()

router = APIRouter(tags=["redirect"])


@router.get("/{code}")
async def redirect_to_target(
    code: str,
    registry: Annotated[LinkRegistry, Depends(get_link_registry)],
) -> RedirectResponse:
    """Redirect a short code to its target URL, counting the click.

    The click update doubles as the existence check: a code that is missing,
    or deleted between lookup and redirect, matches no row and yields 404.
    """
    try:
        link = await registry.increment_click(code)
    except LinkNotFound:
        logger.info("Redirect failed - link not found", short_code=code)
        record_redirect(status.HTTP_404_NOT_FOUND)
        raise

    logger.info("Redirect", short_code=code, total_clicks=link.total_clicks)
    record_redirect(status.HTTP_302_FOUND)

    return RedirectResponse(url=link.target_url, status_code=status.HTTP_302_FOUND)
