"""Link CRUD endpoints.

Registry errors propagate to the application's ``LinkRegistryError``
handler, which renders them as ``{"error": message}``.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from app.core.observability import record_link_operation
from app.schemas.link import LinkCreate, LinkResponse, MessageResponse
from app.services.link import LinkRegistry, get_link_registry

router = APIRouter(prefix="/api/links", tags=["links"])

Registry = Annotated[LinkRegistry, Depends(get_link_registry)]


@router.post("", response_model=LinkResponse, status_code=status.HTTP_201_CREATED)
async def create_link(link_data: LinkCreate, registry: Registry) -> LinkResponse:
    """Create a new shortened link.

    If `code` is provided, it will be used as the short code.
    Otherwise, a random 6-character code will be generated.
    """
    link = await registry.create(link_data.target_url, link_data.code)
    record_link_operation("create")
    return LinkResponse.model_validate(link)


@router.get("", response_model=list[LinkResponse])
async def list_links(registry: Registry) -> list[LinkResponse]:
    """List all links, newest first."""
    links = await registry.list_links()
    return [LinkResponse.model_validate(link) for link in links]


@router.get("/{code}", response_model=LinkResponse)
async def get_link(code: str, registry: Registry) -> LinkResponse:
    """Get stats for a single code."""
    return LinkResponse.model_validate(await registry.get(code))


@router.delete("/{code}", response_model=MessageResponse)
async def delete_link(code: str, registry: Registry) -> MessageResponse:
    """Permanently delete a link."""
    await registry.delete(code)
    record_link_operation("delete")
    return MessageResponse(message="Link deleted successfully")
