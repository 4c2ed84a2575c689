"""Service layer."""

from app.services.link import LinkRegistry, get_link_registry

__all__ = ["LinkRegistry", "get_link_registry"]
