"""Link registry: short code generation, uniqueness and click accounting."""

import re
import secrets
import string
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from functools import lru_cache
from typing import Annotated, Any

import structlog
from pydantic import AnyUrl, TypeAdapter, UrlConstraints, ValidationError
from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.database import async_session_factory
from app.core.exceptions import (
    CodeConflict,
    InvalidCode,
    InvalidTarget,
    LinkNotFound,
    StoreUnavailable,
)
from app.models.link import Link

logger = structlog.get_logger()

# Characters for random short code generation (base62)
SHORT_CODE_CHARS = string.ascii_uppercase + string.ascii_lowercase + string.digits
SHORT_CODE_LENGTH = 6

# Custom codes may be slightly longer than generated ones
CUSTOM_CODE_PATTERN = re.compile(r"[A-Za-z0-9]{6,8}")

# No length cap, unlike pydantic.HttpUrl
_http_url = TypeAdapter(
    Annotated[AnyUrl, UrlConstraints(allowed_schemes=["http", "https"], host_required=True)]
)


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, matching the DateTime columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def generate_short_code(length: int = SHORT_CODE_LENGTH) -> str:
    """Generate a random short code using base62 characters."""
    return "".join(secrets.choice(SHORT_CODE_CHARS) for _ in range(length))


def validate_target_url(target_url: Any) -> str:
    """Return the URL unchanged if it is an absolute http/https URL.

    Raises InvalidTarget otherwise.
    """
    if not target_url or not isinstance(target_url, str):
        raise InvalidTarget()
    try:
        _http_url.validate_python(target_url)
    except ValidationError as e:
        raise InvalidTarget() from e
    return target_url


def validate_code(code: Any) -> str | None:
    """Check a caller-chosen code against the allowed pattern."""
    if code is None:
        return None
    if not isinstance(code, str) or not CUSTOM_CODE_PATTERN.fullmatch(code):
        raise InvalidCode()
    return code


@contextmanager
def _store_errors(operation: str, code: str | None = None) -> Iterator[None]:
    """Translate database failures into StoreUnavailable."""
    try:
        yield
    except SQLAlchemyError as e:
        logger.error(
            "Link store failure",
            operation=operation,
            short_code=code,
            error=str(e),
        )
        raise StoreUnavailable() from e


class LinkRegistry:
    """Owns the code -> target URL mapping and click accounting.

    The registry keeps no state of its own. Every operation borrows one
    session from the factory and all concurrency guarantees come from the
    database: the primary key on ``code`` rejects duplicate inserts, and
    clicks are counted with a single ``UPDATE ... SET total_clicks =
    total_clicks + 1`` so concurrent redirects never lose increments.

    Usage:
        registry = LinkRegistry(async_session_factory)
        link = await registry.create("https://example.com/a")
        await registry.increment_click(link.code)
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        clock: Callable[[], datetime] = utcnow,
        code_generator: Callable[[], str] = generate_short_code,
    ):
        """Initialize the registry.

        Args:
            session_factory: Factory producing one session per operation.
            clock: Source of created_at / last_clicked_at timestamps.
            code_generator: Produces candidate codes when none is supplied.
        """
        self._session_factory = session_factory
        self._clock = clock
        self._generate_code = code_generator

    async def create(self, target_url: Any, code: Any = None) -> Link:
        """Create a link, generating a code unless one is supplied.

        A supplied code is inserted exactly once and a taken code raises
        CodeConflict. Generated codes are redrawn until an insert succeeds,
        with no attempt limit.
        """
        target_url = validate_target_url(target_url)
        custom_code = validate_code(code)

        with _store_errors("create", custom_code):
            async with self._session_factory() as session:
                if custom_code is not None:
                    link = await self._insert(session, custom_code, target_url)
                    if link is None:
                        logger.info("Link create rejected - code taken", short_code=custom_code)
                        raise CodeConflict()
                else:
                    link = None
                    while link is None:
                        candidate = self._generate_code()
                        link = await self._insert(session, candidate, target_url)
                        if link is None:
                            logger.debug("Short code collision, retrying", short_code=candidate)

        logger.info(
            "Link created",
            short_code=link.code,
            is_custom=custom_code is not None,
        )
        return link

    async def _insert(
        self,
        session: AsyncSession,
        code: str,
        target_url: str,
    ) -> Link | None:
        """Insert a new link, returning None if the code is already taken."""
        link = Link(
            code=code,
            target_url=target_url,
            total_clicks=0,
            last_clicked_at=None,
            created_at=self._clock(),
        )
        session.add(link)
        try:
            await session.commit()
        except IntegrityError:
            await session.rollback()
            return None
        return link

    async def get(self, code: str) -> Link:
        """Get a link by its exact code. Does not count a click."""
        with _store_errors("get", code):
            async with self._session_factory() as session:
                link = await session.get(Link, code)
        if link is None:
            raise LinkNotFound()
        return link

    async def increment_click(self, code: str) -> Link:
        """Record one redirect: bump total_clicks and set last_clicked_at.

        Returns the updated link. Raises LinkNotFound when no row matched,
        e.g. because the link was deleted concurrently.
        """
        stmt = (
            update(Link)
            .where(Link.code == code)
            .values(
                total_clicks=Link.total_clicks + 1,
                last_clicked_at=self._clock(),
            )
            .returning(Link)
        )
        with _store_errors("increment_click", code):
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                link = result.scalar_one_or_none()
                await session.commit()

        if link is None:
            raise LinkNotFound()
        logger.debug("Click recorded", short_code=code, total_clicks=link.total_clicks)
        return link

    async def delete(self, code: str) -> None:
        """Permanently delete a link. The code becomes free immediately."""
        with _store_errors("delete", code):
            async with self._session_factory() as session:
                result = await session.execute(delete(Link).where(Link.code == code))
                deleted = result.rowcount
                await session.commit()

        if deleted == 0:
            raise LinkNotFound()
        logger.info("Link deleted", short_code=code)

    async def list_links(self) -> list[Link]:
        """All links, newest first."""
        with _store_errors("list"):
            async with self._session_factory() as session:
                result = await session.execute(
                    select(Link).order_by(Link.created_at.desc())
                )
                return list(result.scalars().all())


@lru_cache
def get_link_registry() -> LinkRegistry:
    """Get the registry bound to the application database."""
    return LinkRegistry(async_session_factory)
