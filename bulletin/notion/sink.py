"""PageSink port and its Notion adapter.

The sink receives the page title and the already converted document blocks
and returns the identifier of the created page. Publishing is a single
request: the page and all of its children are created together, so a
failure never leaves a partial page behind.

Usage
-----
>>> sink = NotionPageSink(NotionConfig(api_key="secret", database_id="db"))
>>> page_id = await sink.publish("Linear daily report 2024-05-02", blocks)

"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

import httpx

from bulletin.common.env import optional_str, require_str
from bulletin.reporting.blocks import MAX_BLOCKS

from .blocks import rich_text, to_notion_children
from .errors import NotionAPIError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from bulletin.common.env import Environ
    from bulletin.reporting.blocks import DocumentBlock

_HTTP_ERROR_STATUS_THRESHOLD = 400
_DEFAULT_TITLE_PROPERTY = "Name"


@typ.runtime_checkable
class PageSink(typ.Protocol):
    """Protocol for publishing a finished report as a page."""

    async def publish(
        self, title: str, blocks: cabc.Sequence[DocumentBlock]
    ) -> str:
        """Create a page titled ``title`` with ``blocks``; return its id."""
        ...


@dc.dataclass(frozen=True, slots=True)
class NotionConfig:
    """Configuration for the Notion page sink.

    Attributes
    ----------
    api_key
        Integration token, sent as a bearer token.
    database_id
        Database the report page is created in.
    title_property
        Name of the database's title property.
    version
        Value of the ``Notion-Version`` header.

    """

    api_key: str
    database_id: str
    title_property: str = _DEFAULT_TITLE_PROPERTY
    endpoint: str = "https://api.notion.com/v1/pages"
    version: str = "2022-06-28"
    timeout_s: float = 30.0

    @classmethod
    def from_env(cls, environ: Environ) -> NotionConfig:
        """Build configuration from ``BULLETIN_NOTION_*`` variables."""
        return cls(
            api_key=require_str(environ, "BULLETIN_NOTION_API_KEY"),
            database_id=require_str(environ, "BULLETIN_NOTION_DATABASE_ID"),
            title_property=optional_str(environ, "BULLETIN_NOTION_TITLE_PROPERTY")
            or _DEFAULT_TITLE_PROPERTY,
        )


def build_page_payload(
    config: NotionConfig, title: str, blocks: cabc.Sequence[DocumentBlock]
) -> dict[str, typ.Any]:
    """Return the ``POST /v1/pages`` body for ``title`` and ``blocks``.

    At most :data:`~bulletin.reporting.blocks.MAX_BLOCKS` children are sent;
    any further blocks are dropped.
    """
    return {
        "parent": {"database_id": config.database_id},
        "properties": {config.title_property: {"title": rich_text(title)}},
        "children": to_notion_children(blocks[:MAX_BLOCKS]),
    }


class NotionPageSink:
    """Notion implementation of :class:`PageSink`.

    Parameters
    ----------
    config
        API configuration.
    http_client
        Optional ``httpx.AsyncClient`` for testing. When omitted the instance
        creates and owns its own client.

    """

    def __init__(
        self,
        config: NotionConfig,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialise the sink with the provided API configuration."""
        self._config = config
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=config.timeout_s,
            headers={
                "Authorization": f"Bearer {config.api_key}",
                "Notion-Version": config.version,
                "Content-Type": "application/json",
            },
        )

    async def aclose(self) -> None:
        """Close any owned HTTP resources."""
        if self._owns_client:
            await self._client.aclose()

    async def publish(
        self, title: str, blocks: cabc.Sequence[DocumentBlock]
    ) -> str:
        """Create the report page and return its id.

        Raises
        ------
        NotionAPIError
            On transport failures, non-2xx responses or a response without
            a page id.

        """
        payload = build_page_payload(self._config, title, blocks)
        try:
            response = await self._client.post(self._config.endpoint, json=payload)
        except httpx.TimeoutException as exc:
            raise NotionAPIError.timeout() from exc
        except httpx.RequestError as exc:
            raise NotionAPIError.network_error(str(exc)) from exc

        if response.status_code >= _HTTP_ERROR_STATUS_THRESHOLD:
            raise NotionAPIError.http_error(response.status_code, response.text)

        try:
            data = response.json()
        except ValueError as exc:  # invalid JSON or undecodable bytes
            raise NotionAPIError.missing_page_id(response.text) from exc
        page_id = data.get("id") if isinstance(data, dict) else None
        if not isinstance(page_id, str) or not page_id:
            raise NotionAPIError.missing_page_id(response.text)
        return page_id
