"""Adobe PDF Services cloud rendering.

Uses the PDF Services REST API: client-credential token, asset upload,
asynchronous HTML-to-PDF job, status polling and result download.
"""

import asyncio
import json
import os
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

import anyio
import httpx

from pdfbatch.config.constants import (
    ADOBE_CLIENT_ID_ENV,
    ADOBE_CLIENT_SECRET_ENV,
    DEFAULT_ADOBE_API_BASE_URL,
    DEFAULT_ADOBE_MAX_POLLS,
    DEFAULT_ADOBE_POLL_INTERVAL,
    DEFAULT_ADOBE_SCOPE,
    DEFAULT_ADOBE_TIMEOUT,
    DEFAULT_ADOBE_TOKEN_URL,
    DEFAULT_PAGE_FORMAT,
    PAGE_SIZES_INCHES,
)
from pdfbatch.exceptions import RenderError
from pdfbatch.renderers.base import BaseRenderer, RenderMethod, RenderResult
from pdfbatch.utils.logging import get_logger

if TYPE_CHECKING:
    from pdfbatch.config.settings import PdfBatchSettings

log = get_logger(__name__)

HTML_MEDIA_TYPE = "text/html"


class AdobeRenderer(BaseRenderer):
    """Render HTML to PDF with Adobe PDF Services."""

    method = RenderMethod.ADOBE

    def __init__(
        self,
        client_id: str | None,
        client_secret: str | None,
        token_url: str = DEFAULT_ADOBE_TOKEN_URL,
        api_base_url: str = DEFAULT_ADOBE_API_BASE_URL,
        scope: str = DEFAULT_ADOBE_SCOPE,
        page_format: str = DEFAULT_PAGE_FORMAT,
        poll_interval: float = DEFAULT_ADOBE_POLL_INTERVAL,
        max_polls: int = DEFAULT_ADOBE_MAX_POLLS,
        timeout: float = DEFAULT_ADOBE_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the renderer.

        Args:
            client_id: PDF Services client id
            client_secret: PDF Services client secret
            token_url: IMS token endpoint
            api_base_url: PDF Services API base URL
            scope: OAuth scope requested with the token
            page_format: Page format name (A4, Letter, ...)
            poll_interval: Seconds between job status polls
            max_polls: Polls before the job is considered timed out
            timeout: HTTP timeout in seconds
            transport: Optional httpx transport (tests)
        """
        self.client_id = client_id
        self.client_secret = client_secret
        self.token_url = token_url
        self.api_base_url = api_base_url.rstrip("/")
        self.scope = scope
        self.page_format = page_format
        self.poll_interval = poll_interval
        self.max_polls = max_polls
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: "PdfBatchSettings") -> "AdobeRenderer":
        """Create a renderer with credentials taken from the environment."""
        adobe = settings.adobe
        return cls(
            client_id=os.environ.get(ADOBE_CLIENT_ID_ENV),
            client_secret=os.environ.get(ADOBE_CLIENT_SECRET_ENV),
            token_url=adobe.token_url,
            api_base_url=adobe.api_base_url,
            scope=adobe.scope,
            page_format=settings.render.page_format,
            poll_interval=adobe.poll_interval,
            max_polls=adobe.max_polls,
            timeout=adobe.timeout,
        )

    @property
    def has_credentials(self) -> bool:
        return bool(self.client_id and self.client_secret)

    async def render(self, html: str, output_path: Path) -> RenderResult:
        if not self.has_credentials:
            raise RenderError(
                self.name,
                f"Missing credentials: set {ADOBE_CLIENT_ID_ENV} and {ADOBE_CLIENT_SECRET_ENV}",
            )

        temp_path = self._write_temp_html(html)
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                token = await self._get_token(client)
                headers = {
                    "Authorization": f"Bearer {token}",
                    "x-api-key": self.client_id or "",
                }
                asset_id = await self._upload(client, headers, temp_path)
                location = await self._submit(client, headers, asset_id)
                download_uri = await self._poll(client, headers, location)
                await self._download(client, download_uri, output_path)
        except RenderError:
            raise
        except (httpx.HTTPError, OSError, KeyError, ValueError) as e:
            raise RenderError(self.name, str(e), cause=e) from e
        finally:
            self._cleanup(temp_path)

        log.debug("Rendered with Adobe PDF Services", output=str(output_path))
        return RenderResult(success=True, method=self.method)

    def _write_temp_html(self, html: str) -> Path:
        fd, name = tempfile.mkstemp(prefix="pdfbatch_", suffix=".html")
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(html)
        return Path(name)

    def _cleanup(self, temp_path: Path) -> None:
        """Delete the temporary HTML file; failures are only logged."""
        try:
            temp_path.unlink(missing_ok=True)
        except OSError as e:
            log.warning("Failed to delete temporary file", path=str(temp_path), error=str(e))

    async def _get_token(self, client: httpx.AsyncClient) -> str:
        response = await client.post(
            self.token_url,
            data={
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "grant_type": "client_credentials",
                "scope": self.scope,
            },
        )
        if response.status_code in (400, 401, 403):
            raise RenderError(self.name, f"Authentication failed ({response.status_code})")
        response.raise_for_status()
        token = response.json().get("access_token")
        if not token:
            raise RenderError(self.name, "No access token in authentication response")
        return token

    async def _upload(self, client: httpx.AsyncClient, headers: dict, html_path: Path) -> str:
        response = await client.post(
            f"{self.api_base_url}/assets",
            headers=headers,
            json={"mediaType": HTML_MEDIA_TYPE},
        )
        response.raise_for_status()
        data = response.json()
        upload_uri = data["uploadUri"]
        asset_id = data["assetID"]

        async with await anyio.open_file(html_path, "rb") as f:
            content = await f.read()
        upload = await client.put(
            upload_uri,
            content=content,
            headers={"Content-Type": HTML_MEDIA_TYPE},
        )
        upload.raise_for_status()
        log.debug("Uploaded asset", asset_id=asset_id)
        return asset_id

    def _page_layout(self) -> dict:
        width, height = PAGE_SIZES_INCHES[self.page_format]
        return {"pageWidth": width, "pageHeight": height}

    async def _submit(self, client: httpx.AsyncClient, headers: dict, asset_id: str) -> str:
        response = await client.post(
            f"{self.api_base_url}/operation/htmltopdf",
            headers=headers,
            json={
                "assetID": asset_id,
                "json": json.dumps({}),
                "includeHeaderFooter": False,
                "pageLayout": self._page_layout(),
            },
        )
        response.raise_for_status()
        location = response.headers.get("location")
        if not location:
            raise RenderError(self.name, "Job submission returned no polling location")
        return location

    async def _poll(self, client: httpx.AsyncClient, headers: dict, location: str) -> str:
        for _ in range(self.max_polls):
            response = await client.get(location, headers=headers)
            response.raise_for_status()
            data = response.json()
            status = data.get("status")

            if status == "done":
                return data["asset"]["downloadUri"]
            if status == "failed":
                error = data.get("error") or {}
                raise RenderError(self.name, f"Job failed: {error.get('message', 'unknown error')}")

            await asyncio.sleep(self.poll_interval)

        raise RenderError(self.name, f"Job did not finish after {self.max_polls} polls")

    async def _download(
        self, client: httpx.AsyncClient, download_uri: str, output_path: Path
    ) -> None:
        async with client.stream("GET", download_uri) as response:
            response.raise_for_status()
            async with await anyio.open_file(output_path, "wb") as f:
                async for chunk in response.aiter_bytes():
                    await f.write(chunk)
