"""Tests for the Adobe PDF Services renderer."""

import json
import tempfile
from pathlib import Path
from unittest.mock import MagicMock

import httpx
import pytest
from structlog.testing import capture_logs

from pdfbatch.exceptions import RenderError
from pdfbatch.renderers import AdobeRenderer, RenderMethod

TOKEN_URL = "https://ims.test/ims/token/v3"
API_BASE = "https://pdf.test"
UPLOAD_URI = "https://upload.test/asset-1"
STATUS_URI = f"{API_BASE}/operation/htmltopdf/job-1/status"
DOWNLOAD_URI = "https://download.test/result.pdf"
PDF_BYTES = b"%PDF-1.7\n" + b"0" * 4096


class FakePdfServices:
    """In-memory PDF Services API for httpx.MockTransport."""

    def __init__(
        self,
        token_status: int = 200,
        statuses: list[dict] | None = None,
        location: str | None = STATUS_URI,
    ) -> None:
        self.token_status = token_status
        self.statuses = statuses or [{"status": "in progress"}, _done()]
        self.location = location
        self.requests: list[httpx.Request] = []
        self.uploaded: bytes | None = None
        self.job: dict | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = str(request.url)

        if url == TOKEN_URL:
            if self.token_status != 200:
                return httpx.Response(self.token_status, json={"error": "invalid_client"})
            return httpx.Response(200, json={"access_token": "token-123", "expires_in": 86399})
        if url == f"{API_BASE}/assets":
            return httpx.Response(200, json={"uploadUri": UPLOAD_URI, "assetID": "asset-1"})
        if url == UPLOAD_URI:
            self.uploaded = request.content
            return httpx.Response(200)
        if url == f"{API_BASE}/operation/htmltopdf":
            self.job = json.loads(request.content)
            headers = {"location": self.location} if self.location else {}
            return httpx.Response(201, headers=headers)
        if url == STATUS_URI:
            status = self.statuses.pop(0) if len(self.statuses) > 1 else self.statuses[0]
            return httpx.Response(200, json=status)
        if url == DOWNLOAD_URI:
            return httpx.Response(200, content=PDF_BYTES)
        return httpx.Response(404)


def _done() -> dict:
    return {"status": "done", "asset": {"assetID": "result-1", "downloadUri": DOWNLOAD_URI}}


def _renderer(service: FakePdfServices, **kwargs) -> AdobeRenderer:
    options = {
        "client_id": "client-id",
        "client_secret": "client-secret",
        "token_url": TOKEN_URL,
        "api_base_url": API_BASE,
        "poll_interval": 0,
        "max_polls": 5,
        "transport": httpx.MockTransport(service),
    }
    options.update(kwargs)
    return AdobeRenderer(**options)


@pytest.fixture
def temp_html_paths(monkeypatch) -> list[Path]:
    """Record temporary HTML files created by the renderer."""
    created: list[Path] = []
    real_mkstemp = tempfile.mkstemp

    def mkstemp(*args, **kwargs):
        fd, name = real_mkstemp(*args, **kwargs)
        created.append(Path(name))
        return fd, name

    monkeypatch.setattr("pdfbatch.renderers.adobe.tempfile.mkstemp", mkstemp)
    return created


class TestAdobeRenderer:
    """Tests for AdobeRenderer."""

    @pytest.mark.asyncio
    async def test_full_flow(self, temp_dir: Path, temp_html_paths: list[Path]):
        """Test token, upload, job, polling and download."""
        service = FakePdfServices()
        output = temp_dir / "doc.pdf"

        result = await _renderer(service).render("<html><body>Report</body></html>", output)

        assert result.success is True
        assert result.method is RenderMethod.ADOBE
        assert output.read_bytes() == PDF_BYTES
        assert service.uploaded == b"<html><body>Report</body></html>"
        assert service.job["assetID"] == "asset-1"
        assert service.job["pageLayout"] == {"pageWidth": 8.27, "pageHeight": 11.69}

        api_request = next(r for r in service.requests if str(r.url) == f"{API_BASE}/assets")
        assert api_request.headers["Authorization"] == "Bearer token-123"
        assert api_request.headers["x-api-key"] == "client-id"

        status_polls = [r for r in service.requests if str(r.url) == STATUS_URI]
        assert len(status_polls) == 2

    @pytest.mark.asyncio
    async def test_letter_page_layout(self, temp_dir: Path, temp_html_paths: list[Path]):  # noqa: ARG002
        """Test the configured page format sets the job page size."""
        service = FakePdfServices()

        await _renderer(service, page_format="Letter").render("<p>x</p>", temp_dir / "doc.pdf")

        assert service.job["pageLayout"] == {"pageWidth": 8.5, "pageHeight": 11.0}

        assert len(temp_html_paths) == 1
        assert not temp_html_paths[0].exists()

    @pytest.mark.asyncio
    async def test_missing_credentials(self, temp_dir: Path):
        """Test missing credentials fail before any request."""
        service = FakePdfServices()
        renderer = _renderer(service, client_id=None, client_secret=None)

        assert renderer.has_credentials is False
        with pytest.raises(RenderError, match="Missing credentials"):
            await renderer.render("<html></html>", temp_dir / "doc.pdf")

        assert service.requests == []

    @pytest.mark.asyncio
    async def test_authentication_failure(self, temp_dir: Path, temp_html_paths: list[Path]):
        """Test rejected credentials raise and clean up."""
        service = FakePdfServices(token_status=401)

        with pytest.raises(RenderError, match=r"Authentication failed \(401\)"):
            await _renderer(service).render("<html></html>", temp_dir / "doc.pdf")

        assert not (temp_dir / "doc.pdf").exists()
        assert not temp_html_paths[0].exists()

    @pytest.mark.asyncio
    async def test_job_failed(self, temp_dir: Path):
        """Test a failed job surfaces the service error message."""
        service = FakePdfServices(
            statuses=[{"status": "failed", "error": {"message": "Malformed HTML"}}]
        )

        with pytest.raises(RenderError, match="Malformed HTML"):
            await _renderer(service).render("<html></html>", temp_dir / "doc.pdf")

    @pytest.mark.asyncio
    async def test_job_never_finishes(self, temp_dir: Path):
        """Test polling gives up after max_polls."""
        service = FakePdfServices(statuses=[{"status": "in progress"}])

        with pytest.raises(RenderError, match="did not finish after 3 polls"):
            await _renderer(service, max_polls=3).render("<html></html>", temp_dir / "doc.pdf")

    @pytest.mark.asyncio
    async def test_missing_location(self, temp_dir: Path):
        """Test a job without a polling location is an error."""
        service = FakePdfServices(location=None)

        with pytest.raises(RenderError, match="no polling location"):
            await _renderer(service).render("<html></html>", temp_dir / "doc.pdf")

    @pytest.mark.asyncio
    async def test_http_error_wrapped(self, temp_dir: Path):
        """Test transport errors become render errors."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        renderer = _renderer(FakePdfServices(), transport=httpx.MockTransport(handler))

        with pytest.raises(RenderError, match="connection refused") as exc_info:
            await renderer.render("<html></html>", temp_dir / "doc.pdf")

        assert isinstance(exc_info.value.cause, httpx.ConnectError)

    def test_cleanup_failure_is_logged(self):
        """Test a temp file that cannot be deleted is reported as a warning."""
        renderer = _renderer(FakePdfServices())
        temp_path = MagicMock(spec=Path)
        temp_path.unlink.side_effect = PermissionError("file in use")

        with capture_logs() as logs:
            renderer._cleanup(temp_path)

        assert logs[0]["log_level"] == "warning"
        assert logs[0]["event"] == "Failed to delete temporary file"
        assert "file in use" in logs[0]["error"]

    def test_from_settings_reads_environment(self, monkeypatch):
        """Test credentials come from the environment."""
        from pdfbatch.config.settings import PdfBatchSettings

        monkeypatch.setenv("PDF_SERVICES_CLIENT_ID", "env-id")
        monkeypatch.setenv("PDF_SERVICES_CLIENT_SECRET", "env-secret")

        renderer = AdobeRenderer.from_settings(PdfBatchSettings())

        assert renderer.client_id == "env-id"
        assert renderer.has_credentials is True
        assert renderer.api_base_url == "https://pdf-services.adobe.io"
