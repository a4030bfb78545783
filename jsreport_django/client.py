"""
HTTP client for the jsreport server.

Sends render requests to POST /api/report and maps the reply to a
RenderResult.

Logging Guidelines:
- Logs method + host + path (no credentials)
- On errors: status code + truncated response (max 500 chars)
- Never logs Authorization headers

A single attempt is made per render; timeouts and connection errors are
raised as ReportingTemporaryError.
"""

import logging
from typing import Dict, List, Optional, Tuple
from urllib.parse import urljoin, urlparse

import httpx

from .dto import RenderPayload, RenderResult, to_jsonable
from .exceptions import (
    ReportingAuthError,
    ReportingPermanentError,
    ReportingTemporaryError,
)
from .interfaces import IReportingService


logger = logging.getLogger(__name__)

# Maximum response text length to include in error messages
MAX_ERROR_RESPONSE_LENGTH = 500

REPORT_PATH = 'api/report'

# Headers that describe the entity rather than the response
CONTENT_HEADERS = {
    'allow',
    'content-disposition',
    'content-encoding',
    'content-language',
    'content-length',
    'content-location',
    'content-md5',
    'content-range',
    'content-type',
    'expires',
    'last-modified',
}


def split_headers(
    raw_headers: List[Tuple[bytes, bytes]],
) -> Tuple[Dict[str, List[str]], Dict[str, List[str]]]:
    """
    Group raw headers into response-level and content-level sets.

    Header names keep the casing sent by the server; repeated headers are
    collected into one list.

    Args:
        raw_headers: (name, value) byte pairs

    Returns:
        Tuple of (response headers, content headers)
    """
    headers: Dict[str, List[str]] = {}
    content_headers: Dict[str, List[str]] = {}
    for raw_name, raw_value in raw_headers:
        name = raw_name.decode('latin-1')
        value = raw_value.decode('latin-1')
        target = content_headers if name.lower() in CONTENT_HEADERS else headers
        for existing in target:
            if existing.lower() == name.lower():
                target[existing].append(value)
                break
        else:
            target[name] = [value]
    return headers, content_headers


class ReportingService(IReportingService):
    """
    Reporting service backed by a jsreport server.

    Usage:
        service = ReportingService('http://localhost:5488', username='admin', password='...')
        result = await service.render(render_request)
    """

    def __init__(
        self,
        base_url: str,
        username: Optional[str] = None,
        password: Optional[str] = None,
        timeout: float = 60.0,
        headers: Optional[Dict[str, str]] = None,
    ):
        """
        Initialize the service.

        Args:
            base_url: Base URL of the jsreport server
            username: Optional basic auth user name
            password: Optional basic auth password
            timeout: Request timeout in seconds
            headers: Additional headers to include in every request
        """
        self.base_url = base_url if base_url.endswith('/') else base_url + '/'
        self.username = username
        self.password = password
        self.timeout = timeout
        self.default_headers = headers or {}

    def _build_url(self, path: str) -> str:
        """Build full URL from base URL and path."""
        return urljoin(self.base_url, path.lstrip('/'))

    def _truncate_response(self, text: str) -> str:
        if len(text) > MAX_ERROR_RESPONSE_LENGTH:
            return text[:MAX_ERROR_RESPONSE_LENGTH] + "..."
        return text

    def _handle_response_error(self, response: httpx.Response):
        """
        Map HTTP errors to reporting exceptions.

        - 401/403 → ReportingAuthError
        - 5xx → ReportingTemporaryError
        - other 4xx → ReportingPermanentError

        Raises:
            ReportingAuthError: For 401/403 errors
            ReportingTemporaryError: For 5xx errors
            ReportingPermanentError: For other 4xx errors
        """
        status = response.status_code
        truncated_text = self._truncate_response(response.text)

        logger.error(f"jsreport returned HTTP {status}: {truncated_text}")

        if status in (401, 403):
            raise ReportingAuthError(
                f"Authentication failed (HTTP {status}): {truncated_text}",
                status_code=status,
            )

        if status >= 500:
            raise ReportingTemporaryError(
                f"Server error (HTTP {status}): {truncated_text}",
                status_code=status,
            )

        raise ReportingPermanentError(
            f"Client error (HTTP {status}): {truncated_text}",
            status_code=status,
        )

    async def render(self, payload: RenderPayload) -> RenderResult:
        """
        Render a report on the jsreport server.

        Args:
            payload: RenderRequest or request mapping

        Returns:
            RenderResult with the rendered document

        Raises:
            ReportingError: On HTTP errors, timeouts or connection issues
        """
        url = self._build_url(REPORT_PATH)
        parsed = urlparse(url)

        # Identity encoding keeps forwarded Content-Length/Encoding accurate
        request_headers = {
            **self.default_headers,
            'Accept-Encoding': 'identity',
        }
        auth = None
        if self.username:
            auth = httpx.BasicAuth(self.username, self.password or '')

        logger.debug(f"POST {parsed.scheme}://{parsed.netloc}{parsed.path}")

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    url,
                    json=to_jsonable(payload),
                    headers=request_headers,
                    auth=auth,
                )
        except httpx.TimeoutException as e:
            raise ReportingTemporaryError(f"Request to jsreport timed out: {e}") from e
        except httpx.TransportError as e:
            raise ReportingTemporaryError(f"Could not reach jsreport: {e}") from e

        if response.status_code >= 400:
            self._handle_response_error(response)

        headers, content_headers = split_headers(response.headers.raw)
        content_type = response.headers.get('content-type', 'application/octet-stream')

        return RenderResult(
            content=response.content,
            content_type=content_type.split(';')[0].strip(),
            headers=headers,
            content_headers=content_headers,
            status_code=response.status_code,
        )
