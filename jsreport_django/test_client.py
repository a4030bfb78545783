"""
Tests for the jsreport HTTP client.
"""

import base64
import json

import httpx
import respx
from asgiref.sync import async_to_sync
from django.test import SimpleTestCase

from jsreport_django.client import ReportingService, split_headers
from jsreport_django.dto import RenderRequest, RenderResult, Template
from jsreport_django.exceptions import (
    JsReportError,
    ReportingAuthError,
    ReportingError,
    ReportingPermanentError,
    ReportingTemporaryError,
)


class SplitHeadersTestCase(SimpleTestCase):
    """Test cases for split_headers"""

    def test_content_headers_separated(self):
        """Test that entity headers go to the content set"""
        headers, content_headers = split_headers([
            (b'Content-Type', b'application/pdf'),
            (b'Content-Disposition', b'inline; filename=a.pdf'),
            (b'File-Extension', b'pdf'),
            (b'Connection', b'keep-alive'),
        ])

        self.assertEqual(headers, {'File-Extension': ['pdf'], 'Connection': ['keep-alive']})
        self.assertEqual(content_headers, {
            'Content-Type': ['application/pdf'],
            'Content-Disposition': ['inline; filename=a.pdf'],
        })

    def test_repeated_headers_grouped(self):
        """Test that repeated headers are collected case-insensitively"""
        headers, _ = split_headers([
            (b'Set-Cookie', b'a=1'),
            (b'set-cookie', b'b=2'),
        ])

        self.assertEqual(headers, {'Set-Cookie': ['a=1', 'b=2']})


class ReportingServiceTestCase(SimpleTestCase):
    """Test cases for ReportingService"""

    def setUp(self):
        self.router = respx.MockRouter(assert_all_called=False)
        self.router.start()
        self.addCleanup(self.router.stop)
        self.base_url = "http://jsreport.test"
        self.service = ReportingService(self.base_url, username='admin', password='secret', timeout=5.0)
        self.request = RenderRequest(template=Template(content='<html/>', recipe='phantom-pdf', engine='none'))

    def _render(self, payload=None):
        return async_to_sync(self.service.render)(payload or self.request)

    def test_successful_render(self):
        """Test that a successful render returns the document and headers"""
        self.router.post(f"{self.base_url}/api/report").mock(
            return_value=httpx.Response(
                200,
                content=b'%PDF-1.4 test',
                headers={
                    'Content-Type': 'application/pdf; charset=binary',
                    'Content-Disposition': 'inline; filename=report.pdf',
                    'File-Extension': 'pdf',
                },
            )
        )

        result = self._render()

        self.assertIsInstance(result, RenderResult)
        self.assertEqual(result.content, b'%PDF-1.4 test')
        self.assertEqual(result.content_type, 'application/pdf')
        self.assertEqual(result.file_extension, 'pdf')
        self.assertEqual(result.content_headers['Content-Disposition'], ['inline; filename=report.pdf'])

    def test_request_body_and_auth(self):
        """Test that the request is posted as JSON with basic auth"""
        route = self.router.post(f"{self.base_url}/api/report").mock(
            return_value=httpx.Response(200, content=b'%PDF', headers={'Content-Type': 'application/pdf'})
        )

        self._render()

        sent = route.calls.last.request
        self.assertEqual(json.loads(sent.content), {
            'template': {'content': '<html/>', 'recipe': 'phantom-pdf', 'engine': 'none'},
        })
        expected_auth = base64.b64encode(b'admin:secret').decode()
        self.assertEqual(sent.headers['Authorization'], f'Basic {expected_auth}')
        self.assertEqual(sent.headers['Accept-Encoding'], 'identity')

    def test_mapping_payload(self):
        """Test that dict payloads are sent as-is"""
        route = self.router.post(f"{self.base_url}/api/report").mock(
            return_value=httpx.Response(200, content=b'%PDF', headers={'Content-Type': 'application/pdf'})
        )

        self._render({'template': {'content': 'x', 'recipe': 'chrome-pdf'}, 'data': {'n': 1}})

        self.assertEqual(json.loads(route.calls.last.request.content), {
            'template': {'content': 'x', 'recipe': 'chrome-pdf'},
            'data': {'n': 1},
        })

    def test_no_auth_without_username(self):
        """Test that no Authorization header is sent without credentials"""
        route = self.router.post(f"{self.base_url}/api/report").mock(
            return_value=httpx.Response(200, content=b'%PDF', headers={'Content-Type': 'application/pdf'})
        )
        service = ReportingService(self.base_url)

        async_to_sync(service.render)(self.request)

        self.assertNotIn('Authorization', route.calls.last.request.headers)

    def test_base_url_with_path(self):
        """Test that a base URL with a path prefix is respected"""
        route = self.router.post("http://reports.test/jsreport/api/report").mock(
            return_value=httpx.Response(200, content=b'%PDF', headers={'Content-Type': 'application/pdf'})
        )
        service = ReportingService("http://reports.test/jsreport")

        async_to_sync(service.render)(self.request)

        self.assertTrue(route.called)

    def test_401_raises_auth_error(self):
        """Test that 401 raises ReportingAuthError"""
        self.router.post(f"{self.base_url}/api/report").mock(
            return_value=httpx.Response(401, text="Unauthorized")
        )

        with self.assertRaises(ReportingAuthError) as cm:
            self._render()

        self.assertIn("401", str(cm.exception))
        self.assertEqual(cm.exception.status_code, 401)
        self.assertNotIn("secret", str(cm.exception))

    def test_400_raises_permanent_error(self):
        """Test that 4xx raises ReportingPermanentError"""
        self.router.post(f"{self.base_url}/api/report").mock(
            return_value=httpx.Response(400, text="Recipe 'foo' not found")
        )

        with self.assertRaises(ReportingPermanentError) as cm:
            self._render()

        self.assertIn("Recipe 'foo' not found", str(cm.exception))

    def test_500_raises_temporary_error(self):
        """Test that 5xx raises ReportingTemporaryError after a single attempt"""
        route = self.router.post(f"{self.base_url}/api/report").mock(
            return_value=httpx.Response(500, text="Internal error")
        )

        with self.assertRaises(ReportingTemporaryError):
            self._render()

        self.assertEqual(route.call_count, 1)

    def test_timeout_raises_temporary_error(self):
        """Test that timeouts are mapped to ReportingTemporaryError"""
        self.router.post(f"{self.base_url}/api/report").mock(
            side_effect=httpx.ReadTimeout("timed out")
        )

        with self.assertRaises(ReportingTemporaryError):
            self._render()

    def test_connect_error_raises_temporary_error(self):
        """Test that connection errors are mapped to ReportingTemporaryError"""
        self.router.post(f"{self.base_url}/api/report").mock(
            side_effect=httpx.ConnectError("refused")
        )

        with self.assertRaises(ReportingTemporaryError):
            self._render()

    def test_long_error_response_truncated(self):
        """Test that error text is truncated"""
        self.router.post(f"{self.base_url}/api/report").mock(
            return_value=httpx.Response(422, text="x" * 2000)
        )

        with self.assertRaises(ReportingError) as cm:
            self._render()

        self.assertLess(len(str(cm.exception)), 600)
        self.assertTrue(str(cm.exception).endswith("..."))

    def test_errors_share_base_class(self):
        """Test that all reporting errors are JsReportErrors"""
        for exc in (ReportingAuthError("a"), ReportingPermanentError("b"), ReportingTemporaryError("c")):
            with self.subTest(exc=exc):
                self.assertIsInstance(exc, ReportingError)
                self.assertIsInstance(exc, JsReportError)
