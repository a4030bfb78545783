"""
Middleware that replaces rendered HTML with a jsreport document.

Add it to MIDDLEWARE and decorate views with enable_jsreport:

    MIDDLEWARE = [
        ...
        'jsreport_django.middleware.JsReportMiddleware',
    ]

Responses of decorated views are sent to the jsreport server and the
returned document (typically a PDF) is served instead, with the headers
and content type supplied by jsreport.

Views can pass a partially filled render request with
set_render_request(), or under the 'jsreport_render_request' key of a
TemplateResponse context. skip_jsreport() serves the HTML unchanged.
"""

import logging
from collections.abc import Mapping

from asgiref.sync import async_to_sync, sync_to_async
from django.forms import BaseForm
from django.forms.formsets import BaseFormSet
from django.utils.deprecation import MiddlewareMixin

from .builder import RenderRequestBuilder
from .conf import get_reporting_service, is_enabled
from .eligibility import FilterContext, should_use_jsreport
from .headers import apply_report_headers
from .options import get_render_options
from .renderers import DjangoTemplateRenderer
from .sanitizer import remove_browser_link
from .stream import JsReportStream


logger = logging.getLogger(__name__)


# Key under which views store a partial render request
RENDER_REQUEST_KEY = 'jsreport_render_request'

# Request attribute holding the FilterContext
CONTEXT_ATTRIBUTE = 'jsreport_context'


def _get_context(request) -> FilterContext:
    ctx = getattr(request, CONTEXT_ATTRIBUTE, None)
    if ctx is None:
        ctx = FilterContext()
        setattr(request, CONTEXT_ATTRIBUTE, ctx)
    return ctx


def skip_jsreport(request) -> None:
    """Serve this request's HTML response without jsreport rendering."""
    _get_context(request).canceled = True


def set_render_request(request, payload) -> None:
    """
    Store a partial render request for the current request.

    Args:
        request: The Django request object
        payload: RenderRequest or any object with a 'template' field
    """
    setattr(request, RENDER_REQUEST_KEY, payload)


def get_render_request(request, response=None):
    """
    Look up the partial render request supplied by the view.

    The request attribute wins over the TemplateResponse context.
    """
    payload = getattr(request, RENDER_REQUEST_KEY, None)
    if payload is None and response is not None:
        context_data = getattr(response, 'context_data', None)
        if isinstance(context_data, Mapping):
            payload = context_data.get(RENDER_REQUEST_KEY)
    return payload


def is_model_state_valid(response) -> bool:
    """
    Check submitted forms exposed in a TemplateResponse context.

    Returns:
        False if any bound form or formset failed validation, True otherwise
    """
    context_data = getattr(response, 'context_data', None)
    if not isinstance(context_data, Mapping):
        return True

    for value in context_data.values():
        if isinstance(value, (BaseForm, BaseFormSet)) and value.is_bound and not value.is_valid():
            return False
    return True


class ResponseSink:
    """Writes transformed output into a Django response."""

    def __init__(self, response):
        self.response = response

    def write(self, data: bytes) -> None:
        if self.response.streaming:
            self.response.streaming_content = [data]
        else:
            self.response.content = data
        if self.response.has_header('Content-Length'):
            self.response['Content-Length'] = str(len(data))


class JsReportMiddleware(MiddlewareMixin):
    """
    Renders responses of jsreport-enabled views on a jsreport server.

    Options declared on the view method (or function view) take precedence
    over options declared on the view class. Responses are never rendered
    if the view raised, called skip_jsreport(), or returned a form that
    failed validation.

    Remote and template errors propagate to Django's error handling; the
    HTML is not served as a fallback.
    """

    def process_view(self, request, view_func, view_args, view_kwargs):
        """Record the render options declared for the resolved view."""
        ctx = _get_context(request)

        view_class = getattr(view_func, 'view_class', None)
        if view_class is not None:
            ctx.group_options = get_render_options(view_class)
            method = request.method.lower()
            handler = None
            if method in view_class.http_method_names:
                handler = getattr(view_class, method, None)
                # View.setup() serves HEAD with get() when no head() exists
                if handler is None and method == 'head':
                    handler = getattr(view_class, 'get', None)
            ctx.handler_options = get_render_options(handler)
        else:
            ctx.handler_options = get_render_options(view_func)

        return None

    def process_exception(self, request, exception):
        """Remember unhandled view exceptions so the error page is not rendered."""
        _get_context(request).exception = exception
        return None

    def process_response(self, request, response):
        ctx = getattr(request, CONTEXT_ATTRIBUTE, None)
        if ctx is None or not is_enabled():
            return response

        ctx.model_state_valid = is_model_state_valid(response)
        options = should_use_jsreport(ctx)
        if options is None:
            logger.debug(f"jsreport not applied to {request.path}")
            return response

        return self._render_report(request, response, options)

    def _render_report(self, request, response, options):
        service = get_reporting_service()
        partial = get_render_request(request, response)
        builder = RenderRequestBuilder(DjangoTemplateRenderer(request))

        async def transform(html: str) -> bytes:
            content = remove_browser_link(html)
            payload = await sync_to_async(builder.build)(content, options, partial)
            result = await service.render(payload)
            apply_report_headers(response, options, result)
            logger.info(
                f"Rendered report for {request.path}: "
                f"{len(result)} bytes ({result.content_type}, "
                f"extension={result.file_extension}, status={result.status_code})"
            )
            return result.content

        stream = JsReportStream(ResponseSink(response), transform, charset=response.charset)
        self._drain(response, stream)
        async_to_sync(stream.close)()
        return response

    def _drain(self, response, stream: JsReportStream) -> None:
        """Feed the rendered body into the stream."""
        if not response.streaming:
            stream.write(response.content)
            return

        if getattr(response, 'is_async', False):
            async def consume():
                async for chunk in response.streaming_content:
                    stream.write(chunk)
            async_to_sync(consume)()
        else:
            for chunk in response.streaming_content:
                stream.write(chunk)
