"""
Copies jsreport response metadata onto the live Django response.
"""

from typing import Dict, List

from django.http import HttpResponseBase

from .dto import RenderResult
from .options import RenderOptions


# Transport-level headers that must never be forwarded
EXCLUDED_HEADERS = {'connection', 'transfer-encoding'}


def _join(values: List[str]) -> str:
    return ';'.join(values)


def apply_report_headers(
    response: HttpResponseBase,
    options: RenderOptions,
    result: RenderResult,
) -> None:
    """
    Rewrite response headers and content type from a render result.

    Response-level headers are copied except Connection and
    Transfer-Encoding. Content-level headers are copied as well, but a
    configured content_disposition replaces the server's
    Content-Disposition. Multi-value headers are joined with ';'.

    Args:
        response: Live Django response
        options: Render options resolved for the view
        result: Result returned by the jsreport server
    """
    headers: Dict[str, List[str]] = result.headers or {}
    for name, values in headers.items():
        if name.lower() in EXCLUDED_HEADERS:
            continue
        response[name] = _join(values)

    disposition_set = False
    for name, values in (result.content_headers or {}).items():
        if options.content_disposition is not None and name.lower() == 'content-disposition':
            response[name] = options.content_disposition
            disposition_set = True
        else:
            response[name] = _join(values)

    if options.content_disposition is not None and not disposition_set:
        response['Content-Disposition'] = options.content_disposition

    response['Content-Type'] = result.content_type
