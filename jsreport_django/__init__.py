"""
jsreport response filter for Django

Renders the HTML output of selected views on a jsreport server and serves
the resulting document (PDF, Excel, ...) in its place.
"""

from .options import RenderOptions, enable_jsreport, get_render_options
from .dto import Phantom, Template, RenderRequest, RenderResult
from .interfaces import IReportingService, ITemplateRenderer
from .middleware import JsReportMiddleware, skip_jsreport, set_render_request

__all__ = [
    'RenderOptions',
    'enable_jsreport',
    'get_render_options',
    'Phantom',
    'Template',
    'RenderRequest',
    'RenderResult',
    'IReportingService',
    'ITemplateRenderer',
    'JsReportMiddleware',
    'skip_jsreport',
    'set_render_request',
]
