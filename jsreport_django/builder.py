"""
Render request builder.

Merges three sources into the request sent to jsreport, in order of
precedence:

1. a partial request supplied by the view (its content is never overwritten)
2. the render options declared on the view
3. the captured response body
"""

import dataclasses
import logging
from typing import Any, Dict, List, Optional
from collections.abc import Mapping

from .dto import Phantom, RenderPayload, RenderRequest, Template
from .interfaces import ITemplateRenderer
from .options import RenderOptions


logger = logging.getLogger(__name__)


DEFAULT_RECIPE = 'phantom-pdf'
DEFAULT_ENGINE = 'none'


def _public_field_names(obj: Any) -> List[str]:
    names = list(getattr(obj, '__dict__', {}))
    for klass in type(obj).__mro__:
        slots = vars(klass).get('__slots__', ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if hasattr(obj, name):
                names.append(name)
        for name, member in vars(klass).items():
            if isinstance(member, property):
                names.append(name)

    # Instance attributes come first; each name is copied once
    seen = set()
    result = []
    for name in names:
        if name.startswith('_') or name in seen:
            continue
        seen.add(name)
        result.append(name)
    return result


def to_mapping(obj: Any) -> Dict[str, Any]:
    """
    Shallow structural copy of an object into a dict.

    Field names are kept as-is (case-sensitive). Nested values are not
    copied. Plain objects contribute their public instance attributes,
    __slots__ entries and properties; an object with none of these copies
    to an empty dict.

    Args:
        obj: Mapping, dataclass, namedtuple or plain object

    Returns:
        New dict with the object's fields
    """
    if obj is None:
        return {}
    if isinstance(obj, Mapping):
        return dict(obj)
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: getattr(obj, f.name) for f in dataclasses.fields(obj)}
    if hasattr(obj, '_asdict'):
        return dict(obj._asdict())
    return {name: getattr(obj, name) for name in _public_field_names(obj)}


class RenderRequestBuilder:
    """
    Builds exactly one render request per intercepted response.

    Usage:
        builder = RenderRequestBuilder(DjangoTemplateRenderer(request))
        payload = builder.build(html, options, partial=None)
    """

    def __init__(self, template_renderer: Optional[ITemplateRenderer] = None):
        """
        Initialize the builder.

        Args:
            template_renderer: Renderer for header/footer templates. Required
                only when the options reference such templates.
        """
        self.template_renderer = template_renderer

    def build(
        self,
        html: str,
        options: RenderOptions,
        partial: Any = None,
    ) -> RenderPayload:
        """
        Build the render request.

        Args:
            html: Sanitized captured body
            options: Render options resolved for the view
            partial: Optional partial request supplied by the view

        Returns:
            RenderRequest, or a dict when the partial request has an
            unknown shape
        """
        if partial is None:
            return self._build_new(html, options)

        if isinstance(partial, RenderRequest):
            return self._merge_request(html, partial)

        logger.debug(f"Merging partial render request of type {type(partial).__name__}")
        return self._merge_mapping(html, partial)

    def _build_new(self, html: str, options: RenderOptions) -> RenderRequest:
        return RenderRequest(
            template=Template(
                content=html,
                recipe=options.recipe or DEFAULT_RECIPE,
                engine=options.engine or DEFAULT_ENGINE,
                phantom=Phantom(
                    margin=options.margin,
                    header_height=options.header_height,
                    header=self._render_template(options.header_template),
                    footer_height=options.footer_height,
                    footer=self._render_template(options.footer_template),
                    orientation=options.orientation,
                    width=options.width,
                    height=options.height,
                    format=options.format,
                    wait_for_js=options.wait_for_js,
                    resource_timeout=options.resource_timeout,
                    block_javascript=options.block_javascript,
                    print_delay=options.print_delay,
                ),
            )
        )

    def _merge_request(self, html: str, partial: RenderRequest) -> RenderRequest:
        template = partial.template or Template()
        if not template.content:
            template = dataclasses.replace(template, content=html)
        return dataclasses.replace(partial, template=template)

    def _merge_mapping(self, html: str, partial: Any) -> Dict[str, Any]:
        request = to_mapping(partial)
        template = to_mapping(request.get('template'))
        if not template.get('content'):
            template['content'] = html
        request['template'] = template
        return request

    def _render_template(self, template_name: Optional[str]) -> Optional[str]:
        if not template_name:
            return None
        if self.template_renderer is None:
            raise ValueError(
                f"Template '{template_name}' is configured but no template renderer is available"
            )
        return self.template_renderer.render(template_name)
