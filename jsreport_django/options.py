"""
Render options and the capability annotation.

Views opt into PDF rendering by declaring render options:

    @enable_jsreport(recipe='phantom-pdf', format='A4')
    def invoice(request, pk):
        ...

    @enable_jsreport(orientation='landscape')
    class ReportView(TemplateView):
        @enable_jsreport(format='pdf')
        def get(self, request, *args, **kwargs):
            ...

Options declared on a view class apply to all of its handlers. Options
declared on a handler replace the class-level options entirely.
"""

from dataclasses import dataclass
from typing import Any, Optional


# Attribute set on views by enable_jsreport
OPTIONS_ATTRIBUTE = 'jsreport_options'


@dataclass(frozen=True)
class RenderOptions:
    """
    Declarative rendering parameters for a view.

    All fields default to None (unset). Recipe and engine fall back to
    'phantom-pdf' and 'none' when the render request is built.
    """

    recipe: Optional[str] = None
    engine: Optional[str] = None
    margin: Optional[str] = None
    header_height: Optional[str] = None
    header_template: Optional[str] = None
    footer_height: Optional[str] = None
    footer_template: Optional[str] = None
    orientation: Optional[str] = None
    width: Optional[str] = None
    height: Optional[str] = None
    format: Optional[str] = None
    wait_for_js: Optional[bool] = None
    resource_timeout: Optional[int] = None
    block_javascript: Optional[bool] = None
    print_delay: Optional[int] = None
    content_disposition: Optional[str] = None


def enable_jsreport(**options):
    """
    Mark a view, view class or view method for jsreport rendering.

    Args:
        **options: RenderOptions field values

    Returns:
        Decorator attaching a RenderOptions instance to its target

    Raises:
        TypeError: If an unknown option name is given
    """
    render_options = RenderOptions(**options)

    def decorator(target):
        setattr(target, OPTIONS_ATTRIBUTE, render_options)
        return target

    return decorator


def get_render_options(target: Any) -> Optional[RenderOptions]:
    """
    Read the render options declared on a view, view class or method.

    Class-level declarations are inherited by subclasses.

    Returns:
        RenderOptions or None if the target declares none
    """
    if target is None:
        return None
    options = getattr(target, OPTIONS_ATTRIBUTE, None)
    return options if isinstance(options, RenderOptions) else None
