"""
Decides whether a response should be rendered by jsreport.
"""

from dataclasses import dataclass
from typing import Optional

from .options import RenderOptions


@dataclass
class FilterContext:
    """
    Per-request state consulted before intercepting a response.

    Attributes:
        exception: Exception raised by the view, if any
        exception_handled: True if another handler already dealt with it
        canceled: True if the view opted out of rendering
        model_state_valid: False if submitted form data failed validation
        group_options: Options declared on the view class
        handler_options: Options declared on the view function or method
    """

    exception: Optional[BaseException] = None
    exception_handled: bool = False
    canceled: bool = False
    model_state_valid: bool = True
    group_options: Optional[RenderOptions] = None
    handler_options: Optional[RenderOptions] = None


def should_use_jsreport(ctx: FilterContext) -> Optional[RenderOptions]:
    """
    Resolve the render options for a request, or None if not eligible.

    Requests with an unhandled exception, a cancellation or invalid model
    state are never intercepted. Handler-level options replace group-level
    options as a whole; fields are not merged.

    Args:
        ctx: Filter context for the current request

    Returns:
        RenderOptions to use, or None
    """
    if (ctx.exception is not None and not ctx.exception_handled) or ctx.canceled:
        return None

    if not ctx.model_state_valid:
        return None

    options = None
    if ctx.group_options is not None:
        options = ctx.group_options
    if ctx.handler_options is not None:
        options = ctx.handler_options

    return options
