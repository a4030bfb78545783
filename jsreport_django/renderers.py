"""
Django template renderer for report headers and footers.
"""

import logging
from typing import Optional

from django.template import TemplateDoesNotExist, TemplateSyntaxError
from django.template.loader import render_to_string

from .exceptions import TemplateRenderError
from .interfaces import ITemplateRenderer


logger = logging.getLogger(__name__)


class DjangoTemplateRenderer(ITemplateRenderer):
    """
    Renders templates with the Django template engine.
    
    The current request is passed to render_to_string so context
    processors run as they would for a full page.
    """
    
    def __init__(self, request=None):
        """
        Args:
            request: Optional current HttpRequest
        """
        self.request = request
    
    def render(self, template_name: str, context: Optional[dict] = None) -> str:
        """
        Render a template to a string.
        
        Raises:
            TemplateRenderError: If the template is missing or invalid
        """
        logger.debug(f"Rendering report template: {template_name}")
        try:
            return render_to_string(template_name, context or {}, request=self.request)
        except (TemplateDoesNotExist, TemplateSyntaxError) as e:
            raise TemplateRenderError(
                f"Failed to render template {template_name}: {e}",
                template_name=template_name,
            ) from e
