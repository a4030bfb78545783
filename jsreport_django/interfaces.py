"""
Interfaces for the jsreport filter

Defines the collaborators the filter depends on: the remote reporting
service and the template renderer used for headers and footers.
"""

from abc import ABC, abstractmethod
from typing import Optional

from .dto import RenderPayload, RenderResult


class IReportingService(ABC):
    """
    Interface for remote report rendering.
    
    Implementations send a render request to a reporting server and
    return the rendered document.
    """
    
    @abstractmethod
    async def render(self, payload: RenderPayload) -> RenderResult:
        """
        Render a report.
        
        Args:
            payload: RenderRequest or structurally copied request mapping
            
        Returns:
            RenderResult with output bytes and headers
            
        Raises:
            ReportingError: If the remote call fails
        """
        pass


class ITemplateRenderer(ABC):
    """
    Interface for rendering named templates to strings.
    """
    
    @abstractmethod
    def render(self, template_name: str, context: Optional[dict] = None) -> str:
        """
        Render a template.
        
        Args:
            template_name: Template name/path
            context: Optional template context
            
        Returns:
            Rendered text
            
        Raises:
            TemplateRenderError: If the template cannot be rendered
        """
        pass
