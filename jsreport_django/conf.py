"""
Configuration for the jsreport filter.

Settings are read from the JSREPORT dict in Django settings:

    JSREPORT = {
        'URL': 'http://localhost:5488',
        'USERNAME': 'admin',
        'PASSWORD': 'secret',
        'TIMEOUT': 60.0,
    }
"""

from typing import Any, Dict

from django.conf import settings
from django.utils.module_loading import import_string

from .exceptions import ServiceDisabled, ServiceNotConfigured
from .interfaces import IReportingService


DEFAULTS: Dict[str, Any] = {
    'URL': None,
    'USERNAME': None,
    'PASSWORD': None,
    'TIMEOUT': 60.0,
    'ENABLED': True,
    'SERVICE_CLASS': 'jsreport_django.client.ReportingService',
}


def get_config() -> Dict[str, Any]:
    """
    Get the effective jsreport configuration.
    
    Returns:
        DEFAULTS updated with the JSREPORT setting
    """
    config = dict(DEFAULTS)
    config.update(getattr(settings, 'JSREPORT', None) or {})
    return config


def is_enabled() -> bool:
    """Check the global JSREPORT['ENABLED'] switch."""
    return bool(get_config()['ENABLED'])


def get_reporting_service() -> IReportingService:
    """
    Build the reporting service from settings.

    JsReportMiddleware checks is_enabled() before calling this, so
    ServiceDisabled only reaches code that calls it directly.

    Returns:
        IReportingService instance
        
    Raises:
        ServiceDisabled: If ENABLED is False
        ServiceNotConfigured: If no URL is configured
    """
    config = get_config()
    if not config['ENABLED']:
        raise ServiceDisabled("jsreport is disabled")
    if not config['URL']:
        raise ServiceNotConfigured("JSREPORT['URL'] is not configured")
    
    service_class = config['SERVICE_CLASS']
    if isinstance(service_class, str):
        service_class = import_string(service_class)
    
    return service_class(
        config['URL'],
        username=config['USERNAME'],
        password=config['PASSWORD'],
        timeout=config['TIMEOUT'],
    )
