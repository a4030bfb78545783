"""
System checks for the jsreport filter.
"""

from django.core.checks import Warning, register

from .conf import get_config


@register()
def check_jsreport_settings(app_configs, **kwargs):
    """Warn when rendering is enabled but no server URL is set."""
    config = get_config()
    if config['ENABLED'] and not config['URL']:
        return [
            Warning(
                "JSREPORT['URL'] is not configured.",
                hint="Set the base URL of your jsreport server, e.g. 'http://localhost:5488'.",
                id='jsreport_django.W001',
            )
        ]
    return []
