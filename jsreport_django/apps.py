from django.apps import AppConfig


class JsReportDjangoConfig(AppConfig):
    name = 'jsreport_django'
    verbose_name = 'jsreport'
    
    def ready(self):
        """Register system checks."""
        from . import checks  # noqa: F401
