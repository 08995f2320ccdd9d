"""Domain layer for schedulec application."""

# Services are imported lazily; the database layer imports domain entities
_SERVICES = {
    "BusinessService": "schedulec.domain.business",
    "ScheduleService": "schedulec.domain.schedule",
    "SummaryService": "schedulec.domain.summary",
    "ExportService": "schedulec.domain.export",
    "ModeController": "schedulec.domain.mode",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        import importlib

        return getattr(importlib.import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
