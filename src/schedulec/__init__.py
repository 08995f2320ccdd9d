"""Schedulec: business income and expense tracking with edit history."""

__version__ = "0.1.0"


# The CLI pulls in the whole stack, so it is only imported on request
def __getattr__(name):
    if name == "main":
        from schedulec.cli.main import main
        return main
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
