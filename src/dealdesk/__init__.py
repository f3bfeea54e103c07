"""Dealdesk - wholesale real-estate marketplace rules and CLI."""

__version__ = "0.1.0"


# The CLI pulls in the database layer, so only load it on demand
def __getattr__(name):
    if name == "main":
        from dealdesk.cli.main import main

        return main
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
