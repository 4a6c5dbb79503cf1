"""HTTP services for the team calendar."""

from .server import app, download_export, invoke_api_function, list_api_functions, run_local_server

__all__ = [
    "app",
    "download_export",
    "invoke_api_function",
    "list_api_functions",
    "run_local_server",
]
