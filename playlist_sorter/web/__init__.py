from .server import build_app, error_response

__all__ = ["build_app", "error_response"]
