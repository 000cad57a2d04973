from .header import app_header

__all__ = ["app_header"]
