"""Portfolio and freelance-services content API."""

from .api.app import create_app
from .core.settings import Settings

__all__ = ["Settings", "create_app"]
