from typing import Optional
from datetime import datetime


class SlideLayoutError(Exception):
    """Base exception for all slide layout errors"""

    def __init__(
        self,
        message: str,
        component: str = "",
        error_type: str = "general",
        original_error: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.component = component
        self.error_type = error_type
        self.original_error = original_error
        self.timestamp = datetime.now()

    def __str__(self):
        return f"[{self.component}] {self.error_type}: {self.message}"


class OracleUnavailableError(SlideLayoutError):
    """Layout oracle cannot measure (e.g. font not loaded)"""

    def __init__(self, message: str, component: str = "oracle", **kwargs):
        kwargs.setdefault("error_type", "unavailable")
        super().__init__(message, component=component, **kwargs)


class ConfigurationError(SlideLayoutError):
    """Invalid pagination settings"""

    def __init__(self, message: str, component: str = "config", **kwargs):
        kwargs.setdefault("error_type", "invalid_setting")
        super().__init__(message, component=component, **kwargs)


class UnknownViewportError(SlideLayoutError, KeyError):
    """Viewport class name is not registered"""

    def __init__(self, name: str):
        super().__init__(
            f"Unknown viewport class: {name}",
            component="viewport",
            error_type="unknown_viewport",
        )
        self.name = name

    def __str__(self):
        return SlideLayoutError.__str__(self)
