"""An HTTP service that serves coding problems from SQLite and judges C++ submissions in Docker."""

__version__ = "0.1.0"

__all__ = ["__version__"]