"""Personal book library: FastAPI service and terminal client."""

__version__ = "1.0.0"
