"""Chat gateway: JWT-identified users open topics over HTTP and chat over WebSockets."""

__version__ = "0.1.0"
__all__ = ["app", "controller", "logger", "tokens", "users"]