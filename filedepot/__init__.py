"""Per-user file depot: an HTTP/JSON server and an interactive shell client."""

__version__ = "0.1.0"