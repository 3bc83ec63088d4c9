"""Length-prefixed TCP echo client and server, and media player control logic."""

__version__ = "0.1.0"
__all__ = ["client", "player", "protocol", "server", "slider"]