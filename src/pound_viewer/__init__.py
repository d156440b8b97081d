"""Read-only terminal file viewer with a minimal-scroll viewport."""

__all__ = [
    "actions",
    "adapters",
    "buffer",
    "keymaps",
    "render",
    "runtime",
    "session",
    "terminal",
    "viewport",
]

__version__ = "0.1.0"
