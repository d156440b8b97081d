"""Frame buffer and renderer."""

from .frame import FrameBuffer, FrameSink
from .renderer import (
    PLACEHOLDER,
    WELCOME_TITLE,
    FrameRenderer,
    visible_slice,
    welcome_banner,
)

__all__ = [
    "FrameBuffer",
    "FrameRenderer",
    "FrameSink",
    "PLACEHOLDER",
    "WELCOME_TITLE",
    "visible_slice",
    "welcome_banner",
]
