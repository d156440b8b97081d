"""Context and result types shared by every action handler."""

from __future__ import annotations

from dataclasses import dataclass

from pound_viewer.buffer import Document
from pound_viewer.viewport import ViewportState


@dataclass(slots=True)
class ActionContext:
    """Services an action may touch: the document and its viewport."""

    document: Document
    viewport: ViewportState


@dataclass(slots=True)
class ActionResult:
    """Result returned from an action handler."""

    terminate: bool = False
    status: str = "ok"
