"""Snapshot decoding, decoration, highlighting and session state."""

from .decoder import decode, render_snapshot
from .decorate import decode_color, decorate
from .errors import (
    ArborviewError,
    InputValidationError,
    InvalidValue,
    MalformedSnapshot,
    NoTreeSelected,
    TransportFailure,
)
from .highlight import highlight
from .session import Display, SessionManager, SessionState, parse_value
from .types import (
    NodeColor,
    NodeRecord,
    ResultBanner,
    TreeHandle,
    TreeSnapshot,
    TreeVariant,
    VisualNode,
)

__all__ = [
    "ArborviewError",
    "Display",
    "InputValidationError",
    "InvalidValue",
    "MalformedSnapshot",
    "NoTreeSelected",
    "NodeColor",
    "NodeRecord",
    "ResultBanner",
    "SessionManager",
    "SessionState",
    "TransportFailure",
    "TreeHandle",
    "TreeSnapshot",
    "TreeVariant",
    "VisualNode",
    "decode",
    "decode_color",
    "decorate",
    "highlight",
    "parse_value",
    "render_snapshot",
]
