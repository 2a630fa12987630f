"""Domain models"""

from .lead import Lead, UserSegment
from .phone import NormalizedPhone
from .call import CallStatus, CallStatusEvent, CallSession, TERMINAL_STATUSES
from .tools import ToolParameter, ParameterLocation, LocalTool, RemoteTool, ToolSpec
from .tagging import TagAction, TagResult

__all__ = [
    "Lead",
    "UserSegment",
    "NormalizedPhone",
    "CallStatus",
    "CallStatusEvent",
    "CallSession",
    "TERMINAL_STATUSES",
    "ToolParameter",
    "ParameterLocation",
    "LocalTool",
    "RemoteTool",
    "ToolSpec",
    "TagAction",
    "TagResult",
]
