from pydantic import BaseModel, ConfigDict
from typing import List, Dict, Any, Optional
from enum import Enum


class ChatRole(str, Enum):
    """Chat message roles."""
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


class FunctionCall(BaseModel):
    """Function invocation requested by the model."""
    name: Optional[str] = None
    arguments: Optional[str] = None


class ToolCall(BaseModel):
    """Tool call entry; in stream deltas only ``index`` is guaranteed."""
    index: Optional[int] = None
    id: Optional[str] = None
    type: Optional[str] = None
    function: Optional[FunctionCall] = None


class ChatMessage(BaseModel):
    """Message sent to or received from the chat endpoint."""

    model_config = ConfigDict(use_enum_values=True)

    role: ChatRole
    content: Optional[str] = None
    name: Optional[str] = None
    tool_calls: Optional[List[ToolCall]] = None
    tool_call_id: Optional[str] = None


class ChatTool(BaseModel):
    """Tool definition offered to the model."""
    type: str = "function"
    function: Dict[str, Any]
