"""Shapes exchanged with the completion capability."""

from typing import Any, Dict, List

from pydantic import BaseModel, Field


class ToolDescriptor(BaseModel):
    """A function tool the model may invoke."""

    name: str
    description: str = ""
    parameters: Dict[str, Any] = Field(
        default_factory=lambda: {"type": "object", "properties": {}}
    )

    def to_openai_tool(self) -> Dict[str, Any]:
        """Render as an OpenAI function-tool dictionary."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }


class ToolCall(BaseModel):
    """A tool invocation directive returned by the model."""

    name: str
    arguments: Dict[str, Any] = Field(default_factory=dict)


class CompletionResponse(BaseModel):
    """Response text plus any tool invocation directives."""

    text: str = ""
    tool_calls: List[ToolCall] = Field(default_factory=list)
