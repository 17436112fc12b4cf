"""Instruction and tool sources sent alongside the bounded context."""

from typing import List, Optional, Sequence

from chatwidgets.schemas.completion import ToolDescriptor

DEFAULT_INSTRUCTIONS = """You are a helpful assistant in a chat interface that can render interactive widgets.

When a widget would help the user respond (choices, confirmations, inputs), include it after your text as:
<widget>{"type": "button", "label": "...", "action": "..."}</widget>

Supported widget types: button, card, input, dropdown, slider, toggle, datepicker, multiselect, form.
Each widget must be a single JSON object with a "type" field. Keep the surrounding text short and useful."""


class InstructionProvider:
    """Supplies the system instruction text."""

    def __init__(self, instructions: Optional[str] = DEFAULT_INSTRUCTIONS):
        self.instructions = instructions

    def get_instructions(self) -> Optional[str]:
        return self.instructions


class ToolsProvider:
    """Supplies the tool descriptors offered to the model."""

    def __init__(self, tools: Sequence[ToolDescriptor] = ()):
        self.tools = list(tools)

    def get_tools(self) -> List[ToolDescriptor]:
        return list(self.tools)
