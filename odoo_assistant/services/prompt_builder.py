# odoo_assistant/services/prompt_builder.py
from typing import Any, Dict, List, Sequence

from odoo_assistant.schemas import ChatTurn

# Attached unchanged to every provider call; never formatted with user input.
ODOO_SYSTEM_PROMPT = """You are an expert Odoo module developer and consultant. Your role is to help users:
1. Write Odoo modules and custom features
2. Understand Odoo architecture and best practices
3. Generate Python code following Odoo conventions
4. Explain Odoo model relationships, views, and workflows
5. Provide documentation and deployment guidance

Always:
- Follow Odoo 18 coding standards
- Provide complete, working code examples
- Include docstrings and comments
- Suggest security best practices
- Warn about common pitfalls"""


def build_messages(history: Sequence[ChatTurn], message: str) -> List[Dict[str, Any]]:
    """
    Builds the provider message list: the caller's history followed by
    the new user turn, as plain dicts the Gemini SDK accepts.
    """
    turns = list(history) + [ChatTurn.from_text("user", message)]
    return [turn.model_dump() for turn in turns]


def extend_history(history: Sequence[ChatTurn], message: str, reply: str) -> List[ChatTurn]:
    """Returns a new history with the user turn and the model reply appended."""
    return list(history) + [
        ChatTurn.from_text("user", message),
        ChatTurn.from_text("model", reply),
    ]
