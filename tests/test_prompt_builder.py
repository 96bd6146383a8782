from odoo_assistant.schemas import ChatTurn
from odoo_assistant.services.prompt_builder import (
    ODOO_SYSTEM_PROMPT,
    build_messages,
    extend_history,
)


def test_build_messages_appends_user_turn() -> None:
    history = [ChatTurn.from_text("user", "Hi"), ChatTurn.from_text("model", "Hello")]

    messages = build_messages(history, "Create a res.partner extension")

    assert messages == [
        {"role": "user", "parts": [{"text": "Hi"}]},
        {"role": "model", "parts": [{"text": "Hello"}]},
        {"role": "user", "parts": [{"text": "Create a res.partner extension"}]},
    ]


def test_extend_history_leaves_input_untouched() -> None:
    history = [ChatTurn.from_text("user", "Hi")]

    extended = extend_history(history, "Create a model", "Here is the code")

    assert len(history) == 1
    assert [turn.role for turn in extended] == ["user", "user", "model"]
    assert extended[-2].parts[0].text == "Create a model"
    assert extended[-1].parts[0].text == "Here is the code"


def test_system_prompt_describes_odoo_persona() -> None:
    assert ODOO_SYSTEM_PROMPT.startswith("You are an expert Odoo module developer")
    assert "Odoo 18" in ODOO_SYSTEM_PROMPT
