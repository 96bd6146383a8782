# odoo_assistant/errors.py


class RelayError(Exception):
    """Base error for the chat relay.

    `public_message` is the only text sent back to the caller; anything
    passed to the constructor stays in the server logs.
    """

    status_code = 500
    public_message = "Failed to generate response"


class MissingField(RelayError):
    status_code = 400
    public_message = "Message is required"


class InvalidRequest(RelayError):
    status_code = 400
    public_message = "Invalid request body"


class InvalidHistory(InvalidRequest):
    """A conversationHistory entry does not have the ChatTurn shape."""

    public_message = "Invalid conversation history"


class HistoryTooLong(InvalidRequest):
    public_message = "Conversation history is too long"


class ProviderError(RelayError):
    """The text-generation call failed (network, auth, quota, blocked output...)."""


class StartupConfigError(RuntimeError):
    """Required configuration is missing; the process must not start serving."""
