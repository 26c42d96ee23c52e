from mechanic_core.handlers.chat_handler import ChatEndpointHandler, ChatResponseEnvelope
from mechanic_core.handlers.forms_handler import FormsHandler

__all__ = ["ChatEndpointHandler", "ChatResponseEnvelope", "FormsHandler"]
