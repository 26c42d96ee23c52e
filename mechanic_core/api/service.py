"""对外 API 服务模块。

提供简化的函数接口供 HTTP 层或脚本调用；依赖的处理器按需创建（单例）。
"""

from typing import Any, Dict, Optional

from mechanic_core.config.settings import settings
from mechanic_core.handlers.chat_handler import ChatEndpointHandler, ChatResponseEnvelope
from mechanic_core.handlers.forms_handler import FormsHandler
from mechanic_core.infrastructure.storage.json_store import JsonSubmissionStore, JsonTranscriptStore
from mechanic_core.providers import create_provider
from mechanic_core.routing import ResponseRouter


_chat_handler: Optional[ChatEndpointHandler] = None
_forms_handler: Optional[FormsHandler] = None


def get_default_chat_handler() -> ChatEndpointHandler:
    """获取默认的聊天处理器实例（单例）。"""
    global _chat_handler
    if _chat_handler is None:
        _chat_handler = ChatEndpointHandler(
            router=ResponseRouter(),
            generator=create_provider(),
            store=JsonTranscriptStore(root=settings.storage_root),
        )
    return _chat_handler


def get_default_forms_handler() -> FormsHandler:
    """获取默认的表单处理器实例（单例）。"""
    global _forms_handler
    if _forms_handler is None:
        _forms_handler = FormsHandler(store=JsonSubmissionStore(root=settings.storage_root))
    return _forms_handler


def run_chat(body: Any) -> ChatResponseEnvelope:
    """处理一条聊天消息。

    Args:
        body: 请求体，形如 {"message": "..."}

    Returns:
        ChatResponseEnvelope(status_code, {"reply": ...})
    """
    return get_default_chat_handler().handle(body)


def health() -> Dict[str, str]:
    return {"status": "OK", "message": "Server is healthy."}
