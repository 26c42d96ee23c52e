"""ApnaMechanic 后端核心包。

该包提供汽车问答聊天接口的核心实现，
包括配置加载、关键词分类与回复路由、Provider 适配、
聊天记录与表单的持久化存储，以及 HTTP 层。
"""

from mechanic_core.handlers import ChatEndpointHandler, FormsHandler
from mechanic_core.routing import KeywordClassifier, ResponseRouter

__all__ = ["ChatEndpointHandler", "FormsHandler", "KeywordClassifier", "ResponseRouter"]
