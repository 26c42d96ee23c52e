"""Provider 抽象接口。

聊天处理器不直接依赖具体厂商的 HTTP API，而是依赖此协议：

- 每个厂商实现一个 GenerationClient（如 GeminiClient、OpenAIClient）。
- 负责：将 GenerationRequest 转成具体 API 请求，并把响应 JSON 解析为 GenerationResult。
- 任何失败都以 GenerationError 的子类抛出。

这样可以在不改处理器代码的前提下切换厂商。
"""

from typing import Any, Callable, Optional, Protocol

import httpx

from mechanic_core.domain.exceptions import (
    ApiError,
    AuthenticationError,
    MalformedResponseError,
    RateLimitError,
    UnknownModelError,
)
from mechanic_core.domain.models import GenerationRequest, GenerationResult
from mechanic_core.prompts import EMPTY_GENERATION_REPLY
from mechanic_core.providers.registry import ModelConfig, ProviderConfig


class GenerationClient(Protocol):
    """LLM Provider 客户端协议。

    实现者需要提供：
    - name: Provider 名称，用于日志。
    - display_name: 面向用户的服务名称。
    - generate(req): 执行一次生成调用，返回统一的 GenerationResult。
    """

    name: str
    display_name: str

    def generate(self, req: GenerationRequest) -> GenerationResult:
        ...


def reply_or_fallback(text: Optional[str]) -> str:
    """取候选文本并去除首尾空白；没有内容时返回兜底文案。"""

    if isinstance(text, str) and text.strip():
        return text.strip()
    return EMPTY_GENERATION_REPLY


def check_response(resp: httpx.Response, provider: str) -> Any:
    """把 HTTP 状态码映射为统一异常，成功时返回解析后的 JSON。"""

    if resp.status_code in (401, 403):
        raise AuthenticationError(
            code="AUTH_ERROR",
            message=f"{provider} rejected credentials",
            provider=provider,
            status=resp.status_code,
        )
    if resp.status_code == 429:
        raise RateLimitError(code="RATE_LIMIT", message=f"{provider} rate limit", provider=provider)
    if resp.status_code >= 400:
        raise ApiError(code="API_ERROR", message=resp.text, provider=provider, status=resp.status_code)
    try:
        data = resp.json()
    except ValueError as e:
        raise MalformedResponseError(code="MALFORMED_RESPONSE", message=str(e), provider=provider)
    if not isinstance(data, dict):
        raise MalformedResponseError(
            code="MALFORMED_RESPONSE",
            message=f"unexpected body type {type(data).__name__}",
            provider=provider,
        )
    return data


def resolve_model(provider_cfg: ProviderConfig, logical_name: str) -> ModelConfig:
    """逻辑模型名 -> ModelConfig；未配置的名称按生成失败处理。"""

    try:
        return provider_cfg.models[logical_name]
    except KeyError:
        raise UnknownModelError(
            code="UNKNOWN_MODEL",
            message=f"{provider_cfg.name} has no model {logical_name!r}",
            provider=provider_cfg.name,
        )


def parse_or_malformed(parse: Callable[[], GenerationResult], provider: str) -> GenerationResult:
    """执行响应解析；嵌套字段类型不符时统一转为 MalformedResponseError。"""

    try:
        return parse()
    except (AttributeError, KeyError, TypeError, IndexError) as e:
        raise MalformedResponseError(
            code="MALFORMED_RESPONSE",
            message=f"unexpected response shape: {e!r}",
            provider=provider,
        )
