"""聊天接口处理器。

串联 ResponseRouter -> GenerationClient -> TranscriptStore，
并把每种结果映射为统一的 {reply: ...} 响应信封。

每个请求至多调用一次生成服务、至多写一次聊天记录；
写记录失败只记日志，不影响已经确定的响应。
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional
from uuid import uuid4

import pydantic

from mechanic_core.config.settings import settings
from mechanic_core.domain.exceptions import GenerationError, ValidationError
from mechanic_core.domain.models import GenerationConfig, GenerationRequest
from mechanic_core.domain.payloads import ChatMessage
from mechanic_core.domain.transcript import TranscriptEntry, TranscriptStore
from mechanic_core.infrastructure.logging.logger import logger
from mechanic_core.prompts import MESSAGE_REQUIRED_REPLY, OUT_OF_DOMAIN_REPLY, generation_failure_reply
from mechanic_core.providers.base import GenerationClient
from mechanic_core.routing.router import Canned, Delegate, Reject, ResponseRouter


@dataclass
class ChatResponseEnvelope:
    status_code: int
    body: Any


def default_generation_config() -> GenerationConfig:
    return GenerationConfig(
        max_output_tokens=settings.generation_max_output_tokens,
        temperature=settings.generation_temperature,
        top_k=settings.generation_top_k,
    )


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ChatEndpointHandler:
    def __init__(
        self,
        router: ResponseRouter,
        generator: GenerationClient,
        store: TranscriptStore,
        generation_config: Optional[GenerationConfig] = None,
        model: Optional[str] = None,
        history_limit: Optional[int] = None,
        time_format: Optional[str] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._router = router
        self._generator = generator
        self._store = store
        self._generation_config = generation_config or default_generation_config()
        self._model = model or getattr(settings, "default_model", "chat-reply")
        self._history_limit = history_limit or settings.history_limit
        self._time_format = time_format or settings.history_time_format
        self._clock = clock

    def handle(self, raw_body: Any) -> ChatResponseEnvelope:
        """处理一次 POST /api/chat 请求。

        Args:
            raw_body: 已解析的 JSON 请求体（可能为 None 或任意类型）

        Returns:
            ChatResponseEnvelope，body 形如 {"reply": "..."}
        """
        log_ctx: Dict[str, Any] = {"trace_id": f"tr-{uuid4().hex}"}

        # 1. 校验
        try:
            message = self._extract_message(raw_body)
        except ValidationError as e:
            self._log(logging.INFO, "chat.invalid_request", log_ctx, code=e.code)
            return ChatResponseEnvelope(e.http_status, {"reply": e.message})

        # 2. 分类 + 路由
        decision = self._router.route(message)
        self._log(logging.INFO, "chat.routed", log_ctx, decision=decision.kind)

        if isinstance(decision, Reject):
            return ChatResponseEnvelope(200, {"reply": OUT_OF_DOMAIN_REPLY})
        if isinstance(decision, Canned):
            return ChatResponseEnvelope(200, {"reply": decision.response_text})
        if isinstance(decision, Delegate):
            return self._delegate(message, decision, log_ctx)
        raise TypeError(f"Unknown route decision: {decision!r}")

    def history(self) -> List[Dict[str, str]]:
        """最近的聊天记录，按时间倒序，格式化为 {user, bot, time}。"""

        entries = self._store.list_recent(self._history_limit)
        return [
            {
                "user": e.user_message,
                "bot": e.bot_response,
                "time": e.timestamp.astimezone().strftime(self._time_format),
            }
            for e in entries
        ]

    # ---- 内部步骤 ----

    @staticmethod
    def _extract_message(raw_body: Any) -> str:
        if isinstance(raw_body, dict):
            try:
                return ChatMessage.model_validate(raw_body).message
            except pydantic.ValidationError:
                pass
        raise ValidationError(code="MESSAGE_REQUIRED", message=MESSAGE_REQUIRED_REPLY)

    def _delegate(self, message: str, decision: Delegate, log_ctx: Dict[str, Any]) -> ChatResponseEnvelope:
        req = GenerationRequest(
            provider=self._generator.name,
            model=self._model,
            prompt=decision.prompt_text,
            config=self._generation_config,
        )
        try:
            result = self._generator.generate(req)
        except GenerationError as e:
            self._log(
                logging.ERROR,
                "chat.generation_failed",
                log_ctx,
                provider=self._generator.name,
                code=e.code,
                error=e.message,
            )
            return ChatResponseEnvelope(500, {"reply": generation_failure_reply(self._generator.display_name)})

        self._log(logging.INFO, "chat.ai_reply", log_ctx, provider=result.provider, reply=result.text)
        self._persist(
            TranscriptEntry(user_message=message, bot_response=result.text, timestamp=self._clock()),
            log_ctx,
        )
        return ChatResponseEnvelope(200, {"reply": result.text})

    def _persist(self, entry: TranscriptEntry, log_ctx: Dict[str, Any]) -> None:
        try:
            self._store.add_entry(entry)
        except Exception as e:
            self._log(logging.ERROR, "chat.persist_failed", log_ctx, error=str(e))

    @staticmethod
    def _log(level: int, message: str, log_ctx: Dict[str, Any], **fields: Any) -> None:
        payload = dict(log_ctx)
        payload.update(fields)
        logger.log(level, message, extra={"extra": payload})
