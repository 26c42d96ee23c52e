"""OpenAI Provider 适配器。

使用 chat/completions 端点：
- URL: {base_url}/chat/completions
- 认证: Authorization: Bearer <api_key>

提示词作为单条 user 消息发送；max_output_tokens / temperature 映射为
max_tokens / temperature，chat/completions 没有 top_k 参数，因此忽略。
响应取 choices[0].message.content。
"""

from typing import Any, Dict, Optional

import httpx

from mechanic_core.config.settings import settings
from mechanic_core.domain.exceptions import MalformedResponseError, MissingApiKeyError, NetworkError
from mechanic_core.domain.models import GenerationRequest, GenerationResult, GenerationUsage
from mechanic_core.providers.base import check_response, parse_or_malformed, reply_or_fallback, resolve_model
from mechanic_core.providers.registry import OPENAI_CONFIG, ModelConfig


class OpenAIClient:
    """OpenAI 提供方客户端实现。"""

    name = "openai"
    display_name = OPENAI_CONFIG.display_name

    def __init__(self, cfg=settings):
        self._settings = cfg

    def generate(self, req: GenerationRequest) -> GenerationResult:
        api_key = getattr(self._settings, "openai_api_key", None)
        if not api_key:
            raise MissingApiKeyError(code="MISSING_API_KEY", message="OPENAI_API_KEY not set")
        model_cfg = resolve_model(OPENAI_CONFIG, req.model)
        payload = self._build_payload(req, model_cfg)
        try:
            with httpx.Client(timeout=self._settings.http_timeout, trust_env=False) as client:
                base = getattr(self._settings, "openai_base_url", None) or OPENAI_CONFIG.base_url
                resp = client.post(
                    f"{base}/chat/completions",
                    json=payload,
                    headers={
                        "Authorization": f"Bearer {api_key}",
                        "Content-Type": "application/json",
                    },
                )
        except httpx.RequestError as e:
            raise NetworkError(code="NETWORK_ERROR", message=str(e), provider=self.name)
        data = check_response(resp, self.name)
        return parse_or_malformed(lambda: self._parse_response(data, model_cfg), self.name)

    def _build_payload(self, req: GenerationRequest, model_cfg: ModelConfig) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "model": model_cfg.provider_model,
            "messages": [{"role": "user", "content": req.prompt}],
        }
        if req.config.max_output_tokens is not None:
            payload["max_tokens"] = req.config.max_output_tokens
        if req.config.temperature is not None:
            payload["temperature"] = req.config.temperature
        return payload

    def _parse_response(self, data: dict, model_cfg: ModelConfig) -> GenerationResult:
        choices = data.get("choices") or []
        if not isinstance(choices, list):
            raise MalformedResponseError(
                code="MALFORMED_RESPONSE", message="choices is not a list", provider=self.name
            )
        text: Optional[str] = None
        if choices and isinstance(choices[0], dict):
            text = (choices[0].get("message") or {}).get("content")
        usage_raw = data.get("usage") or {}
        usage = None
        if usage_raw:
            usage = GenerationUsage(
                prompt_tokens=usage_raw.get("prompt_tokens", 0),
                completion_tokens=usage_raw.get("completion_tokens", 0),
                total_tokens=usage_raw.get("total_tokens", 0),
            )
        return GenerationResult(
            provider=self.name,
            model=model_cfg.provider_model,
            text=reply_or_fallback(text),
            usage=usage,
            raw=data,
        )
