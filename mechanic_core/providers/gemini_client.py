"""Gemini Provider 适配器。

使用 Generative Language REST API：
- URL: {base_url}/models/{model}:generateContent
- 认证: x-goog-api-key: <api_key>

请求体为 contents/parts 结构，生成参数放在 generationConfig 中
（maxOutputTokens / temperature / topK）。
响应取 candidates[0].content.parts[0].text。
"""

from typing import Any, Dict, Optional

import httpx

from mechanic_core.config.settings import settings
from mechanic_core.domain.exceptions import MalformedResponseError, MissingApiKeyError, NetworkError
from mechanic_core.domain.models import GenerationConfig, GenerationRequest, GenerationResult, GenerationUsage
from mechanic_core.providers.base import check_response, parse_or_malformed, reply_or_fallback, resolve_model
from mechanic_core.providers.registry import GEMINI_CONFIG, ModelConfig


class GeminiClient:
    """Gemini Provider 客户端实现。"""

    name = "gemini"
    display_name = GEMINI_CONFIG.display_name

    def __init__(self, cfg=settings):
        self._settings = cfg

    def generate(self, req: GenerationRequest) -> GenerationResult:
        api_key = getattr(self._settings, "gemini_api_key", None)
        if not api_key:
            raise MissingApiKeyError(code="MISSING_API_KEY", message="GEMINI_API_KEY not set")
        model_cfg = resolve_model(GEMINI_CONFIG, req.model)
        payload = self._build_payload(req)
        try:
            with httpx.Client(timeout=self._settings.http_timeout, trust_env=False) as client:
                base = getattr(self._settings, "gemini_base_url", None) or GEMINI_CONFIG.base_url
                resp = client.post(
                    f"{base}/models/{model_cfg.provider_model}:generateContent",
                    json=payload,
                    headers={
                        "x-goog-api-key": api_key,
                        "Content-Type": "application/json",
                    },
                )
        except httpx.RequestError as e:
            raise NetworkError(code="NETWORK_ERROR", message=str(e), provider=self.name)
        data = check_response(resp, self.name)
        return parse_or_malformed(lambda: self._parse_response(data, req, model_cfg), self.name)

    # ---- 辅助方法 ----

    def _build_payload(self, req: GenerationRequest) -> Dict[str, Any]:
        return {
            "contents": [{"role": "user", "parts": [{"text": req.prompt}]}],
            "generationConfig": self._generation_config(req.config),
        }

    @staticmethod
    def _generation_config(config: GenerationConfig) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        if config.max_output_tokens is not None:
            out["maxOutputTokens"] = config.max_output_tokens
        if config.temperature is not None:
            out["temperature"] = config.temperature
        if config.top_k is not None:
            out["topK"] = config.top_k
        return out

    def _parse_response(self, data: dict, req: GenerationRequest, model_cfg: ModelConfig) -> GenerationResult:
        candidates = data.get("candidates") or []
        if not isinstance(candidates, list):
            raise MalformedResponseError(
                code="MALFORMED_RESPONSE", message="candidates is not a list", provider=self.name
            )
        text = self._first_text(candidates[0]) if candidates else None
        usage_raw = data.get("usageMetadata") or {}
        usage = None
        if usage_raw:
            usage = GenerationUsage(
                prompt_tokens=usage_raw.get("promptTokenCount", 0),
                completion_tokens=usage_raw.get("candidatesTokenCount", 0),
                total_tokens=usage_raw.get("totalTokenCount", 0),
            )
        return GenerationResult(
            provider=self.name,
            model=model_cfg.provider_model,
            text=reply_or_fallback(text),
            usage=usage,
            raw=data,
        )

    @staticmethod
    def _first_text(candidate: Any) -> Optional[str]:
        if not isinstance(candidate, dict):
            return None
        parts = (candidate.get("content") or {}).get("parts") or []
        if not parts or not isinstance(parts[0], dict):
            return None
        return parts[0].get("text")
