"""LLM Provider 集成层。

该包下的模块负责：
- 定义 GenerationClient 抽象接口 (base)。
- 维护 Provider 与模型配置 (registry)。
- 提供各厂商的具体实现 (gemini_client、openai_client)。
"""

from typing import Optional

from mechanic_core.config.settings import settings
from mechanic_core.providers.base import GenerationClient
from mechanic_core.providers.gemini_client import GeminiClient
from mechanic_core.providers.openai_client import OpenAIClient
from mechanic_core.providers.registry import get_provider_config


def create_provider(name: Optional[str] = None) -> GenerationClient:
    """根据名称创建 Provider 实例，默认取配置中的 provider。

    名称先经 registry 校验，未注册的 provider 直接抛出 KeyError。
    """

    provider_cfg = get_provider_config(name or getattr(settings, "default_provider", "gemini"))
    if provider_cfg.name == "openai":
        return OpenAIClient(settings)
    return GeminiClient(settings)
