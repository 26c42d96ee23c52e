"""统一的生成请求与结果数据模型。

本模块定义了在不同 Provider 之间共享的标准数据结构：

- GenerationConfig: 输出长度、温度、top_k 等生成参数。
- GenerationRequest: 发给底层 LLM Provider 的完整请求。
- GenerationResult: 从 Provider 解析后的统一结果。

所有 Provider 适配器（如 GeminiClient）都只依赖这些模型，
并负责在各自的 API JSON 和这些模型之间做转换。
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class GenerationConfig:
    """生成参数，原样透传给 Provider，不在本地做范围校验。

    - max_output_tokens: 回复长度上限。
    - temperature: 随机性，取值范围由远端服务约束。
    - top_k: 候选词池大小；不支持该参数的 Provider 会忽略它。
    """

    max_output_tokens: Optional[int] = None
    temperature: Optional[float] = None
    top_k: Optional[int] = None


@dataclass
class GenerationRequest:
    """一次完整的生成请求。"""

    provider: str  # 逻辑 Provider 名，如 "gemini"
    model: str  # 逻辑模型名，如 "chat-reply"（再由 registry 映射为真实模型名）
    prompt: str
    config: GenerationConfig


@dataclass
class GenerationUsage:
    """Provider 返回的 token 统计信息（统一格式）。"""

    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


@dataclass
class GenerationResult:
    """一次生成调用的最终结果。

    - text: 第一个候选的文本（已去除首尾空白，必要时为兜底文案）。
    - usage: 可选的 token 使用统计。
    - raw: 原始响应 JSON，用于调试。
    """

    provider: str
    model: str
    text: str
    usage: Optional[GenerationUsage] = None
    raw: Optional[dict] = None
