"""关键词分类器。

对一条消息做两次大小写无关的子串匹配：
- 是否与汽车/维修领域相关（domain 关键词）；
- 是否表达了找技师/预约维修的意图（service 关键词）。

两次判断互不依赖，分类器本身无状态，可并发调用。
"""

from dataclasses import dataclass
from typing import FrozenSet, Iterable, Optional

from mechanic_core.config.settings import settings


@dataclass(frozen=True)
class KeywordSets:
    """不可变的关键词配置，在构造分类器时注入。"""

    domain: FrozenSet[str]
    service: FrozenSet[str]

    @classmethod
    def from_lists(cls, domain: Iterable[str], service: Iterable[str]) -> "KeywordSets":
        return cls(
            domain=frozenset(k.lower() for k in domain if k),
            service=frozenset(k.lower() for k in service if k),
        )


@dataclass(frozen=True)
class ClassificationResult:
    is_domain_relevant: bool
    needs_service_intent: bool


def _contains_any(text: str, keywords: FrozenSet[str]) -> bool:
    return any(keyword in text for keyword in keywords)


class KeywordClassifier:
    def __init__(self, keywords: Optional[KeywordSets] = None):
        if keywords is None:
            keywords = KeywordSets.from_lists(settings.domain_keywords, settings.service_keywords)
        self._keywords = keywords

    @property
    def keywords(self) -> KeywordSets:
        return self._keywords

    def classify(self, text: str) -> ClassificationResult:
        lowered = (text or "").lower()
        return ClassificationResult(
            is_domain_relevant=_contains_any(lowered, self._keywords.domain),
            needs_service_intent=_contains_any(lowered, self._keywords.service),
        )
