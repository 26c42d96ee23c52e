"""回复路由。

把分类结果映射为三种互斥结果之一（按顺序匹配，先命中先返回）：

1. 与汽车无关           -> Reject
2. 相关且需要维修服务   -> Canned（固定推荐文案，不调用模型）
3. 相关但不需要维修服务 -> Delegate（套上提示词模板后交给生成服务）
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple, Union

from mechanic_core.prompts import CANNED_SERVICE_REPLY, render_delegate_prompt
from mechanic_core.routing.classifier import ClassificationResult, KeywordClassifier


@dataclass(frozen=True)
class Reject:
    kind = "reject"


@dataclass(frozen=True)
class Canned:
    response_text: str
    kind = "canned"


@dataclass(frozen=True)
class Delegate:
    prompt_text: str
    kind = "delegate"


RouteDecision = Union[Reject, Canned, Delegate]

_Rule = Tuple[Callable[[ClassificationResult], bool], Callable[[str], RouteDecision]]


class ResponseRouter:
    def __init__(self, classifier: Optional[KeywordClassifier] = None):
        self._classifier = classifier or KeywordClassifier()
        self._rules: List[_Rule] = [
            (lambda c: not c.is_domain_relevant, lambda _text: Reject()),
            (lambda c: c.needs_service_intent, lambda _text: Canned(CANNED_SERVICE_REPLY)),
            (lambda c: True, lambda text: Delegate(render_delegate_prompt(text))),
        ]

    def route(self, text: str) -> RouteDecision:
        result = self._classifier.classify(text)
        for matches, decide in self._rules:
            if matches(result):
                return decide(text)
        raise AssertionError("unreachable: last rule always matches")
