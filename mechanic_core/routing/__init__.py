"""关键词分类与回复路由。"""

from mechanic_core.routing.classifier import ClassificationResult, KeywordClassifier, KeywordSets
from mechanic_core.routing.router import Canned, Delegate, Reject, ResponseRouter, RouteDecision

__all__ = [
    "Canned",
    "ClassificationResult",
    "Delegate",
    "KeywordClassifier",
    "KeywordSets",
    "Reject",
    "ResponseRouter",
    "RouteDecision",
]
