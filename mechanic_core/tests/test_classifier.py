from mechanic_core.routing.classifier import KeywordClassifier, KeywordSets
from mechanic_core.config.settings import DEFAULT_DOMAIN_KEYWORDS, DEFAULT_SERVICE_KEYWORDS


def _classifier():
    return KeywordClassifier(KeywordSets.from_lists(DEFAULT_DOMAIN_KEYWORDS, DEFAULT_SERVICE_KEYWORDS))


def test_domain_keyword_case_insensitive():
    res = _classifier().classify("My CAR Battery is dead")
    assert res.is_domain_relevant
    assert not res.needs_service_intent


def test_service_intent_detected():
    res = _classifier().classify("I need a mechanic appointment for brake repair")
    assert res.is_domain_relevant
    assert res.needs_service_intent


def test_service_intent_computed_without_domain_match():
    # "fix" 只在 service 集合里，两项判断互不依赖
    res = _classifier().classify("can you fix my sink")
    assert not res.is_domain_relevant
    assert res.needs_service_intent


def test_empty_and_unrelated_text():
    c = _classifier()
    assert not c.classify("").is_domain_relevant
    assert not c.classify("What's the weather today?").is_domain_relevant


def test_multi_word_keyword_matches_substring():
    res = _classifier().classify("Where is the nearest CAR WASH?")
    assert res.is_domain_relevant


def test_injected_keywords_are_immutable():
    kw = KeywordSets.from_lists(["Truck"], ["Tow"])
    assert kw.domain == frozenset({"truck"})
    c = KeywordClassifier(kw)
    assert c.classify("my TRUCK needs a tow").needs_service_intent
    assert not c.classify("my car").is_domain_relevant


def test_default_keywords_come_from_settings():
    c = KeywordClassifier()
    assert "battery" in c.keywords.domain
    assert "garage" in c.keywords.service
