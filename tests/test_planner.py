from lapscout.agent.planner import detect_persona, plan_from_message
from lapscout.models.laptop import Persona


def test_urls_win():
    plan = plan_from_message("compare https://www.dell.com/en-us/shop/xps-13 and https://www.apple.com/macbook-air/")
    assert plan.kind == "urls"
    assert plan.urls == ["https://www.dell.com/en-us/shop/xps-13", "https://www.apple.com/macbook-air/"]


def test_brand_search():
    plan = plan_from_message("Show me the top 5 Dell laptops for gaming")
    assert plan.kind == "brand_search"
    assert plan.brand == "dell"
    assert plan.limit == 5
    assert plan.persona == Persona.GAMING

    assert plan_from_message("recommend a thinkpad").brand == "lenovo"


def test_brand_search_uses_last_brand():
    plan = plan_from_message("show me more laptops", last_brand="HP")
    assert plan.kind == "brand_search"
    assert plan.brand == "hp"
    assert plan.limit == 3


def test_compare_phrases():
    plan = plan_from_message("dell xps vs macbook air for a student")
    assert plan.kind == "compare"
    assert plan.queries == ["dell xps", "macbook air for a student"]
    assert plan.persona == Persona.STUDENT

    plan = plan_from_message("compare thinkpad x1, zenbook 14 and hp spectre")
    assert plan.kind == "compare"
    assert len(plan.queries) == 3


def test_chat_fallback():
    assert plan_from_message("how much RAM do I need?").kind == "chat"
    # several products but a search intent word: not a side-by-side
    assert plan_from_message("show me dell and hp laptops").kind == "brand_search"
    # one product phrase only
    assert plan_from_message("is the macbook air good?").kind == "chat"


def test_detect_persona():
    assert detect_persona("I do video editing") == Persona.CREATIVE
    assert detect_persona("mostly coding") == Persona.PROGRAMMING
    assert detect_persona("something light for travel") == Persona.PORTABLE
    assert detect_persona("anything") is None
