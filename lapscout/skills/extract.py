# lapscout/skills/extract.py
from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from lapscout.skills.extractors import amazon, apple, bestbuy, dell, newegg
from lapscout.skills.extractors.generic import GENERIC_RULES
from lapscout.skills.extractors.rules import Extraction, ExtractionHit, ExtractionRule, page_text, rules_for
from lapscout.utils.logger import logger
from lapscout.utils.urls import domain_brand

# host substring -> (retailer label, rules tried before the generic set)
RETAILER_RULES: Sequence[Tuple[str, str, List[ExtractionRule]]] = (
    (amazon.HOST_KEY, "amazon", amazon.RULES),
    (bestbuy.HOST_KEY, "bestbuy", bestbuy.RULES),
    (newegg.HOST_KEY, "newegg", newegg.RULES),
    (apple.HOST_KEY, "apple", apple.RULES),
    (dell.HOST_KEY, "dell", dell.RULES),
)

FIELD_ORDER = ("name", "brand", "price", "cpu", "gpu", "ram", "storage", "screen", "rating", "review_count")


def retailer_for(url: str) -> Tuple[str, List[ExtractionRule]]:
    u = (url or "").lower()
    for key, label, rules in RETAILER_RULES:
        if key in u:
            return label, rules + GENERIC_RULES
    return "generic", list(GENERIC_RULES)


def _apply_rule(rule: ExtractionRule, views: Dict[str, str], hits: Dict[str, ExtractionHit]) -> bool:
    if rule.pattern is None:
        values = rule.convert(None)  # type: ignore[arg-type]
    else:
        if rule.source == "name":
            target = str(hits["name"].value) if "name" in hits else ""
        else:
            target = views.get(rule.source, "")
        if not target:
            return False
        m = rule.pattern.search(target)
        if not m:
            return False
        values = rule.convert(m)
    if not values:
        return False
    for f, v in values.items():
        if f not in hits:
            hits[f] = ExtractionHit(f, v, rule.rule_id)
    return True


def extract(content: str, source_url: str) -> Optional[Extraction]:
    """
    Pull laptop fields out of a page (or any text) with the ordered rules
    for its retailer. Returns None when no rule matched anything on the page.
    """
    content = content or ""
    views = {"content": content, "text": page_text(content)}
    retailer, rules = retailer_for(source_url)
    hits: Dict[str, ExtractionHit] = {}
    from_page = 0

    for name in FIELD_ORDER:
        if name in hits:
            continue
        for rule in rules_for(rules, name):
            try:
                fired = _apply_rule(rule, views, hits)
            except Exception as e:
                # a broken converter must not cost us the other fields
                logger.warning(f"Extraction rule {rule.rule_id} failed: {e}")
                fired = False
            if fired:
                if not rule.inferred:
                    from_page += 1
                break

    if not from_page:
        logger.info(f"Nothing extracted from {source_url or '<text>'} ({retailer})")
        return None

    if "brand" not in hits:
        brand = domain_brand(source_url)
        if brand:
            hits["brand"] = ExtractionHit("brand", brand, "domain.brand")

    out = Extraction(source_url=source_url, retailer=retailer, hits=hits)
    logger.info(f"Extracted {sorted(out.hits)} from {source_url or '<text>'} ({retailer})")
    return out
