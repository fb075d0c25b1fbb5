# lapscout/skills/extractors/bestbuy.py
from __future__ import annotations

from typing import List

from lapscout.skills.extractors.rules import ExtractionRule, count_of, price_of, rating_of, rx, text_of

HOST_KEY = "bestbuy."

RULES: List[ExtractionRule] = [
    ExtractionRule("bestbuy.name.sku_title", "name",
                   rx(r'class="[^"]*sku-title[^"]*"[^>]*>\s*(?:<h1[^>]*>)?([^<]+)'), text_of("name", 1)),
    ExtractionRule("bestbuy.name.h1", "name",
                   rx(r'<h1[^>]*>([^<]*laptop[^<]*)'), text_of("name", 1)),
    ExtractionRule("bestbuy.price.current", "price",
                   rx(r'current\s*price[^$]*(\$[0-9][0-9,]*(?:\.\d{1,2})?)'), price_of(1)),
    ExtractionRule("bestbuy.price.customer", "price",
                   rx(r'"customerPrice"\s*:\s*([0-9][0-9,]*(?:\.\d+)?)'), price_of(1)),
    ExtractionRule("bestbuy.rating.value", "rating",
                   rx(r'Rating\s+(\d(?:\.\d)?)\s+out\s+of\s+5'), rating_of(1)),
    ExtractionRule("bestbuy.reviews.count", "review_count",
                   rx(r'\(([0-9][0-9,]*)\s+reviews?\)'), count_of("review_count", 1)),
]
