# lapscout/skills/extractors/newegg.py
from __future__ import annotations

from typing import List

from lapscout.skills.extractors.rules import ExtractionRule, price_of, rating_of, rx, text_of

HOST_KEY = "newegg."

RULES: List[ExtractionRule] = [
    ExtractionRule("newegg.name.product_title", "name",
                   rx(r'<h1[^>]*class="[^"]*product-title[^"]*"[^>]*>([^<]+)'), text_of("name", 1)),
    ExtractionRule("newegg.name.h1", "name", rx(r'<h1[^>]*>([^<]+)'), text_of("name", 1)),
    ExtractionRule("newegg.price.current", "price",
                   rx(r'price-current[^>]*>[^$]*?\$?\s*<strong>([0-9][0-9,]*)</strong>'), price_of(1)),
    ExtractionRule("newegg.rating.eggs", "rating",
                   rx(r'rating-(\d)\b'), rating_of(1)),
]
