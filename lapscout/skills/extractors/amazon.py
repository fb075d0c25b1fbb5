# lapscout/skills/extractors/amazon.py
from __future__ import annotations

from typing import List

from lapscout.skills.extractors.rules import ExtractionRule, count_of, price_of, rating_of, rx, text_of

HOST_KEY = "amazon."

RULES: List[ExtractionRule] = [
    ExtractionRule("amazon.name.product_title", "name",
                   rx(r'id="productTitle"[^>]*>([^<]+)'), text_of("name", 1)),
    ExtractionRule("amazon.name.title", "name",
                   rx(r'<title[^>]*>([^<]*laptop[^<]*)'), text_of("name", 1, strip_suffix=r'\s*[-:|]\s*Amazon\.[a-z.]+.*$')),
    ExtractionRule("amazon.price.offscreen", "price",
                   rx(r'class="a-offscreen"[^>]*>\s*(\$\s?[0-9][0-9,]*(?:\.\d{1,2})?)'), price_of(1)),
    ExtractionRule("amazon.price.whole", "price",
                   rx(r'class="a-price-whole"[^>]*>\s*([0-9][0-9,]*)'), price_of(1)),
    ExtractionRule("amazon.rating.stars", "rating",
                   rx(r'(\d(?:\.\d)?)\s+out\s+of\s+5\s+stars'), rating_of(1)),
    ExtractionRule("amazon.reviews.ratings", "review_count",
                   rx(r'([0-9][0-9,]*)\s+(?:global\s+)?ratings'), count_of("review_count", 1)),
]
