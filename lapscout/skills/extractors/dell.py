# lapscout/skills/extractors/dell.py
from __future__ import annotations

from typing import List

from lapscout.skills.extractors.rules import ExtractionRule, fixed_brand, price_of, rx, text_of

HOST_KEY = "dell.com"

RULES: List[ExtractionRule] = [
    fixed_brand("dell", "Dell"),
    ExtractionRule("dell.name.h1", "name", rx(r'<h1[^>]*>([^<]+)'), text_of("name", 1)),
    ExtractionRule("dell.price.sale", "price",
                   rx(r'(?:sale-price|dellPrice)[^$]*(\$[0-9][0-9,]*(?:\.\d{2})?)'), price_of(1)),
]
