# lapscout/skills/extractors/apple.py
from __future__ import annotations

from typing import List

from lapscout.skills.extractors.rules import ExtractionRule, fixed_brand, price_of, rx, text_of

HOST_KEY = "apple.com"

RULES: List[ExtractionRule] = [
    fixed_brand("apple", "Apple"),
    ExtractionRule("apple.name.macbook", "name", rx(r'MacBook[^<\n"]*'), text_of("name")),
    ExtractionRule("apple.price.from", "price", rx(r'from\s+(\$[0-9][0-9,]*(?:\.\d{2})?)'), price_of(1)),
]
