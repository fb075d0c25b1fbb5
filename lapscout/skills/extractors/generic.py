# lapscout/skills/extractors/generic.py
"""
Generic rule set, used for every page after any retailer-specific rules.

Patterns are deliberately loose: the first thing that looks like a price
is the price. Order inside a field is the precedence.
"""
from __future__ import annotations

from typing import List

from lapscout.skills.extractors.rules import (
    BRAND_PATTERN,
    LINE_PATTERN,
    ExtractionRule,
    brand_of,
    line_brand_of,
    price_of,
    rating_of,
    rx,
    screen_of,
    text_of,
)

NAME_RULES: List[ExtractionRule] = [
    ExtractionRule("generic.name.title", "name", rx(r'<title[^>]*>([^<]*laptop[^<]*)'), text_of("name", 1)),
    ExtractionRule("generic.name.h1", "name", rx(r'<h1[^>]*>([^<]*laptop[^<]*)'), text_of("name", 1)),
    ExtractionRule("generic.name.product_title", "name", rx(r'product[_-]?title[^>]*>([^<]+)'), text_of("name", 1)),
    ExtractionRule("generic.name.json", "name", rx(r'"productTitle"\s*:\s*"([^"]*laptop[^"]*)"'), text_of("name", 1)),
]

BRAND_RULES: List[ExtractionRule] = [
    ExtractionRule("generic.brand.in_name", "brand", BRAND_PATTERN, brand_of(1), source="name"),
    ExtractionRule("generic.brand.line_in_name", "brand", LINE_PATTERN, line_brand_of(1), source="name"),
    ExtractionRule("generic.brand.in_content", "brand", BRAND_PATTERN, brand_of(1), source="text"),
]

PRICE_RULES: List[ExtractionRule] = [
    ExtractionRule("generic.price.dollar", "price", rx(r'\$\s?([0-9][0-9,]*(?:\.\d{1,2})?)'), price_of(1)),
    ExtractionRule("generic.price.json_amount", "price",
                   rx(r'"price"[^}]*?"amount"\s*:\s*"?([0-9][0-9,]*(?:\.\d+)?)'), price_of(1)),
    ExtractionRule("generic.price.json_current", "price",
                   rx(r'"currentPrice"\s*:\s*"?([0-9][0-9,]*(?:\.\d+)?)'), price_of(1)),
]

CPU_RULES: List[ExtractionRule] = [
    ExtractionRule("generic.cpu.intel_core", "cpu",
                   rx(r'intel\s+core\s+(?:i[3579]|ultra\s+[579])(?:[- ]?\d{3,5}[a-z]{0,2})?(?:\s+vpro)?'),
                   text_of("cpu")),
    ExtractionRule("generic.cpu.amd_ryzen", "cpu",
                   rx(r'amd\s+ryzen\s+[3579](?:\s+pro)?(?:[- ]?\d{4}[a-z]{0,2})?'), text_of("cpu")),
    ExtractionRule("generic.cpu.apple_silicon", "cpu",
                   rx(r'apple\s+m[1-4](?:\s+(?:pro|max|ultra))?'), text_of("cpu")),
    ExtractionRule("generic.cpu.intel_budget", "cpu", rx(r'intel\s+(?:celeron|pentium)[^,\n<"]*'), text_of("cpu")),
    ExtractionRule("generic.cpu.json", "cpu", rx(r'"processor"\s*:\s*"([^"]+)"'), text_of("cpu", 1)),
    ExtractionRule("generic.cpu.bare_model", "cpu", rx(r'\bi[3579]-\d{4,5}[a-z]{0,2}\b'), text_of("cpu")),
]

GPU_RULES: List[ExtractionRule] = [
    ExtractionRule("generic.gpu.nvidia", "gpu",
                   rx(r'(?:nvidia\s+)?(?:geforce\s+)?(?:rtx|gtx)\s*\d{4}(?:\s*ti)?'), text_of("gpu")),
    ExtractionRule("generic.gpu.amd_rx", "gpu", rx(r'(?:amd\s+)?radeon\s+rx\s*\d{4}[a-z]{0,2}'), text_of("gpu")),
    ExtractionRule("generic.gpu.integrated", "gpu",
                   rx(r'intel\s+(?:iris\s+xe|uhd)(?:\s+graphics)?'), text_of("gpu")),
]

RAM_RULES: List[ExtractionRule] = [
    ExtractionRule("generic.ram.capacity", "ram",
                   rx(r'\b(\d{1,3})\s*gb\s+(?:unified\s+memory|ram|memory|lpddr\d*x?|ddr\d*)'), text_of("ram")),
    ExtractionRule("generic.ram.json", "ram", rx(r'"memory"[^}]*?"([^"]*\d+\s*gb[^"]*)"'), text_of("ram", 1)),
]

STORAGE_RULES: List[ExtractionRule] = [
    ExtractionRule("generic.storage.ssd", "storage",
                   rx(r'\b(\d{1,4})\s*(?:gb|tb)\s*(?:pcie\s+)?(?:nvme\s+)?(?:ssd|nvme|pcie|solid\s+state)'),
                   text_of("storage")),
    ExtractionRule("generic.storage.json", "storage",
                   rx(r'"storage"[^}]*?"([^"]*\d+\s*(?:gb|tb)[^"]*)"'), text_of("storage", 1)),
    ExtractionRule("generic.storage.plain", "storage", rx(r'\b(\d{1,4})\s*(?:gb|tb)\s*storage'), text_of("storage")),
    ExtractionRule("generic.storage.hdd", "storage", rx(r'\b(\d{1,4})\s*(?:gb|tb)\s*hard\s+drive'), text_of("storage")),
]

SCREEN_RULES: List[ExtractionRule] = [
    ExtractionRule("generic.screen.inches", "screen",
                   rx(r'\b1[0-8](?:\.\d)?\s*(?:"|”|-inch|\s?inch(?:es)?\b|\s?in\b)'
                      r'(?:[^,\n<]{0,40}?\d{3,4}\s*x\s*\d{3,4}\)?)?'),
                   screen_of()),
    ExtractionRule("generic.screen.json", "screen", rx(r'"display"[^}]*?"([^"]*\d+[^"]*inch[^"]*)"'), screen_of(1)),
]

RATING_RULES: List[ExtractionRule] = [
    ExtractionRule("generic.rating.out_of_5", "rating", rx(r'(\d(?:\.\d+)?)\s*out\s*of\s*5'), rating_of(1)),
    ExtractionRule("generic.rating.json", "rating", rx(r'"rating(?:Value)?"\s*:\s*"?(\d(?:\.\d+)?)'), rating_of(1)),
]

GENERIC_RULES: List[ExtractionRule] = (
    NAME_RULES + BRAND_RULES + PRICE_RULES + CPU_RULES + GPU_RULES
    + RAM_RULES + STORAGE_RULES + SCREEN_RULES + RATING_RULES
)
