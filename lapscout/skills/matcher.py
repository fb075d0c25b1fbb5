# lapscout/skills/matcher.py
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from rapidfuzz.distance import Levenshtein

from lapscout.models.laptop import LaptopSpec
from lapscout.skills.extractors.rules import PRODUCT_LINES
from lapscout.utils.logger import logger

MAX_SCORE = 10.0
THRESHOLD = 0.3

BRANDS = ["apple", "dell", "hp", "lenovo", "asus", "acer", "msi", "microsoft", "samsung"]

# product line -> brand, for queries that never name the maker
BRAND_ALIASES = PRODUCT_LINES

MODELS = [
    "macbook", "air", "pro", "xps", "inspiron", "latitude",
    "thinkpad", "carbon", "ideapad", "yoga", "legion", "zenbook", "vivobook", "rog", "strix",
    "pavilion", "envy", "spectre", "surface", "galaxy",
]


@dataclass
class QueryHints:
    normalized: str
    brand: Optional[str] = None
    model: Optional[str] = None
    specs: List[str] = field(default_factory=list)


def _word(text: str, word: str) -> Optional[re.Match]:
    return re.search(r'\b' + re.escape(word) + r'\b', text)


def detect_brand(q: str) -> Optional[str]:
    for b in BRANDS:
        if _word(q, b):
            return b
    for alias, b in BRAND_ALIASES.items():
        if _word(q, alias):
            return b
    return None


def detect_model(q: str) -> Optional[str]:
    # "macbook air" must pick "air", so the word that appears last wins
    best, best_pos = None, -1
    for m in MODELS:
        for hit in re.finditer(r'\b' + re.escape(m) + r'\b', q):
            if hit.start() > best_pos:
                best, best_pos = m, hit.start()
    return best


def extract_spec_tokens(q: str) -> List[str]:
    specs: List[str] = []
    if re.search(r'\bi[3579]\b|\bintel\b|\bcore\b', q):
        specs.append("intel")
    if re.search(r'\bryzen\b|\bamd\b', q):
        specs.append("amd")
    if re.search(r'\bm[123]\b', q):
        specs.append("apple-silicon")

    ram = re.search(r'(\d+)\s*gb', q)
    if ram:
        specs.append(f"{ram.group(1)}gb-ram")

    if "ssd" in q:
        specs.append("ssd")
    if re.search(r'\d+\s*(?:gb|tb)', q):
        specs.append("storage-specified")

    if "gaming" in q:
        specs.append("gaming")
    if re.search(r'business|work', q):
        specs.append("business")
    if "student" in q:
        specs.append("student")
    if re.search(r'creative|design', q):
        specs.append("creative")
    return specs


def parse_query(text: str) -> QueryHints:
    q = (text or "").lower().strip()
    return QueryHints(
        normalized=q,
        brand=detect_brand(q),
        model=detect_model(q),
        specs=extract_spec_tokens(q),
    )


def similarity(a: str, b: str) -> float:
    """Normalized Levenshtein similarity in [0, 1]; two empty strings are identical."""
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return (longest - Levenshtein.distance(a, b)) / longest


def _spec_points(laptop: LaptopSpec, token: str) -> float:
    cpu = (laptop.cpu or "").lower()
    if token == "intel":
        return 1.0 if "intel" in cpu else 0.0
    if token == "amd":
        return 1.0 if "amd" in cpu or "ryzen" in cpu else 0.0
    if token == "apple-silicon":
        return 1.0 if re.search(r'\bm[123]\b', cpu) else 0.0
    if token.endswith("gb-ram"):
        amount = token.split("-")[0]
        return 1.0 if amount in (laptop.ram or "").lower().replace(" ", "") else 0.0
    if token == "gaming":
        return 0.5 if laptop.price > 1000 else 0.0
    if token == "business":
        return 0.5 if "Pro" in (laptop.os or "") else 0.0
    if token == "student":
        return 0.5 if laptop.price < 1200 else 0.0
    if token == "creative":
        screen = (laptop.screen or "").lower()
        return 0.5 if "oled" in screen or "retina" in screen else 0.0
    # ssd / storage-specified carry no weight
    return 0.0


def match_score(laptop: LaptopSpec, hints: QueryHints) -> float:
    score = 0.0
    if hints.brand and hints.brand in laptop.brand.lower():
        score += 3
    if hints.model and _word(laptop.name.lower(), hints.model):
        score += 2
    for token in hints.specs:
        score += _spec_points(laptop, token)
    score += 2 * similarity(hints.normalized, laptop.name.lower())
    return max(0.0, min(score / MAX_SCORE, 1.0))


def fuzzy_match(query: str, catalog: Sequence[LaptopSpec]) -> Optional[LaptopSpec]:
    best, best_sim = None, THRESHOLD
    for lp in catalog:
        sim = max(similarity(query, lp.name.lower()), similarity(query, lp.brand.lower()))
        if sim > best_sim:
            best, best_sim = lp, sim
    return best


def match(query: str, catalog: Sequence[LaptopSpec], hints: Optional[QueryHints] = None) -> Optional[LaptopSpec]:
    """
    Best catalog laptop for a free-text query.

    Keyword score first; below the threshold fall back to plain name/brand
    similarity, and if nothing clears that either, the first catalog entry.
    Only an empty catalog yields None. The result is a copy.
    """
    if not catalog:
        return None
    hints = hints or parse_query(query)

    best, best_score = None, 0.0
    for lp in catalog:
        s = match_score(lp, hints)
        if s > best_score:
            best, best_score = lp, s

    how = "keywords"
    if best_score < THRESHOLD:
        best = fuzzy_match(hints.normalized, catalog)
        how = "fuzzy"
    if best is None:
        best = catalog[0]
        how = "fallback"

    logger.debug(f"Matched '{hints.normalized}' -> {best.name} ({how}, score={best_score:.2f})")
    return best.model_copy(deep=True)
