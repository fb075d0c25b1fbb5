# lapscout/agent/planner.py
from __future__ import annotations

import re
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Literal, Optional

from lapscout.models.laptop import Persona
from lapscout.skills.matcher import detect_brand, detect_model
from lapscout.utils.logger import logger
from lapscout.utils.urls import find_urls

PlanKind = Literal["urls", "brand_search", "compare", "chat"]

INTENT_RE = re.compile(r'\b(find|show|recommend|suggest|best|top|search|list|buy|laptops)\b', re.I)
SPLIT_RE = re.compile(r'\s*(?:,|;|\bvs\.?\b|\bversus\b|\band\b)\s*', re.I)
LIMIT_RE = re.compile(r'\b(?:top|find|show|list)\s+(\d{1,2})\b', re.I)

PERSONA_WORDS = [
    (Persona.GAMING, r'gaming|gamer|games?\b'),
    (Persona.CREATIVE, r'creative|creator|design|video editing|photo editing'),
    (Persona.PROGRAMMING, r'programming|coding|developer|software|business'),
    (Persona.STUDENT, r'student|school|college|university'),
    (Persona.PORTABLE, r'portable|portability|travel|lightweight'),
]

DEFAULT_LIMIT = 3
MAX_LIMIT = 10


@dataclass
class Plan:
    kind: PlanKind
    text: str
    urls: List[str] = field(default_factory=list)
    queries: List[str] = field(default_factory=list)
    brand: Optional[str] = None
    limit: int = DEFAULT_LIMIT
    persona: Optional[Persona] = None

    def as_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["persona"] = self.persona.value if self.persona else None
        return d


def detect_persona(text: str) -> Optional[Persona]:
    low = (text or "").lower()
    for persona, pattern in PERSONA_WORDS:
        if re.search(r'\b(?:' + pattern + r')', low):
            return persona
    return None


def _looks_like_product(phrase: str) -> bool:
    return bool(detect_brand(phrase) or detect_model(phrase))


def _product_phrases(text: str) -> List[str]:
    t = re.sub(r'^\s*compare\s+', '', text.strip(), flags=re.I)
    t = t.rstrip("?.! ")
    parts = [p.strip() for p in SPLIT_RE.split(t) if p and p.strip()]
    if len(parts) < 2 or not all(_looks_like_product(p.lower()) for p in parts):
        return []
    return parts


def _limit(text: str) -> int:
    m = LIMIT_RE.search(text)
    if not m:
        return DEFAULT_LIMIT
    return max(1, min(int(m.group(1)), MAX_LIMIT))


def plan_from_message(text: str, last_brand: Optional[str] = None) -> Plan:
    """
    Decide what a chat message asks for: laptops at given URLs, a brand's
    line-up, a side-by-side of named models, or plain conversation.
    """
    logger.info(f"Generating plan for message: {text!r}")
    text = text or ""
    low = text.lower()
    persona = detect_persona(text)

    urls = find_urls(text)
    if urls:
        plan = Plan(kind="urls", text=text, urls=urls, persona=persona)
    else:
        brand = detect_brand(low)
        intent = INTENT_RE.search(low)
        # "show me dell and hp laptops" is a search, not a side-by-side
        phrases = _product_phrases(text) if not intent or low.lstrip().startswith("compare") else []
        if phrases:
            plan = Plan(kind="compare", text=text, queries=phrases, persona=persona)
        elif intent and (brand or last_brand):
            plan = Plan(kind="brand_search", text=text, brand=brand or last_brand.lower(),
                        limit=_limit(text), persona=persona)
        else:
            plan = Plan(kind="chat", text=text, persona=persona)

    logger.info(f"Plan: {plan.as_dict()}")
    return plan
