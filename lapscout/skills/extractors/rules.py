# lapscout/skills/extractors/rules.py
from __future__ import annotations

import html
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Pattern, Sequence

from bs4 import BeautifulSoup

from lapscout.utils.money import detect_currency, parse_price

Converter = Callable[["re.Match[str]"], Optional[Dict[str, Any]]]

KNOWN_BRANDS = {
    "apple": "Apple",
    "dell": "Dell",
    "hp": "HP",
    "lenovo": "Lenovo",
    "asus": "ASUS",
    "acer": "Acer",
    "msi": "MSI",
    "samsung": "Samsung",
    "microsoft": "Microsoft",
    "razer": "Razer",
    "lg": "LG",
}

# product line -> maker, for names that never say who built the laptop
PRODUCT_LINES = {
    "macbook": "apple",
    "thinkpad": "lenovo",
    "ideapad": "lenovo",
    "legion": "lenovo",
    "yoga": "lenovo",
    "xps": "dell",
    "inspiron": "dell",
    "latitude": "dell",
    "alienware": "dell",
    "spectre": "hp",
    "envy": "hp",
    "pavilion": "hp",
    "omen": "hp",
    "elitebook": "hp",
    "zenbook": "asus",
    "vivobook": "asus",
    "rog": "asus",
    "predator": "acer",
    "swift": "acer",
    "surface": "microsoft",
    "galaxy": "samsung",
}


@dataclass(frozen=True)
class ExtractionRule:
    """
    One named pattern for one field.

    ``convert`` turns the match into ``{field: value}`` (a rule may fill
    companion fields, e.g. price + currency) or returns None to let the
    next rule try. ``source="name"`` runs the pattern against the name
    already extracted, ``source="text"`` against the visible page text
    (no tags or attributes) instead of the raw page.
    """
    rule_id: str
    field: str
    pattern: Optional[Pattern[str]]
    convert: Converter
    source: str = "content"
    inferred: bool = False


@dataclass(frozen=True)
class ExtractionHit:
    field: str
    value: Any
    rule_id: str


@dataclass
class Extraction:
    source_url: str
    retailer: str
    hits: Dict[str, ExtractionHit] = field(default_factory=dict)

    def value(self, name: str, default: Any = None) -> Any:
        hit = self.hits.get(name)
        return hit.value if hit else default

    def rule_for(self, name: str) -> Optional[str]:
        hit = self.hits.get(name)
        return hit.rule_id if hit else None

    def as_partial(self) -> Dict[str, Any]:
        return {k: h.value for k, h in self.hits.items()}

    def rule_ids(self) -> Dict[str, str]:
        return {k: h.rule_id for k, h in self.hits.items()}


# ---------- Text helpers ----------

def clean_text(text: str) -> str:
    t = html.unescape(text or "")
    t = re.sub(r'&[^;\s]+;', ' ', t)
    t = re.sub(r'<[^>]*>', ' ', t)
    t = re.sub(r'\s+', ' ', t)
    return t.strip()


def page_text(content: str) -> str:
    """Visible text of a page: markup, attributes, scripts and styles dropped."""
    soup = BeautifulSoup(content or "", "html.parser")
    for tag in soup(["script", "style", "noscript", "template"]):
        tag.decompose()
    return clean_text(soup.get_text(" "))


def rx(pattern: str) -> Pattern[str]:
    return re.compile(pattern, re.IGNORECASE)


# ---------- Converters ----------

def text_of(name: str, group: int = 0, strip_suffix: Optional[str] = None) -> Converter:
    def _convert(m: "re.Match[str]") -> Optional[Dict[str, Any]]:
        raw = m.group(group) if m.lastindex and group <= m.lastindex else m.group(0)
        value = clean_text(raw or "")
        if strip_suffix:
            value = re.sub(strip_suffix, "", value, flags=re.IGNORECASE).strip()
        return {name: value} if value else None
    return _convert


def price_of(group: int = 1) -> Converter:
    def _convert(m: "re.Match[str]") -> Optional[Dict[str, Any]]:
        raw = m.group(group) if m.lastindex else m.group(0)
        amount = parse_price(raw)
        if amount is None or amount <= 0:
            return None
        return {"price": amount, "currency": detect_currency(m.group(0))}
    return _convert


def rating_of(group: int = 1) -> Converter:
    def _convert(m: "re.Match[str]") -> Optional[Dict[str, Any]]:
        try:
            value = float(m.group(group))
        except (TypeError, ValueError):
            return None
        if not 0 <= value <= 5:
            return None
        return {"rating": value}
    return _convert


def count_of(name: str, group: int = 1) -> Converter:
    def _convert(m: "re.Match[str]") -> Optional[Dict[str, Any]]:
        digits = re.sub(r'[^\d]', '', m.group(group) or "")
        return {name: int(digits)} if digits else None
    return _convert


def screen_of(group: int = 0) -> Converter:
    def _convert(m: "re.Match[str]") -> Optional[Dict[str, Any]]:
        value = clean_text(m.group(group))
        size = re.search(r'(\d{2}(?:\.\d)?)', value)
        if not value or not size:
            return None
        return {"screen": value, "screen_in": float(size.group(1))}
    return _convert


def brand_of(group: int = 1) -> Converter:
    def _convert(m: "re.Match[str]") -> Optional[Dict[str, Any]]:
        brand = KNOWN_BRANDS.get((m.group(group) or "").lower())
        return {"brand": brand} if brand else None
    return _convert


def line_brand_of(group: int = 1) -> Converter:
    def _convert(m: "re.Match[str]") -> Optional[Dict[str, Any]]:
        maker = PRODUCT_LINES.get((m.group(group) or "").lower())
        return {"brand": KNOWN_BRANDS[maker]} if maker else None
    return _convert


def constant(name: str, value: Any) -> Converter:
    def _convert(m: "re.Match[str]") -> Optional[Dict[str, Any]]:
        return {name: value}
    return _convert


BRAND_PATTERN = rx(r'\b(' + '|'.join(KNOWN_BRANDS) + r')\b')
LINE_PATTERN = rx(r'\b(' + '|'.join(PRODUCT_LINES) + r')\b')


def fixed_brand(prefix: str, brand: str) -> ExtractionRule:
    """Brand implied by the store itself (apple.com only sells Apple)."""
    return ExtractionRule(f"{prefix}.store_brand", "brand", None, constant("brand", brand), inferred=True)


def rules_for(rules: Sequence[ExtractionRule], name: str) -> List[ExtractionRule]:
    return [r for r in rules if r.field == name]
