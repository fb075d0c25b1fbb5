# lapscout/agent/executor.py
from __future__ import annotations

import random
from typing import List, Optional, Sequence, Union

import requests
from pydantic import BaseModel, Field

from lapscout.agent.planner import PlanKind, plan_from_message
from lapscout.agent.summary import canned_reply, comparison_prompt, heuristic_summary
from lapscout.config.settings import AssistantConfig
from lapscout.llm.base import ChatMessage, MissingApiKeyError, ProviderError
from lapscout.llm.chain import LLMChain
from lapscout.models.laptop import LaptopSpec, Persona, ScoredLaptop
from lapscout.skills.catalog import get_catalog
from lapscout.skills.extract import extract
from lapscout.skills.extractors.rules import KNOWN_BRANDS, Extraction, ExtractionHit, clean_text
from lapscout.skills.fetch import PageFetcher, make_fetcher
from lapscout.skills.matcher import match, parse_query
from lapscout.skills.metadata import get_page_metadata, parse_page_metadata
from lapscout.skills.mock import generate_mock, infer_os
from lapscout.skills.search import (
    SearchResult,
    TavilySearch,
    brand_domain,
    ddg_search,
    is_product_url,
    synthetic_product_urls,
)
from lapscout.utils.logger import logger
from lapscout.utils.score import rank_laptops
from lapscout.utils.urls import is_url, seller_from_url, slugify

# extracted spec string -> numeric shadows that must be re-derived from it
SHADOWS = {
    "ram": ("ram_gb",),
    "storage": ("storage_gb", "storage_type"),
    "screen": ("screen_in",),
}

PersonaLike = Union[Persona, str, None]


class Comparison(BaseModel):
    laptops: List[LaptopSpec]
    ranked: List[ScoredLaptop] = Field(default_factory=list)
    persona: Optional[Persona] = None
    summary: str = ""
    summary_source: str = "heuristic"  # "ai" | "heuristic"


class AssistantReply(BaseModel):
    kind: PlanKind
    message: str
    laptops: List[LaptopSpec] = Field(default_factory=list)
    ranked: List[ScoredLaptop] = Field(default_factory=list)
    persona: Optional[Persona] = None
    brand: Optional[str] = None


# ---------------- Helpers ---------------- #

def _usable(ex: Optional[Extraction]) -> bool:
    """Enough real data to show without a placeholder: name, price and a core spec."""
    if ex is None:
        return False
    return bool(ex.value("name") and ex.value("price") and (ex.value("cpu") or ex.value("ram")))


def _parse_persona(persona: PersonaLike) -> Optional[Persona]:
    if persona is None or isinstance(persona, Persona):
        return persona
    return Persona.parse(persona)


def assign_ids(laptops: List[LaptopSpec]) -> List[LaptopSpec]:
    """Per-search ids: ``<slug>-<index>``, unique within one result list."""
    for i, lp in enumerate(laptops, start=1):
        lp.id = f"{slugify(lp.id or lp.name)}-{i}"
    return laptops


def complete_from_mock(
    ex: Extraction,
    url: str,
    source: str,
    rng: Optional[random.Random] = None,
) -> LaptopSpec:
    """
    Extracted fields over a mock of the same brand, so every record has a
    name, brand, cpu and ram even when the page only gave us a price.
    """
    partial = ex.as_partial()
    base = generate_mock(url=url, brand=partial.get("brand"), rng=rng)
    data = base.model_dump()

    for name, shadows in SHADOWS.items():
        if partial.get(name):
            for s in shadows:
                data[s] = None

    for k, v in partial.items():
        if k in LaptopSpec.model_fields and v not in (None, ""):
            data[k] = v
    # OS follows the final brand and name
    data["os"] = infer_os(data["brand"], data["name"])

    data["url"] = url
    data["seller"] = seller_from_url(url) if url else data["seller"]
    data["data_source"] = source
    data["specs_raw"] = ex.rule_ids()
    return LaptopSpec(**data)


# ---------------- Assistant ---------------- #

class Assistant:
    """
    Resolves user input into laptop records.

    Collaborators (page fetcher, search provider, LLM chain, rng) are
    injected; anything not given is built from ``config``, sharing
    ``session`` for plain HTTP calls when one is passed.
    """

    def __init__(
        self,
        config: Optional[AssistantConfig] = None,
        fetcher: Optional[PageFetcher] = None,
        search: Optional[TavilySearch] = None,
        llm: Optional[LLMChain] = None,
        rng: Optional[random.Random] = None,
        catalog: Optional[List[LaptopSpec]] = None,
        enrich_images: bool = True,
        session: Optional[requests.Session] = None,
    ):
        self.config = config or AssistantConfig.from_env()
        self.fetcher = fetcher or make_fetcher(self.config, session=session)
        if search is None and self.config.tavily_api_key:
            search = TavilySearch(self.config.tavily_api_key, session=session)
        self.search = search
        self.llm = llm or LLMChain.from_config(self.config, session=session)
        self.rng = rng or random.Random()
        self.catalog = catalog if catalog is not None else get_catalog()
        self.enrich_images = enrich_images

    # ---------- Resolution pipeline ----------

    def resolve_url(
        self,
        url: str,
        result: Optional[SearchResult] = None,
        brand: Optional[str] = None,
        synthetic: bool = False,
    ) -> LaptopSpec:
        """structured (search snippet) > scraped (fetched page) > mock"""
        if synthetic:
            return generate_mock(url=url, brand=brand, rng=self.rng)

        structured = None
        if result is not None and result.content:
            structured = extract(f"{result.title}\n{result.content}", url)
            if structured is not None and "name" not in structured.hits and result.title:
                structured.hits["name"] = ExtractionHit("name", clean_text(result.title), "search.title")
        if _usable(structured):
            laptop = complete_from_mock(structured, url, "structured", self.rng)
            if result.images:
                laptop.images = list(result.images)
                laptop.image = laptop.images[0]
            else:
                self._enrich(laptop)
            logger.info(f"[resolve] {url}: structured ({laptop.name})")
            return laptop

        html = self.fetcher.fetch(url)
        scraped = extract(html, url) if html else None
        if _usable(scraped) or (scraped is not None and structured is None):
            laptop = complete_from_mock(scraped, url, "scraped", self.rng)
        elif structured is not None:
            laptop = complete_from_mock(structured, url, "structured", self.rng)
        else:
            logger.info(f"[resolve] {url}: nothing extracted, using mock")
            return generate_mock(url=url, brand=brand, rng=self.rng)

        images = parse_page_metadata(html, url).images if html else []
        if not images and result is not None:
            images = list(result.images)
        if images:
            laptop.images = images
            laptop.image = images[0]
        logger.info(f"[resolve] {url}: {laptop.data_source} ({laptop.name})")
        return laptop

    def resolve_query(self, query: str) -> LaptopSpec:
        q = (query or "").strip()
        if is_url(q):
            return self.resolve_url(q)
        hints = parse_query(q)
        laptop = match(q, self.catalog, hints)
        if laptop is None:
            return generate_mock(brand=hints.brand, rng=self.rng)
        laptop.data_source = "catalog"
        return laptop

    def _safe_resolve(self, query: str) -> LaptopSpec:
        try:
            return self.resolve_query(query)
        except Exception:
            logger.exception(f"[resolve] failed for {query!r}; using mock")
            return generate_mock(url=query if is_url(query) else None, rng=self.rng)

    def _enrich(self, laptop: LaptopSpec) -> None:
        if not self.enrich_images or not laptop.url:
            return
        try:
            meta = get_page_metadata(laptop.url, self.fetcher)
        except Exception as e:
            logger.warning(f"Image lookup failed for {laptop.url}: {e}")
            return
        if meta.images:
            laptop.images = meta.images
            laptop.image = meta.images[0]

    # ---------- Operations ----------

    def compare(self, queries: Sequence[str], persona: PersonaLike = None) -> Comparison:
        persona = _parse_persona(persona)
        laptops = assign_ids([self._safe_resolve(q) for q in queries if q and q.strip()])
        ranked = rank_laptops(laptops, persona) if persona else []
        summary, source = self._summarize(laptops, ranked, persona)
        logger.info(f"[compare] {len(laptops)} laptop(s), persona={persona.value if persona else None}, summary={source}")
        return Comparison(laptops=laptops, ranked=ranked, persona=persona, summary=summary, summary_source=source)

    def discover(self, brand: str, limit: int = 3) -> List[LaptopSpec]:
        domain = brand_domain(brand)
        results: List[SearchResult] = []

        if self.search is not None:
            found = self.search.search(
                f"site:{domain} (laptop OR notebook) (buy OR product OR shop OR series)",
                limit * 2,
                [domain],
            )
            results = [r for r in found if is_product_url(r.url, domain)]

        if not results:
            found = ddg_search(self.fetcher, f"site:{domain} (laptop OR notebook) (buy OR product OR shop)", limit)
            results = [r for r in found if is_product_url(r.url, domain)]

        if results:
            laptops = [self.resolve_url(r.url, r, brand=brand) for r in results[:limit]]
        else:
            logger.warning(f"[discover] no product pages for {brand}; using placeholders")
            laptops = [
                self.resolve_url(u, brand=brand, synthetic=True)
                for u in synthetic_product_urls(brand, limit)
            ]
        return assign_ids(laptops)

    def handle_message(
        self,
        text: str,
        history: Optional[List[ChatMessage]] = None,
        persona: PersonaLike = None,
    ) -> AssistantReply:
        plan = plan_from_message(text, last_brand=self.config.last_brand)
        persona = _parse_persona(persona) or plan.persona

        if plan.kind in ("urls", "compare"):
            c = self.compare(plan.urls if plan.kind == "urls" else plan.queries, persona)
            return AssistantReply(kind=plan.kind, message=c.summary, laptops=c.laptops,
                                  ranked=c.ranked, persona=persona)

        if plan.kind == "brand_search":
            laptops = self.discover(plan.brand, plan.limit)
            ranked = rank_laptops(laptops, persona) if persona else []
            label = KNOWN_BRANDS.get(plan.brand, plan.brand.title())
            message = f"Here are {len(laptops)} {label} laptops I found.\n\n" + heuristic_summary(laptops, ranked, persona)
            return AssistantReply(kind=plan.kind, message=message, laptops=laptops,
                                  ranked=ranked, persona=persona, brand=plan.brand)

        messages = list(history or []) + [ChatMessage(role="user", content=text)]
        try:
            reply = self.llm.generate(messages)
        except MissingApiKeyError:
            logger.info("[chat] no LLM key; answering offline")
            reply = canned_reply(text, persona)
        return AssistantReply(kind="chat", message=reply, persona=persona)

    def explain(self, laptops: Sequence[LaptopSpec], persona: PersonaLike = None) -> str:
        """AI write-up of a comparison. Raises MissingApiKeyError without a key."""
        persona = _parse_persona(persona)
        return self.llm.generate([ChatMessage(role="user", content=comparison_prompt(laptops, persona))])

    def _summarize(self, laptops: List[LaptopSpec], ranked: List[ScoredLaptop], persona: Optional[Persona]):
        if laptops and self.llm.available:
            try:
                return self.llm.generate([ChatMessage(role="user", content=comparison_prompt(laptops, persona))]), "ai"
            except ProviderError as e:
                logger.warning(f"[compare] AI summary unavailable: {e}")
        return heuristic_summary(laptops, ranked, persona), "heuristic"
