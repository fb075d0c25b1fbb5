# lapscout/main.py
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional
import random
import concurrent.futures as futures  # timeout wrapper
from contextlib import asynccontextmanager

import requests

from lapscout.agent.executor import Assistant, AssistantReply, Comparison
from lapscout.config.settings import RUN_TIMEOUT_SEC, AssistantConfig
from lapscout.llm.base import ChatMessage, MissingApiKeyError, ProviderError
from lapscout.models.laptop import PERSONA_WEIGHTS, LaptopSpec, Persona, ScoredLaptop
from lapscout.skills.catalog import get_catalog
from lapscout.skills.extract import extract
from lapscout.skills.fetch import make_fetcher
from lapscout.skills.matcher import match, parse_query
from lapscout.skills.mock import generate_mock
from lapscout.utils.logger import logger
from lapscout.utils.score import rank_laptops
from lapscout.utils.urls import suggest_correction, validate_laptop_url

BASE_CONFIG = AssistantConfig.from_env()

# one connection pool and one page fetcher for every request
HTTP_SESSION = requests.Session()
FETCHER = make_fetcher(BASE_CONFIG, session=HTTP_SESSION)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    yield
    HTTP_SESSION.close()


app = FastAPI(title="LapScout Laptop Assistant", version="1.0.0", lifespan=lifespan)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------- Helpers ----------

class KeyOverrides(BaseModel):
    """Keys and preferences the browser keeps for the user; sent with each request."""
    openai_api_key: Optional[str] = None
    gemini_api_key: Optional[str] = None
    tavily_api_key: Optional[str] = None
    llm_provider: Optional[str] = None
    last_brand: Optional[str] = None


def build_assistant(config: AssistantConfig) -> Assistant:
    return Assistant(config, fetcher=FETCHER, session=HTTP_SESSION)


def _assistant(keys: Optional[KeyOverrides]) -> Assistant:
    overrides = keys.model_dump() if keys else None
    return build_assistant(BASE_CONFIG.merged(overrides))


def _persona(value: Optional[str], required: bool = False) -> Optional[Persona]:
    if not value:
        if required:
            raise HTTPException(status_code=422, detail="persona is required")
        return None
    p = Persona.parse(value)
    if p is None:
        raise HTTPException(status_code=422, detail=f"Unknown persona: {value}")
    return p


def _run(label: str, fn, *args):
    """Run with a hard timeout so the API never hangs; map provider errors to HTTP."""
    pool = futures.ThreadPoolExecutor(max_workers=1, thread_name_prefix=f"lapscout-{label}")
    try:
        fut = pool.submit(fn, *args)
        return fut.result(timeout=RUN_TIMEOUT_SEC)
    except futures.TimeoutError:
        logger.error(f"/{label} timed out after {RUN_TIMEOUT_SEC}s")
        raise HTTPException(status_code=504, detail=f"Timed out after {RUN_TIMEOUT_SEC}s")
    except MissingApiKeyError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ProviderError as e:
        logger.warning(f"/{label} provider failure: {e}")
        raise HTTPException(status_code=503, detail=f"AI provider unavailable, please try again. ({e})")
    except HTTPException:
        raise
    except Exception as e:
        logger.exception(f"/{label} failed")
        raise HTTPException(status_code=500, detail=str(e))
    finally:
        # a timed-out worker finishes in the background; the request does not wait for it
        pool.shutdown(wait=False, cancel_futures=True)


# ---------- Health ----------

@app.get("/healthz")
def healthz():
    return {
        "ok": True,
        "fetch_mode": BASE_CONFIG.fetch_mode,
        "llm_configured": BASE_CONFIG.has_llm_key(),
        "search_configured": bool(BASE_CONFIG.tavily_api_key),
    }


@app.get("/personas")
def personas():
    return {p.value: PERSONA_WEIGHTS[p].as_dict() for p in Persona}


# ---------- Core ----------

class ExtractRequest(BaseModel):
    content: str
    url: str = ""


class ExtractResponse(BaseModel):
    found: bool
    retailer: Optional[str] = None
    fields: Dict[str, Any] = Field(default_factory=dict)
    rules: Dict[str, str] = Field(default_factory=dict)


@app.post("/extract", response_model=ExtractResponse)
def extract_fields(req: ExtractRequest):
    ex = extract(req.content, req.url)
    if ex is None:
        return ExtractResponse(found=False)
    return ExtractResponse(found=True, retailer=ex.retailer, fields=ex.as_partial(), rules=ex.rule_ids())


class MatchRequest(BaseModel):
    query: str = Field(..., min_length=1)


class MatchResponse(BaseModel):
    laptop: Optional[LaptopSpec] = None
    brand: Optional[str] = None
    model: Optional[str] = None
    specs: List[str] = Field(default_factory=list)


@app.post("/match", response_model=MatchResponse)
def match_query(req: MatchRequest):
    hints = parse_query(req.query)
    laptop = match(req.query, get_catalog(), hints)
    return MatchResponse(laptop=laptop, brand=hints.brand, model=hints.model, specs=hints.specs)


class MockRequest(BaseModel):
    url: Optional[str] = None
    brand: Optional[str] = None
    seed: Optional[int] = None


@app.post("/mock", response_model=LaptopSpec)
def mock_laptop(req: MockRequest):
    rng = random.Random(req.seed) if req.seed is not None else None
    return generate_mock(url=req.url, brand=req.brand, rng=rng)


class RankRequest(BaseModel):
    laptops: List[LaptopSpec]
    persona: str


@app.post("/rank", response_model=List[ScoredLaptop])
def rank(req: RankRequest):
    return rank_laptops(req.laptops, _persona(req.persona, required=True))


class ValidateRequest(BaseModel):
    url: str


@app.post("/validate-url")
def validate_url(req: ValidateRequest):
    ok, errors = validate_laptop_url(req.url)
    return {"ok": ok, "errors": errors, "suggestion": None if ok else suggest_correction(req.url)}


# ---------- Orchestration ----------

class CompareRequest(BaseModel):
    queries: List[str] = Field(..., min_length=1, max_length=10)
    persona: Optional[str] = None
    keys: Optional[KeyOverrides] = None


@app.post("/compare", response_model=Comparison)
def compare(req: CompareRequest):
    logger.info(f"Compare: {req.queries} persona={req.persona}")
    persona = _persona(req.persona)
    return _run("compare", _assistant(req.keys).compare, req.queries, persona)


class ChatRequest(BaseModel):
    message: str = Field(..., min_length=1)
    history: List[ChatMessage] = Field(default_factory=list)
    persona: Optional[str] = None
    keys: Optional[KeyOverrides] = None


@app.post("/chat", response_model=AssistantReply)
def chat(req: ChatRequest):
    logger.info(f"Chat: {req.message!r}")
    persona = _persona(req.persona)
    return _run("chat", _assistant(req.keys).handle_message, req.message, req.history, persona)


class ExplainRequest(BaseModel):
    laptops: List[LaptopSpec] = Field(..., min_length=1)
    persona: Optional[str] = None
    keys: Optional[KeyOverrides] = None


@app.post("/explain")
def explain(req: ExplainRequest):
    persona = _persona(req.persona)
    text = _run("explain", _assistant(req.keys).explain, req.laptops, persona)
    return {"text": text}


@app.get("/")
def root():
    return {"name": "lapscout", "docs": "/docs"}
