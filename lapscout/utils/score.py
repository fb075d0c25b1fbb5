# lapscout/utils/score.py
from __future__ import annotations

import math
import re
from typing import Iterable, List, Optional, Sequence, Tuple

from lapscout.models.laptop import LaptopSpec, Persona, ScoredLaptop

# ---------- Lookup tables ----------

# (substring, score); first hit wins, so keep specific models ahead of families
GPU_TABLE: Sequence[Tuple[str, int]] = (
    ("rtx 4090", 100),
    ("rtx 4080", 95),
    ("rtx 4070", 90),
    ("rtx 4060", 80),
    ("rtx 4050", 70),
    ("rtx 3080", 85),
    ("rtx 3070", 80),
    ("rtx 3060", 70),
    ("rtx 3050", 60),
    ("gtx 1650", 50),
    ("rx 7900", 95),
    ("rx 7800", 85),
    ("rx 7700", 80),
    ("rx 7600", 70),
    ("rx 6800", 75),
    ("rx 6700", 70),
    ("rx 6600", 60),
    ("iris xe", 45),
)
GPU_ABSENT = 30
GPU_UNKNOWN = 40

# family keys -> (newest-gen keys, newest score, previous-gen keys, previous score, older score)
CPU_TABLE: Sequence[Tuple[Tuple[str, ...], Tuple[str, ...], int, Tuple[str, ...], int, int]] = (
    (("i9", "ultra 9"), ("14", "13"), 100, ("12", "11"), 90, 85),
    (("i7", "ultra 7"), ("14", "13"), 90, ("12", "11"), 80, 75),
    (("i5", "ultra 5"), ("14", "13"), 75, ("12", "11"), 65, 60),
    (("ryzen 9",), ("7000", "8000"), 100, ("6000", "5000"), 90, 85),
    (("ryzen 7",), ("7000", "8000"), 90, ("6000", "5000"), 80, 75),
    (("ryzen 5",), ("7000", "8000"), 75, ("6000", "5000"), 65, 60),
)
APPLE_SILICON: Sequence[Tuple[str, int]] = (("m3", 95), ("m2", 85), ("m1", 75))
CPU_UNKNOWN = 50

# string-parse defaults when a field carries no digits
DEFAULT_RAM_GB = 8.0
DEFAULT_STORAGE_GB = 256.0
DEFAULT_BATTERY_HOURS = 8.0
DEFAULT_WEIGHT_KG = 2.0
DEFAULT_SCREEN_IN = 15.0

_INT_RE = re.compile(r'(\d+)')
_DEC_RE = re.compile(r'(\d+\.?\d*)')
_RYZEN_SERIES_RE = re.compile(r'ryzen\s+[3579]\s+(?:pro\s+)?(\d)\d{3}')


def _clamp(x: float, lo: float = 0.0, hi: float = 100.0) -> float:
    if not isinstance(x, (int, float)) or math.isnan(x):
        return lo
    return max(lo, min(hi, x))


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


# ---------- Tier tables ----------

def normalize_cpu(cpu: Optional[str]) -> int:
    s = (cpu or "").lower()
    if not s:
        return CPU_UNKNOWN
    # "ryzen 7 7745hx" belongs to the 7000 series
    series = _RYZEN_SERIES_RE.search(s)
    if series:
        s = f"{s} {series.group(1)}000"
    for families, new_keys, new_score, prev_keys, prev_score, old_score in CPU_TABLE:
        if any(f in s for f in families):
            if any(k in s for k in new_keys):
                return new_score
            if any(k in s for k in prev_keys):
                return prev_score
            return old_score
    for key, score in APPLE_SILICON:
        if key in s:
            return score
    return CPU_UNKNOWN


def normalize_gpu(gpu: Optional[str]) -> int:
    s = (gpu or "").lower()
    if not s.strip():
        return GPU_ABSENT
    for key, score in GPU_TABLE:
        if key in s:
            return score
    if "radeon" in s and "integrated" in s:
        return 40
    if "intel" in s and "uhd" in s:
        return 35
    return GPU_UNKNOWN


# ---------- Numeric fallbacks ----------

def _first_int(text: Optional[str]) -> Optional[float]:
    m = _INT_RE.search(text or "")
    return float(m.group(1)) if m else None


def _first_decimal(text: Optional[str]) -> Optional[float]:
    m = _DEC_RE.search(text or "")
    try:
        return float(m.group(1)) if m else None
    except ValueError:
        return None


def _pick(shadow: Optional[float], parsed: Optional[float], default: float) -> float:
    if isinstance(shadow, (int, float)) and math.isfinite(shadow):
        return float(shadow)
    if parsed is not None:
        return parsed
    return default


def ram_gb(laptop: LaptopSpec) -> float:
    return _pick(laptop.ram_gb, _first_int(laptop.ram), DEFAULT_RAM_GB)


def storage_gb(laptop: LaptopSpec) -> float:
    if isinstance(laptop.storage_gb, (int, float)) and math.isfinite(laptop.storage_gb):
        return float(laptop.storage_gb)
    value = _first_int(laptop.storage)
    if value is None:
        return DEFAULT_STORAGE_GB
    return value * 1024 if "tb" in (laptop.storage or "").lower() else value


def battery_hours(laptop: LaptopSpec) -> float:
    return _pick(laptop.battery_hours, _first_decimal(laptop.battery), DEFAULT_BATTERY_HOURS)


def weight_kg(laptop: LaptopSpec) -> float:
    return _pick(laptop.weight_kg, _first_decimal(laptop.weight), DEFAULT_WEIGHT_KG)


def screen_in(laptop: LaptopSpec) -> float:
    return _pick(laptop.screen_in, _first_decimal(laptop.screen), DEFAULT_SCREEN_IN)


# ---------- Sub-scores (all 0..100) ----------

def ram_score(gb: float) -> float:
    return _clamp((gb / 64) * 100)


def storage_score(gb: float) -> float:
    return _clamp((gb / 2048) * 100)


def battery_score(hours: float) -> float:
    return _clamp(((hours - 4) / 16) * 100)


def weight_score(kg: float) -> float:
    return _clamp(100 - ((kg - 0.5) / 2.5) * 100)


def screen_score(inches: float) -> float:
    return _clamp(100 - abs(inches - 15) * 10)


def price_penalty(price: float, weight: float) -> float:
    normalized = _clamp((price - 500) / 2500, 0.0, 1.0)
    return normalized * weight * 100


def sub_score(laptop: LaptopSpec, dim: str) -> float:
    if dim == "gpu":
        return float(normalize_gpu(laptop.gpu))
    if dim == "cpu":
        return float(normalize_cpu(laptop.cpu))
    if dim == "ram":
        return ram_score(ram_gb(laptop))
    if dim == "storage":
        return storage_score(storage_gb(laptop))
    if dim == "battery":
        return battery_score(battery_hours(laptop))
    if dim == "weight":
        return weight_score(weight_kg(laptop))
    if dim == "screen":
        return screen_score(screen_in(laptop))
    return 0.0


# ---------- Composite ----------

def calculate_score(laptop: LaptopSpec, persona: Persona) -> int:
    weights = persona.weights
    total = 0.0
    for dim, w in weights.active():
        total += sub_score(laptop, dim) * w
    if weights.price_penalty:
        total -= price_penalty(laptop.price or 0.0, weights.price_penalty)
    return _round_half_up(_clamp(total))


def why_choose(laptop: LaptopSpec) -> str:
    bits: List[str] = []

    price = laptop.price or 0.0
    if price > 0:
        if price < 1000:
            bits.append("great value")
        elif price < 1800:
            bits.append("mid-range price")
        else:
            bits.append("premium tier")

    gb = ram_gb(laptop)
    if gb >= 16:
        bits.append(f"{int(gb)}GB RAM")

    cpu = (laptop.cpu or "").strip()
    if cpu:
        nice = ["i9", "i7", "i5", "Ultra 9", "Ultra 7", "Ryzen 9", "Ryzen 7", "Ryzen 5", "M3", "M2", "M1"]
        hit = next((t for t in nice if t.lower() in cpu.lower()), None)
        if hit:
            bits.append(hit)

    if normalize_gpu(laptop.gpu) >= 60:
        bits.append("discrete GPU")

    if battery_hours(laptop) >= 12:
        bits.append("all-day battery")

    if weight_kg(laptop) <= 1.4:
        bits.append("lightweight")

    screen = (laptop.screen or "").lower()
    if "oled" in screen or "retina" in screen:
        bits.append("premium display")

    if laptop.rating >= 4.5:
        bits.append(f"{laptop.rating:.1f}/5 rating")

    seen = set()
    out: List[str] = []
    for b in bits:
        k = b.lower()
        if k not in seen:
            seen.add(k)
            out.append(b)
    return " • ".join(out[:5])


def rank_laptops(laptops: Iterable[LaptopSpec], persona: Persona) -> List[ScoredLaptop]:
    """Score every laptop for ``persona``, best first; equal scores keep input order."""
    scored = [
        ScoredLaptop(laptop=lp, score=calculate_score(lp, persona), why=why_choose(lp))
        for lp in laptops or []
    ]
    scored.sort(key=lambda s: s.score, reverse=True)
    return scored
