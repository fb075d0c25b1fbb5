# lapscout/models/laptop.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

# where a record came from, best first
DataSource = Literal["structured", "scraped", "catalog", "mock"]


class LaptopSpec(BaseModel):
    """
    One laptop as shown to the user.

    Spec strings (cpu, ram, storage, ...) are kept exactly as found; the
    numeric shadow fields are filled in when they are known and the scoring
    engine parses the strings otherwise.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    url: str = ""
    name: str
    brand: str
    seller: str = "Unknown Store"
    availability: str = "Available Online"
    os: str = "Windows 11"

    price: float = Field(0.0, ge=0)
    currency: str = "$"

    cpu: str
    gpu: Optional[str] = None
    ram: str
    storage: str = "Not specified"
    storage_type: Optional[str] = None
    screen: str = "Not specified"
    battery: str = "Not specified"
    weight: str = "Not specified"

    ram_gb: Optional[float] = None
    storage_gb: Optional[float] = None
    battery_hours: Optional[float] = None
    weight_kg: Optional[float] = None
    screen_in: Optional[float] = None

    rating: float = Field(0.0, ge=0, le=5)
    review_count: int = Field(0, ge=0, alias="reviewCount")

    image: str = ""
    images: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    specs_raw: Dict[str, str] = Field(default_factory=dict)
    data_source: DataSource = "catalog"


@dataclass(frozen=True)
class PersonaWeights:
    gpu: float = 0.0
    cpu: float = 0.0
    ram: float = 0.0
    storage: float = 0.0
    battery: float = 0.0
    weight: float = 0.0
    screen: float = 0.0
    price_penalty: float = 0.0

    def active(self) -> Iterator[Tuple[str, float]]:
        """Positive-weight dimensions, price penalty excluded."""
        for dim in ("gpu", "cpu", "ram", "storage", "battery", "weight", "screen"):
            w = getattr(self, dim)
            if w:
                yield dim, w

    def as_dict(self) -> Dict[str, float]:
        out = dict(self.active())
        if self.price_penalty:
            out["price_penalty"] = self.price_penalty
        return out


class Persona(str, Enum):
    GAMING = "Gaming"
    CREATIVE = "Creative"
    PROGRAMMING = "Programming"
    STUDENT = "Student"
    PORTABLE = "Portable"

    @property
    def weights(self) -> PersonaWeights:
        return PERSONA_WEIGHTS[self]

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["Persona"]:
        """Case-insensitive lookup; also understands the older user-type names."""
        if isinstance(value, Persona):
            return value
        key = (value or "").strip().lower()
        if not key:
            return None
        for p in cls:
            if p.value.lower() == key:
                return p
        return _USER_TYPE_ALIASES.get(key)


PERSONA_WEIGHTS: Dict[Persona, PersonaWeights] = {
    Persona.GAMING: PersonaWeights(gpu=0.40, cpu=0.25, ram=0.15, storage=0.05, price_penalty=0.15),
    Persona.CREATIVE: PersonaWeights(cpu=0.30, ram=0.25, gpu=0.20, storage=0.15, price_penalty=0.10),
    Persona.PROGRAMMING: PersonaWeights(cpu=0.35, ram=0.30, battery=0.10, weight=0.10, price_penalty=0.15),
    Persona.STUDENT: PersonaWeights(price_penalty=0.30, weight=0.20, battery=0.20, ram=0.15, storage=0.15),
    Persona.PORTABLE: PersonaWeights(weight=0.35, battery=0.35, screen=0.10, ram=0.10, price_penalty=0.10),
}

_USER_TYPE_ALIASES: Dict[str, Persona] = {
    "gamer": Persona.GAMING,
    "game": Persona.GAMING,
    "creator": Persona.CREATIVE,
    "developer": Persona.PROGRAMMING,
    "business": Persona.PROGRAMMING,
    "coding": Persona.PROGRAMMING,
    "casual": Persona.STUDENT,
    "travel": Persona.PORTABLE,
}


class ScoredLaptop(BaseModel):
    laptop: LaptopSpec
    score: int = Field(..., ge=0, le=100)
    why: str = ""
