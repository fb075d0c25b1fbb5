# lapscout/agent/summary.py
from __future__ import annotations

import re
from typing import List, Optional, Sequence

from lapscout.models.laptop import LaptopSpec, Persona, ScoredLaptop
from lapscout.utils.money import format_price

# ---------- Comparison summary ----------

def comparison_prompt(laptops: Sequence[LaptopSpec], persona: Optional[Persona]) -> str:
    lines = [
        f"Compare these laptops{f' for a {persona.value} user' if persona else ''}. "
        "Give a short recommendation, key differences, and who each one suits.",
        "",
    ]
    for lp in laptops:
        lines.append(
            f"- {lp.name} ({lp.brand}, {format_price(lp.price, lp.currency)}): {lp.cpu}, {lp.gpu or 'integrated graphics'}, "
            f"{lp.ram}, {lp.storage}, {lp.screen}, battery {lp.battery}, weight {lp.weight}, "
            f"rating {lp.rating}/5"
        )
    return "\n".join(lines)


def heuristic_summary(
    laptops: Sequence[LaptopSpec],
    ranked: Optional[List[ScoredLaptop]] = None,
    persona: Optional[Persona] = None,
) -> str:
    if not laptops:
        return "No laptops to compare yet. Paste a product link or name a model."

    if ranked:
        winner = ranked[0].laptop
        reason = f"scores {ranked[0].score}/100 for {persona.value if persona else 'this use'}"
        if ranked[0].why:
            reason += f" ({ranked[0].why})"
    else:
        winner = max(laptops, key=lambda lp: (lp.rating, -lp.price))
        reason = f"has the best rating ({winner.rating}/5) for the money"

    context = f" for {persona.value} use" if persona else ""
    out = [f"### Quick recommendation{context}", "", f"**Winner**: {winner.name} {reason}.", ""]

    if len(laptops) > 1:
        out.append("### Specs showdown")
        for lp in laptops:
            out.append(f"- **{lp.name}**: {lp.cpu}, {lp.ram}, {lp.storage}, {lp.screen}; {lp.weight}, {lp.battery}")
        out.append("")

    prices = [lp.price for lp in laptops if lp.price]
    if prices:
        cur = laptops[0].currency
        out.append(f"**Budget**: {format_price(min(prices), cur)} - {format_price(max(prices), cur)}")
    return "\n".join(out)


# ---------- Offline chat replies ----------

CANNED_TOPICS = [
    (r'budget|cheap|affordable', (
        "For budget laptops, look at the ASUS VivoBook 15, Acer Aspire 5 or HP Pavilion 15 under $500, "
        "and the Lenovo IdeaPad 5 or ASUS ZenBook 14 around $500-$800. Last-generation processors are "
        "still very capable, and back-to-school sales are a good time to buy.\n\nWhat's your target budget?"
    )),
    (r'gaming|\bgames?\b', (
        "For gaming, prioritise the GPU: an RTX 4060 or better, a recent Core i5/Ryzen 5 H-series CPU, "
        "16GB RAM and a 144Hz display. Good picks are the ASUS ROG Strix G16, Lenovo Legion 5 Pro and MSI Katana 15."
    )),
    (r'programming|coding|development|developer', (
        "For programming, aim for 16GB RAM (32GB if you run containers or VMs), a fast SSD of 512GB or more "
        "and a comfortable keyboard. The MacBook Pro 14\", ThinkPad X1 Carbon and Dell XPS 13 Plus are strong choices."
    )),
    (r'student|school|university|college', (
        "For students, portability and battery matter most: the MacBook Air M2, ASUS ZenBook 14 OLED and "
        "HP Spectre x360 all last a full day. Check for education discounts before you buy."
    )),
    (r'business|work|office', (
        "For business use, look for vPro or Apple silicon, a good webcam, and solid build quality. "
        "The ThinkPad X1 Carbon and Dell XPS line are the usual safe bets."
    )),
    (r'specs|cpu|ram|processor', (
        "Quick spec guide: Core i5/Ryzen 5 is good, i7/Ryzen 7 is great, Apple M-series is excellent. "
        "8GB RAM is the minimum, 16GB the sweet spot. Always pick an SSD, 512GB if you can."
    )),
    (r'brand|apple|dell|\bhp\b|lenovo|asus', (
        "Apple and ThinkPad lead on build quality, ASUS and Lenovo on value, and ASUS ROG and MSI on gaming. "
        "What matters most to you: reliability, performance or price?"
    )),
]

GENERAL_REPLY = (
    "I can help you find the right laptop. Tell me what you'll use it for, your budget, and whether you "
    "prefer Windows or Mac, or paste product links to compare them side by side."
)


def canned_reply(message: str, persona: Optional[Persona] = None) -> str:
    low = (message or "").lower()
    for pattern, reply in CANNED_TOPICS:
        if re.search(pattern, low):
            return reply
    if persona:
        return GENERAL_REPLY + f"\n\nSince you're shopping for {persona.value} use, I'll tailor suggestions to that."
    return GENERAL_REPLY
