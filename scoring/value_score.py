"""Value score: tier-derived performance per $100 spent."""
from models import Build, Score, ScoreBreakdownItem
from power import clamp_score, round_half_up
from presets import is_gaming

WEIGHT = 0.15
CONFIDENCE = 80

# Typical USD price ranges across tiers 1-10, used when a part has no price
TIER_PRICE_RANGES = {
    "cpu": (100, 700),
    "gpu": (200, 1800),
}
DEFAULT_PRICES = {"ram": 80, "motherboard": 150, "storage": 80, "psu": 100}
RAM_TIER_SCORE = 70
DEFAULT_TIER = 5


def tier_mid_price(tier: int, category: str) -> float:
    low, high = TIER_PRICE_RANGES.get(category, (200, 200))
    return low + (tier - 1) / 9 * (high - low)


def calculate_value_score(build: Build, preset: str = "custom") -> Score:
    total_price = 0.0
    tier_score = 0
    has_prices = True

    for category in ("cpu", "gpu"):
        part = build.get(category)
        if part is None:
            continue
        tier = part.specs.tier or DEFAULT_TIER
        if part.price_usd is None:
            has_prices = False
            total_price += tier_mid_price(tier, category)
        else:
            total_price += part.price_usd
        tier_score += tier * 10

    if build.ram:
        tier_score += RAM_TIER_SCORE
    for part in (build.ram, build.motherboard, *build.storage, build.psu):
        if part is None:
            continue
        if part.price_usd is None:
            has_prices = False
            total_price += DEFAULT_PRICES[part.category]
        else:
            total_price += part.price_usd

    value = 50
    breakdown = []
    if total_price > 0:
        per_hundred = tier_score / (total_price / 100)
        value = min(100, round_half_up(30 + per_hundred * 0.5))
        breakdown.append(ScoreBreakdownItem(
            "Price/performance",
            value - 50,
            f"~${total_price:,.0f} total for tier-equivalent performance." if has_prices
            else "Estimated price/performance (prices may be missing).",
        ))

    if build.cpu and build.gpu:
        diff = (build.cpu.specs.tier or 0) - (build.gpu.specs.tier or 0)
        if is_gaming(preset) and diff > 3:
            value -= 15
            breakdown.append(ScoreBreakdownItem(
                "Component imbalance", -15,
                "High-end CPU with lower-end GPU for gaming. Consider reallocating budget to GPU.",
            ))
        if abs(diff) <= 1:
            value = min(100, value + 10)
            breakdown.append(ScoreBreakdownItem(
                "Balanced components", 10, "CPU and GPU are well-matched, avoiding bottlenecks.",
            ))

    value = clamp_score(value)
    if has_prices:
        summary = (
            f"Value score is {value}. Build offers {'good' if value >= 70 else 'moderate'} "
            "price-to-performance."
        )
    else:
        summary = f"Value score is {value} (estimated, add prices for accurate scoring)."

    return Score(
        value=value,
        confidence=CONFIDENCE if has_prices else CONFIDENCE // 2,
        weight=WEIGHT,
        breakdown=tuple(breakdown),
        summary=summary,
    )
