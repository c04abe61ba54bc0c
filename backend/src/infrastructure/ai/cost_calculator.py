"""Oracle call pricing.

Costs are kept as integer micro-USD so analytics rows can be summed without
float drift.
"""

from typing import Dict, Tuple

# USD per 1M tokens as (prompt, completion)
OPENAI_PRICING: Dict[str, Tuple[float, float]] = {
    "gpt-4o-mini": (0.150, 0.600),
    "gpt-4o": (2.50, 10.00),
    "gpt-4.1-mini": (0.40, 1.60),
    "gpt-4.1-nano": (0.10, 0.40),
}


def calculate_cost_micros(model: str, prompt_tokens: int, completion_tokens: int) -> int:
    """Price one chat completion in micro-USD.

    Raises:
        ValueError: If the model has no price entry
    """
    rates = OPENAI_PRICING.get(model.lower())
    if rates is None:
        raise ValueError(f"No pricing for model: {model}")

    prompt_rate, completion_rate = rates
    # rate is per million tokens and the result is in millionths of a dollar
    return int(round(prompt_tokens * prompt_rate + completion_tokens * completion_rate))


def format_cost_usd(cost_micros: int) -> str:
    """Render micro-USD as a dollar string, e.g. 450 -> '$0.000450'."""
    return f"${cost_micros / 1_000_000:.6f}"
