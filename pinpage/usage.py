import math

# USD per 1K tokens.
PRICING = {
    "claude-haiku-4-5": {"prompt": 0.001, "completion": 0.005},
    "claude-sonnet-4-5": {"prompt": 0.003, "completion": 0.015},
    "claude-opus-4-1": {"prompt": 0.015, "completion": 0.075},
}


def estimate_tokens(text: str) -> int:
    """Rough token count at ~4 characters per token."""
    if not text:
        return 0
    return math.ceil(len(text) / 4)


def estimate_cost(model: str, prompt_tokens: int, completion_tokens: int) -> float:
    if model not in PRICING:
        raise ValueError(f"no pricing known for model '{model}'")
    model_pricing = PRICING[model]
    prompt_cost = (prompt_tokens / 1000) * model_pricing["prompt"]
    completion_cost = (completion_tokens / 1000) * model_pricing["completion"]
    return prompt_cost + completion_cost


def format_cost(cost: float) -> str:
    if cost < 0.0001:
        return "<$0.0001"
    return f"${cost:.4f}"
