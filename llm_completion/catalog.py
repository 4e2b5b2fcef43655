"""Catalog of completion models offered in the model selector."""

from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class ModelOption:
    id: str
    name: str
    description: str
    family: str


AVAILABLE_MODELS: List[ModelOption] = [
    ModelOption("gpt-5.2", "GPT-5.2", "Flagship reasoning model - most powerful", "GPT-5"),
    ModelOption("gpt-5.1", "GPT-5.1", "Advanced flagship model", "GPT-5"),
    ModelOption("gpt-5", "GPT-5", "Recommended for complex tasks", "GPT-5"),
    ModelOption("gpt-4.1", "GPT-4.1", "Improved coding & 1M context window", "GPT-4.1"),
    ModelOption("gpt-4.1-mini", "GPT-4.1 Mini", "Fast, efficient, fine-tunable", "GPT-4.1"),
    ModelOption("gpt-4.1-nano", "GPT-4.1 Nano", "Smallest and fastest", "GPT-4.1"),
    ModelOption("gpt-4o", "GPT-4o", "Multimodal, vision capable", "GPT-4o"),
    ModelOption("gpt-4o-mini", "GPT-4o Mini", "Fast and cost-effective", "GPT-4o"),
    ModelOption("o3-pro", "o3-pro", "Most capable reasoning model", "Reasoning"),
    ModelOption("o3", "o3", "Advanced reasoning with tools", "Reasoning"),
    ModelOption("o4-mini", "o4-mini", "Fast reasoning, best math/coding", "Reasoning"),
    ModelOption("o3-mini", "o3-mini", "Efficient reasoning model", "Reasoning"),
    ModelOption("o1", "o1", "Original reasoning model", "Reasoning"),
    ModelOption("o1-mini", "o1-mini", "Compact reasoning model", "Reasoning"),
]

DEFAULT_MODEL = "gpt-4o-mini"

_REASONING_PREFIXES = ("o1", "o3", "o4", "gpt-5")


def find_model(model_id: str) -> ModelOption:
    """Return the catalog entry for ``model_id``, or the first entry if unknown."""
    for option in AVAILABLE_MODELS:
        if option.id == model_id:
            return option
    return AVAILABLE_MODELS[0]


def is_reasoning_model(model_id: str) -> bool:
    """Reasoning models reject ``temperature`` and ``max_tokens``."""
    return model_id.strip().lower().startswith(_REASONING_PREFIXES)
