"""Item record built from an item node and the properties it links to."""

from dataclasses import dataclass, field


@dataclass
class Item:
    id: str = ""
    name: str = ""
    type: str = ""
    description: str = ""
    weight: float = 0
    value: float = 0
    set: str = ""
    slot: str = ""
    tier: str = ""
    attributes: dict[str, float] = field(default_factory=dict)
