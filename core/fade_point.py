import uuid
from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True, eq=False)
class FadePoint:
    """One revealed location and the moment it was scratched.

    Equality is identity: two points at the same spot and time are still
    different points.
    """

    location: Tuple[float, float]
    timestamp: float
    id: uuid.UUID = field(default_factory=uuid.uuid4)
