from typing import Dict, FrozenSet, Mapping
from vibecommerce.models.order import ORDER_STATUSES


class OrderStatusPolicy:
    """Transition table deciding which status changes an admin may make"""

    def __init__(self, name: str, transitions: Mapping[str, FrozenSet[str]]):
        self.name = name
        self.transitions: Dict[str, FrozenSet[str]] = dict(transitions)

    def allows(self, current: str, new: str) -> bool:
        return new in self.transitions.get(current, frozenset())


# Any status to any status, including backwards moves for manual corrections
PERMISSIVE = OrderStatusPolicy(
    "permissive",
    {status: frozenset(ORDER_STATUSES) for status in ORDER_STATUSES},
)

STRICT = OrderStatusPolicy(
    "strict",
    {
        "pending": frozenset({"pending", "processing", "cancelled"}),
        "processing": frozenset({"processing", "shipped", "cancelled"}),
        "shipped": frozenset({"shipped", "delivered"}),
        "delivered": frozenset({"delivered"}),
        "cancelled": frozenset({"cancelled"}),
    },
)

POLICIES = {policy.name: policy for policy in (PERMISSIVE, STRICT)}


def get_policy(name: str) -> OrderStatusPolicy:
    try:
        return POLICIES[name]
    except KeyError:
        raise ValueError(f"Unknown order status policy: {name!r}. Allowed: {', '.join(POLICIES)}")
