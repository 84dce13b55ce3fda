"""
Subscription plan policy.

Maps a plan to the pages it unlocks and the monthly appointment quota it
allows. Every function accepts raw stored values and treats anything that
is not a known plan as ``free``.
"""

from decimal import Decimal
from enum import Enum
from typing import Dict, FrozenSet, List, Optional, Union


class Plan(str, Enum):
    FREE = "free"
    BASIC = "basic"
    PREMIUM = "premium"


class Feature(str, Enum):
    DASHBOARD = "dashboard"
    AGENDA = "agenda"
    CLIENTS = "clients"
    SERVICES = "services"
    FINANCIAL = "financial"
    REPORTS = "reports"
    PLANS = "plans"


FREE_MONTHLY_QUOTA = 10

# Dashboard warns once this share of the quota is used
QUOTA_WARNING_PERCENTAGE = 80

_BASE_FEATURES = frozenset({
    Feature.DASHBOARD,
    Feature.AGENDA,
    Feature.CLIENTS,
    Feature.SERVICES,
    Feature.PLANS,
})

PLAN_FEATURES: Dict[Plan, FrozenSet[Feature]] = {
    Plan.FREE: _BASE_FEATURES,
    Plan.BASIC: _BASE_FEATURES,
    Plan.PREMIUM: _BASE_FEATURES | {Feature.FINANCIAL, Feature.REPORTS},
}

_PLAN_RANK = {Plan.FREE: 0, Plan.BASIC: 1, Plan.PREMIUM: 2}

PLAN_CATALOG: List[Dict] = [
    {
        "id": Plan.FREE,
        "name": "Free",
        "description": "Up to 10 appointments per month",
        "price": Decimal("0.00"),
        "features": [
            "Basic agenda",
            "Client records",
            "Service catalogue",
            "Limit of 10 appointments",
        ],
        "highlighted": False,
    },
    {
        "id": Plan.BASIC,
        "name": "Basic",
        "description": "Unlimited appointments",
        "price": Decimal("29.90"),
        "features": [
            "Unlimited appointments",
            "Full dashboard",
            "Notifications",
            "Appointment history",
        ],
        "highlighted": False,
    },
    {
        "id": Plan.PREMIUM,
        "name": "Premium",
        "description": "Every advanced feature",
        "price": Decimal("49.90"),
        "features": [
            "Everything in Basic",
            "Payment integration",
            "Detailed reports",
            "Financial control",
            "Priority support",
        ],
        "highlighted": True,
    },
]

# Checkout line item per paid plan
CHECKOUT_ITEMS: Dict[Plan, Dict] = {
    Plan.BASIC: {"title": "Basic Plan - ProServ", "price": Decimal("29.90")},
    Plan.PREMIUM: {"title": "Premium Plan - ProServ", "price": Decimal("49.90")},
}


def normalize_plan(plan: Union[Plan, str, None]) -> Plan:
    """Return the plan for a stored value, defaulting to free."""
    if isinstance(plan, Plan):
        return plan
    try:
        return Plan((plan or "").strip().lower())
    except ValueError:
        return Plan.FREE


def feature_set(plan: Union[Plan, str, None]) -> FrozenSet[Feature]:
    """Pages unlocked by a plan."""
    return PLAN_FEATURES[normalize_plan(plan)]


def has_feature(plan: Union[Plan, str, None], feature: Feature) -> bool:
    return feature in feature_set(plan)


def monthly_quota(plan: Union[Plan, str, None]) -> Optional[int]:
    """Monthly appointment ceiling. Returns None for unlimited."""
    if normalize_plan(plan) == Plan.FREE:
        return FREE_MONTHLY_QUOTA
    return None


def is_downgrade(current: Union[Plan, str, None], target: Union[Plan, str, None]) -> bool:
    """Whether moving from ``current`` to ``target`` loses features."""
    return _PLAN_RANK[normalize_plan(target)] < _PLAN_RANK[normalize_plan(current)]


def is_paid(plan: Union[Plan, str, None]) -> bool:
    return normalize_plan(plan) in CHECKOUT_ITEMS
