"""
Plan-based application limits configuration.

Single source of truth for the monthly application quota per plan.
Limits are reported to clients; no plan is billed or enforced here.
"""
from typing import Dict

DEFAULT_PLAN = "free"

# Plan -> display name and applications per calendar month
PLAN_LIMITS: Dict[str, Dict[str, object]] = {
    "free": {
        "name": "Free Plan",
        "monthly_applications": 5,
    },
    "professional": {
        "name": "Professional Plan",
        "monthly_applications": 50,
    },
}


def get_monthly_application_limit(plan_type: str) -> int:
    """
    Get the monthly application limit for a plan.

    Unknown plans fall back to the free plan.
    """
    plan_type = plan_type.lower() if plan_type else DEFAULT_PLAN
    limits = PLAN_LIMITS.get(plan_type, PLAN_LIMITS[DEFAULT_PLAN])
    return int(limits["monthly_applications"])


def get_plan_name(plan_type: str) -> str:
    plan_type = plan_type.lower() if plan_type else DEFAULT_PLAN
    return str(PLAN_LIMITS.get(plan_type, PLAN_LIMITS[DEFAULT_PLAN])["name"])
