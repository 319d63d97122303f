"""Shop eligibility rules.

Each rule exists twice: as a document-database filter and as a Python
predicate over a raw shop document. Both must agree, since the sample store
evaluates the same queries in-process when no database is configured.
"""

from typing import Any

from ..models.enums import PAID_STATUS, RailPolicy

# =============================================================================
# DATABASE FILTERS
# =============================================================================


def paid_filter(require_paid: bool) -> dict[str, Any]:
    """Paid shops; missing or null status also counts unless ``require_paid``."""
    if require_paid:
        return {"paymentStatus": PAID_STATUS}
    return {
        "$or": [
            {"paymentStatus": PAID_STATUS},
            {"paymentStatus": {"$exists": False}},
            {"paymentStatus": None},
        ]
    }


def name_filter() -> dict[str, Any]:
    return {"shopName": {"$exists": True, "$nin": [None, ""]}}


def coordinates_filter() -> dict[str, Any]:
    # $type "number" rejects missing, null and non-numeric values
    return {
        "latitude": {"$type": "number"},
        "longitude": {"$type": "number"},
    }


def plan_filter(policy: RailPolicy) -> dict[str, Any]:
    accepted = {"planType": {"$in": [plan.value for plan in policy.plan_types]}}
    if not policy.include_untagged:
        return accepted
    return {
        "$or": [
            accepted,
            {"planType": {"$exists": False}},
            {"planType": None},
        ]
    }


def eligibility_filter(
    policy: RailPolicy, require_paid: bool, require_coordinates: bool = True
) -> dict[str, Any]:
    """Combine every rule that applies to a ranking query."""
    clauses = [name_filter(), paid_filter(require_paid)]
    if require_coordinates:
        clauses.append(coordinates_filter())
    if policy.filters_plan:
        clauses.append(plan_filter(policy))
    return {"$and": clauses}


# =============================================================================
# IN-PROCESS PREDICATES
# =============================================================================


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_paid(shop: dict[str, Any], require_paid: bool) -> bool:
    status = shop.get("paymentStatus")
    if status == PAID_STATUS:
        return True
    return not require_paid and status is None


def has_name(shop: dict[str, Any]) -> bool:
    return shop.get("shopName") not in (None, "")


def has_coordinates(shop: dict[str, Any]) -> bool:
    return _is_number(shop.get("latitude")) and _is_number(shop.get("longitude"))


def matches_plan(shop: dict[str, Any], policy: RailPolicy) -> bool:
    if not policy.filters_plan:
        return True
    plan = shop.get("planType")
    if plan is None:
        return policy.include_untagged
    return plan in {p.value for p in policy.plan_types}


def is_eligible(
    shop: dict[str, Any],
    policy: RailPolicy,
    require_paid: bool,
    require_coordinates: bool = True,
) -> bool:
    if require_coordinates and not has_coordinates(shop):
        return False
    return has_name(shop) and is_paid(shop, require_paid) and matches_plan(shop, policy)
