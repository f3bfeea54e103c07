"""Listing quality gate for new deals."""

from decimal import Decimal

from dealdesk.domain.entities import Deal, DealQualityReport
from dealdesk.domain.fees import to_decimal

MIN_DESCRIPTION_LENGTH = 20
MAX_ASSIGNMENT_FEE_RATIO = Decimal("0.20")
ISSUE_PENALTY = 25
WARNING_PENALTY = 10


def evaluate_deal_quality(deal: Deal) -> DealQualityReport:
    """Check a listing for missing essentials and weak spots.

    Issues block the listing; warnings only prevent automatic approval.
    """
    issues = []
    warnings = []

    if not deal.address:
        issues.append("Missing address")
    if not deal.city:
        issues.append("Missing city")
    if not deal.state:
        issues.append("Missing state")
    if not deal.asking_price or to_decimal(deal.asking_price) <= 0:
        issues.append("Invalid asking price")
    if not deal.property_type:
        issues.append("Missing property type")

    if not deal.arv_estimate:
        warnings.append("No ARV estimate provided")
    if not deal.rehab_estimate:
        warnings.append("No rehab estimate provided")
    if not deal.description or len(deal.description) < MIN_DESCRIPTION_LENGTH:
        warnings.append("Description is too short")
    if deal.assignment_fee and deal.asking_price:
        ratio = to_decimal(deal.assignment_fee) / to_decimal(deal.asking_price)
        if ratio > MAX_ASSIGNMENT_FEE_RATIO:
            warnings.append("Assignment fee exceeds 20% of asking price")

    score = max(0, 100 - len(issues) * ISSUE_PENALTY - len(warnings) * WARNING_PENALTY)
    return DealQualityReport(
        approved=not issues,
        auto_approvable=not issues and not warnings,
        issues=tuple(issues),
        warnings=tuple(warnings),
        score=score,
    )
