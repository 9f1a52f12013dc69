"""Risk scoring engine - heuristic loan risk score and level"""

from loan_portfolio.domain.models import RiskAssessment, RiskInput, RiskLevel

BASE_SCORE = 50


def _credit_adjustment(credit_score: int | None) -> int:
    # 600-649 falls through every bucket and is left unadjusted
    if not credit_score:
        return 0
    if credit_score >= 750:
        return -20
    elif credit_score >= 700:
        return -15
    elif credit_score >= 650:
        return -5
    elif credit_score < 600:
        return 20
    return 0


def loan_to_value(amount: float, collateral: float | None) -> float:
    """LTV percentage; missing or zero collateral counts as fully unsecured (100%)"""
    return amount / collateral * 100 if collateral else 100.0


def _ltv_adjustment(ltv: float) -> int:
    # 80-90 inclusive is left unadjusted
    if ltv < 50:
        return -15
    elif ltv < 80:
        return -5
    elif ltv > 90:
        return 15
    return 0


def _rate_adjustment(interest_rate_percent: float) -> int:
    if interest_rate_percent > 8:
        return 10
    elif interest_rate_percent < 4:
        return -10
    return 0


def _term_adjustment(term_months: int) -> int:
    if term_months > 180:  # over 15 years
        return 5
    elif term_months < 36:  # under 3 years
        return -5
    return 0


def score_risk(risk_input: RiskInput) -> int:
    """
    Calculate risk score from 0 (lowest risk) to 100 (highest risk).

    Additive adjustments on a base of 50:
    - Credit score: >=750 -20, >=700 -15, >=650 -5, <600 +20
    - Loan-to-value: <50% -15, <80% -5, >90% +15
    - Interest rate: >8% +10, <4% -10
    - Term: >180 months +5, <36 months -5
    """
    score = BASE_SCORE
    score += _credit_adjustment(risk_input.credit_score)
    score += _ltv_adjustment(loan_to_value(risk_input.amount, risk_input.collateral))
    score += _rate_adjustment(risk_input.interest_rate_percent)
    score += _term_adjustment(risk_input.term_months)

    return max(0, min(100, score))


def classify_risk(score: float) -> RiskLevel:
    """
    Map risk score to a level.

    Bands:
    - 0 - 29:  low
    - 30 - 59: medium
    - 60 - 79: high
    - 80+:     very-high
    """
    if score < 30:
        return RiskLevel.LOW
    elif score < 60:
        return RiskLevel.MEDIUM
    elif score < 80:
        return RiskLevel.HIGH
    else:
        return RiskLevel.VERY_HIGH


def assess_risk(risk_input: RiskInput) -> RiskAssessment:
    """Main entry point: score the loan and derive its level"""
    score = score_risk(risk_input)
    return RiskAssessment(score=score, level=classify_risk(score))
