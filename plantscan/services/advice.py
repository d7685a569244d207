# =============================================================================
# PlantScan Backend
# services/advice.py - Treatment Advice
#
# Turns a HealthReport into an actionable treatment plan, priority list and
# timeline. Treatments and prevention practices are gathered from every
# detected disease and pest.
# =============================================================================

from typing import Dict, Any, List

from plantscan.constants import HEALTH_SEVERITY_BANDS


def severity_level(score: int) -> str:
    """
    Map an overall health score onto a severity band.

    Args:
        score: Health score (0-100)

    Returns:
        Severity level (low, medium, high, critical)
    """
    for lower_bound, level in HEALTH_SEVERITY_BANDS:
        if score >= lower_bound:
            return level
    return 'critical'


def _unique_by_id(items) -> List:
    seen = set()
    unique = []
    for item in items:
        if item.id not in seen:
            seen.add(item.id)
            unique.append(item)
    return unique


def treatment_plan(report) -> Dict[str, Any]:
    """
    Build the treatment plan for a report.

    Returns:
        dict with immediate_actions, short_term_plan, long_term_strategy,
        treatments and prevention
    """
    immediate_actions = []
    if report.overall_health < 50:
        immediate_actions.extend([
            'Isolate affected plants to prevent spread',
            'Remove severely damaged leaves or fruits',
            'Apply appropriate treatment immediately'
        ])

    conditions = list(report.diseases) + list(report.pests)
    treatments = _unique_by_id(t for c in conditions for t in c.treatments)
    prevention = _unique_by_id(p for c in conditions for p in c.prevention)

    return {
        'severity_level': severity_level(report.overall_health),
        'immediate_actions': immediate_actions,
        'short_term_plan': [
            'Monitor plant daily for changes',
            'Apply treatments as scheduled',
            'Adjust watering and nutrition',
            'Check environmental conditions'
        ],
        'long_term_strategy': [
            'Implement crop rotation',
            'Improve soil health',
            'Select disease-resistant varieties',
            'Establish integrated pest management',
            'Maintain proper plant spacing',
            'Regular monitoring and maintenance'
        ],
        'treatments': [t.to_dict() for t in treatments],
        'prevention': [p.to_dict() for p in prevention]
    }


def priority_actions(report) -> List[str]:
    actions = []

    if report.overall_health < 30:
        actions.extend([
            'URGENT: Immediate treatment required',
            'Isolate affected plants',
            'Contact local extension service if needed'
        ])

    for disease in report.diseases:
        if disease.severity == 'critical':
            actions.append(f"Critical: {disease.name} requires immediate attention")

    for pest in report.pests:
        actions.append(f"Address {pest.name} infestation")

    return actions


def treatment_timeline(report) -> Dict[str, List[str]]:
    return {
        'day1': [
            'Apply first treatment',
            'Remove affected plant parts',
            'Adjust watering schedule',
            'Improve air circulation'
        ],
        'week1': [
            'Monitor plant response',
            'Reapply treatments as needed',
            'Check for new symptoms',
            'Adjust environmental conditions'
        ],
        'week2': [
            'Evaluate treatment effectiveness',
            'Continue maintenance treatments',
            'Document progress',
            'Plan next steps'
        ],
        'month1': [
            'Complete treatment cycle',
            'Implement prevention measures',
            'Plan for next growing season',
            'Update monitoring schedule'
        ]
    }


def full_advice(report) -> Dict[str, Any]:
    """Plan, priorities and timeline for a report in one payload."""
    advice = treatment_plan(report)
    advice['priority_actions'] = priority_actions(report)
    advice['timeline'] = treatment_timeline(report)
    return advice
