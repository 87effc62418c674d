from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Optional, Tuple

BLOCKING = "blocking"
ADVISORY = "advisory"


@dataclass(frozen=True)
class CoherenceRule:
    severity: str
    message: str


@dataclass(frozen=True)
class Issue:
    """A coherence finding. Reported as data, never raised."""

    rule_id: str
    severity: str
    message: str
    date: Optional[date] = None
    module_id: Optional[str] = None
    module_codes: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def blocking(self) -> bool:
        return self.severity == BLOCKING


def define_coherence_rules() -> Dict[str, CoherenceRule]:
    return {
        "capacity_exceeded": CoherenceRule(
            BLOCKING,
            "{date}: {hours:g}h scheduled for {codes} (max {cap:g}h/day).",
        ),
        "shared_day": CoherenceRule(
            ADVISORY,
            "{date}: modules {codes} share the day ({hours:g}h of {cap:g}h).",
        ),
        "hours_mismatch": CoherenceRule(
            BLOCKING,
            "{code}: {assigned:g}h assigned vs {total:g}h required.",
        ),
        "weekend_not_allowed": CoherenceRule(
            BLOCKING,
            "{code}: session on {date} falls on a weekend and weekends are not allowed.",
        ),
        "holiday_not_allowed": CoherenceRule(
            BLOCKING,
            "{code}: session on {date} falls on a holiday and holidays are not allowed.",
        ),
    }


def make_issue(rule_id: str, rules: Dict[str, CoherenceRule], **data) -> Issue:
    """Render the rule message with `data` and attach the structured fields."""
    rule = rules[rule_id]
    return Issue(
        rule_id=rule_id,
        severity=rule.severity,
        message=rule.message.format(**data),
        date=data.get("day"),
        module_id=data.get("module_id"),
        module_codes=tuple(data.get("module_codes", ())),
    )
