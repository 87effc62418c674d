from typing import Callable, List

from core.coherence_rules import Issue


class ConstraintManager:
    """Runs every registered coherence check over one plan. No check stops the others."""

    def __init__(self, plan, state):
        self.plan = plan
        self.state = state
        self.rules: list[Callable] = []

    def add_rule(self, rule_func: Callable, condition: bool = True):
        """Register a rule with optional enablement condition."""
        if condition:
            self.rules.append(rule_func)

    def apply_all(self) -> List[Issue]:
        """Apply all registered rules in order and collect their issues."""
        issues: List[Issue] = []
        for rule in self.rules:
            issues.extend(rule(self.plan, self.state))
        return issues
