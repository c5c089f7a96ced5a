"""Core scoring orchestrator.

Executes the configured rules in a fixed order:
  1. High amount
  2. Critical amount
  3. Unusual hour
  4. Exploratory model signal

Then aggregates the results into a bounded score, a risk tier and the
ordered list of alerts. The engine knows nothing about blocking policy or
storage; that belongs to the intake service.
"""

import logging
import math
from functools import partial
from typing import Sequence

from fraudwatch.errors import ConfigurationError
from fraudwatch.models import RulesConfig, ScoreResult, TransactionRequest
from fraudwatch.scoring.rule import Rule
from fraudwatch.scoring.rules.amount import check_critical_amount, check_high_amount
from fraudwatch.scoring.rules.exploratory import check_exploratory_signal
from fraudwatch.scoring.rules.unusual_hour import check_unusual_hour
from fraudwatch.scoring.scorer import aggregate_results
from fraudwatch.scoring.signals import Clock, FixedSignal, SignalProvider, system_clock

logger = logging.getLogger(__name__)


class ScoringEngine:
    """Runs an immutable, ordered rule set over transactions."""

    def __init__(self, rules: Sequence[Rule]) -> None:
        rules = tuple(rules)
        if not rules:
            raise ConfigurationError("Scoring engine needs at least one rule")

        seen: set[str] = set()
        for rule in rules:
            if rule.name in seen:
                raise ConfigurationError(f"Duplicate rule name '{rule.name}'")
            if not math.isfinite(rule.max_delta) or rule.max_delta < 0:
                raise ConfigurationError(
                    f"Rule '{rule.name}' declares an invalid score delta "
                    f"({rule.max_delta})"
                )
            seen.add(rule.name)

        self.rules = rules

    @property
    def rule_names(self) -> list[str]:
        return [rule.name for rule in self.rules]

    def evaluate(self, transaction: TransactionRequest) -> ScoreResult:
        """Score a single transaction through every registered rule."""
        rule_results = [rule(transaction) for rule in self.rules]

        score, risk_level, alerts = aggregate_results(rule_results)

        logger.debug(
            "Scored transaction customer=%s merchant=%s score=%.4f level=%s alerts=%d",
            transaction.customer_id,
            transaction.merchant_id,
            score,
            risk_level,
            len(alerts),
        )

        return ScoreResult(score=score, risk_level=risk_level, alerts=alerts)


def build_rules(
    config: RulesConfig,
    clock: Clock = system_clock,
    signal_provider: SignalProvider = FixedSignal(0.0),
) -> tuple[Rule, ...]:
    """Assemble the default rule set from config, skipping disabled rules."""
    rules: list[Rule] = []

    if config.high_amount_enabled:
        check = partial(
            check_high_amount,
            threshold=config.high_amount_threshold,
            delta=config.high_amount_delta,
        )
        rules.append(Rule(
            name="HIGH_AMOUNT",
            check=lambda tx, check=check: check(tx.amount),
            max_delta=config.high_amount_delta,
        ))

    if config.critical_amount_enabled:
        check = partial(
            check_critical_amount,
            threshold=config.critical_amount_threshold,
            delta=config.critical_amount_delta,
        )
        rules.append(Rule(
            name="CRITICAL_AMOUNT",
            check=lambda tx, check=check: check(tx.amount),
            max_delta=config.critical_amount_delta,
        ))

    if config.unusual_hour_enabled:
        check = partial(
            check_unusual_hour,
            start_hour=config.unusual_hour_start,
            end_hour=config.unusual_hour_end,
            delta=config.unusual_hour_delta,
        )
        rules.append(Rule(
            name="UNUSUAL_HOUR",
            # The clock is read per evaluation, never at assembly time
            check=lambda tx, check=check: check(clock()),
            max_delta=config.unusual_hour_delta,
        ))

    if config.exploratory_signal_enabled:
        check = partial(
            check_exploratory_signal,
            cap=config.exploratory_signal_cap,
            alert_threshold=config.exploratory_alert_threshold,
        )
        rules.append(Rule(
            name="EXPLORATORY_SIGNAL",
            check=lambda tx, check=check: check(signal_provider(tx)),
            max_delta=config.exploratory_signal_cap,
        ))

    return tuple(rules)


def build_engine(
    config: RulesConfig,
    clock: Clock = system_clock,
    signal_provider: SignalProvider = FixedSignal(0.0),
) -> ScoringEngine:
    """Build a ScoringEngine over the default rule set."""
    engine = ScoringEngine(build_rules(config, clock, signal_provider))
    logger.info("Scoring engine ready with rules: %s", ", ".join(engine.rule_names))
    return engine
