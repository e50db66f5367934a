"""
Trendkart - Feature State Machine Tests
"""

import pytest

from trendkart.models.alert import AlertType
from trendkart.models.product import Product
from trendkart.services.alert_emitter import AlertEmitter
from trendkart.services.feature_state import FeatureState, FeatureStateMachine


@pytest.fixture
def emitter(clock, id_factory):
    return AlertEmitter(clock=clock, id_factory=id_factory)


@pytest.fixture
def machine(emitter):
    return FeatureStateMachine(emitter)


@pytest.fixture
def product():
    return Product(id="p1", name="Self-Stirring Mug")


class TestFeatureTransitions:
    """Tests for hysteresis-based featured set membership."""

    def test_initial_state_is_not_featured(self, machine, product):
        assert machine.state_of(product.id) == FeatureState.NOT_FEATURED
        assert machine.featured_ids() == frozenset()

    def test_rising_score_enters_featured(self, machine, emitter, product):
        alert = machine.evaluate(product, 0.70, 0.50)

        assert machine.state_of(product.id) == FeatureState.FEATURED
        assert alert is not None
        assert alert.type == AlertType.RISING
        assert alert.product_id == "p1"
        assert "score 0.70" in alert.message
        assert "Δ 0.20" in alert.message
        assert len(emitter) == 1

    def test_high_but_flat_score_does_not_enter(self, machine, emitter, product):
        assert machine.evaluate(product, 0.90, 0.90) is None
        assert machine.state_of(product.id) == FeatureState.NOT_FEATURED
        assert len(emitter) == 0

    def test_high_but_falling_score_does_not_enter(self, machine, product):
        assert machine.evaluate(product, 0.80, 0.95) is None
        assert machine.state_of(product.id) == FeatureState.NOT_FEATURED

    def test_entry_threshold_is_exclusive(self, machine, product):
        assert machine.evaluate(product, 0.65, 0.30) is None
        assert machine.state_of(product.id) == FeatureState.NOT_FEATURED

    def test_low_score_exits_featured(self, machine, emitter, product):
        machine.evaluate(product, 0.70, 0.50)
        alert = machine.evaluate(product, 0.40, 0.70)

        assert machine.state_of(product.id) == FeatureState.NOT_FEATURED
        assert alert.type == AlertType.FADING
        assert "score 0.40" in alert.message
        assert [a.type for a in emitter.list_alerts()] == [AlertType.FADING, AlertType.RISING]

    def test_exit_threshold_is_exclusive(self, machine, product):
        machine.evaluate(product, 0.70, 0.50)
        assert machine.evaluate(product, 0.45, 0.70) is None
        assert machine.state_of(product.id) == FeatureState.FEATURED

    def test_featured_product_stays_while_rising(self, machine, emitter, product):
        machine.evaluate(product, 0.70, 0.50)
        assert machine.evaluate(product, 0.90, 0.70) is None
        assert len(emitter) == 1

    def test_dead_zone_never_transitions(self, machine, emitter, product):
        previous = 0.50
        for score in [0.60, 0.50, 0.60, 0.50, 0.60]:
            assert machine.evaluate(product, score, previous) is None
            previous = score

        assert machine.state_of(product.id) == FeatureState.NOT_FEATURED
        assert len(emitter) == 0

    def test_dead_zone_keeps_featured_products(self, machine, emitter, product):
        machine.evaluate(product, 0.70, 0.50)
        previous = 0.70
        for score in [0.50, 0.60, 0.50, 0.60]:
            machine.evaluate(product, score, previous)
            previous = score

        assert machine.state_of(product.id) == FeatureState.FEATURED
        assert len(emitter) == 1

    def test_thresholds_must_leave_a_dead_zone(self, emitter):
        with pytest.raises(ValueError):
            FeatureStateMachine(emitter, entry_threshold=0.5, exit_threshold=0.5)


class TestCheckAndCommit:
    """Tests for computing a transition separately from applying it."""

    def test_check_does_not_change_state(self, machine, emitter, product):
        transition = machine.check(product, 0.70, 0.50)

        assert transition.state == FeatureState.FEATURED
        assert transition.alert_type == AlertType.RISING
        assert transition.message == "Self-Stirring Mug rising: score 0.70 (Δ 0.20)"
        assert machine.state_of(product.id) == FeatureState.NOT_FEATURED
        assert len(emitter) == 0

    def test_commit_applies_transition_without_alerting(self, machine, emitter, product):
        machine.commit(machine.check(product, 0.70, 0.50))

        assert machine.featured_ids() == frozenset({"p1"})
        assert len(emitter) == 0

        machine.commit(machine.check(product, 0.30, 0.70))
        assert machine.featured_ids() == frozenset()

    def test_no_transition_in_dead_zone(self, machine, product):
        assert machine.check(product, 0.55, 0.50) is None
