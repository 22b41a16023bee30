# tests/core_tests/test_extrapolator_scenarios.py
# This file is part of Pulsar - A Pulse Network Simulator
#
# Tests for cycle-based pulse extrapolation and rising-edge LCM prediction

import pytest
from core.exceptions import ExtrapolationError, NetworkError, PeriodicityError
from core.extrapolator import (
    CycleInfo,
    extrapolate_pulse_counts,
    extrapolate_pulse_product,
    find_cycle,
    find_rising_edges,
    first_low_trigger,
    triggers_until_low,
    watch_candidates,
)
from core.network import build_network
from core.snapshot import PulseCounts


def simulate(text: str, triggers: int) -> PulseCounts:
    """Ground truth: trigger a fresh network and add up every trigger."""
    network = build_network(text)
    return PulseCounts.sum(network.trigger() for _ in range(triggers))


class TestCycleDetection:
    """Finding the offset and period of repeated network states."""

    def test_counter_network_repeats_immediately(self, counter_network_text):
        cycle = find_cycle(build_network(counter_network_text), 1000)

        assert (cycle.offset, cycle.period) == (0, 1)
        assert cycle.counts == (PulseCounts(8, 4),)

    def test_toggle_network_period(self, toggle_network_text):
        cycle = find_cycle(build_network(toggle_network_text), 1000)

        assert (cycle.offset, cycle.period) == (0, 4)
        assert PulseCounts.sum(cycle.counts) == PulseCounts(17, 11)

    def test_reset_counter_has_prefix(self, reset_counter_network_text):
        cycle = find_cycle(build_network(reset_counter_network_text), 1000)

        assert cycle.found
        assert (cycle.offset, cycle.period) == (1, 3)
        assert len(cycle.counts) == 4

    def test_no_cycle_within_limit(self, four_chain_network_text):
        cycle = find_cycle(build_network(four_chain_network_text), 3)

        assert not cycle.found
        assert len(cycle.counts) == 3

    def test_total_without_cycle_beyond_horizon(self):
        cycle = CycleInfo(0, 0, (PulseCounts(1, 1),))

        with pytest.raises(ExtrapolationError):
            cycle.total(2)

    @pytest.mark.parametrize(
        "triggers, expected",
        [
            (1, PulseCounts(1, 0)),
            (2, PulseCounts(1, 10)),
            (3, PulseCounts(1, 110)),
            (4, PulseCounts(1, 120)),
            (6, PulseCounts(1, 230)),
            (7, PulseCounts(1, 330)),
        ],
    )
    def test_total_splits_prefix_periods_and_remainder(self, triggers, expected):
        # One prefix trigger, then a period of two triggers
        cycle = CycleInfo(1, 2, (PulseCounts(1, 0), PulseCounts(0, 10), PulseCounts(0, 100)))

        assert cycle.total(triggers) == expected


class TestGeneralExtrapolation:
    """Aggregate pulse counts after many triggers."""

    def test_counter_network_product(self, counter_network_text):
        assert extrapolate_pulse_product(build_network(counter_network_text), 1000) == 32000000

    def test_toggle_network_product(self, toggle_network_text):
        assert extrapolate_pulse_product(build_network(toggle_network_text), 1000) == 11687500

    def test_counter_network_counts(self, counter_network_text):
        total = extrapolate_pulse_counts(build_network(counter_network_text), 1000)

        assert total == PulseCounts(8000, 4000)

    @pytest.mark.parametrize(
        "fixture_name",
        [
            "counter_network_text",
            "toggle_network_text",
            "reset_counter_network_text",
            "four_chain_network_text",
        ],
    )
    @pytest.mark.parametrize("triggers", [1, 2, 3, 4, 5, 7, 10, 17, 40])
    def test_matches_direct_simulation(self, request, fixture_name, triggers):
        text = request.getfixturevalue(fixture_name)

        extrapolated = extrapolate_pulse_counts(build_network(text), triggers)

        assert extrapolated == simulate(text, triggers)

    @pytest.mark.parametrize("triggers", [0, -5])
    def test_rejects_non_positive_trigger_count(self, counter_network_text, triggers):
        with pytest.raises(ValueError):
            extrapolate_pulse_counts(build_network(counter_network_text), triggers)


class TestTargetedExtrapolation:
    """First Low pulse at a sink via rising edges and LCM."""

    def test_watch_candidates(self, four_chain_network_text):
        network = build_network(four_chain_network_text)

        assert watch_candidates(network, "rx") == ["ia", "ib", "ic", "id"]

    def test_watch_candidates_requires_single_detector(self, toggle_network_text):
        network = build_network(toggle_network_text)

        with pytest.raises(NetworkError):
            watch_candidates(network, "nowhere")

    def test_rising_edges(self, four_chain_network_text):
        network = build_network(four_chain_network_text)

        edges = find_rising_edges(network, ["ia", "ib", "ic", "id"])

        assert edges == {"ia": [3], "ib": [4], "ic": [6], "id": [8]}
        assert network.trigger_count == 8

    def test_rising_edges_second_occurrence(self, four_chain_network_text):
        edges = find_rising_edges(
            build_network(four_chain_network_text), ["ia", "ib"], occurrences=2
        )

        assert edges == {"ia": [3, 7], "ib": [4, 12]}

    def test_lcm_of_first_rising_edges(self, four_chain_network_text):
        network = build_network(four_chain_network_text)

        assert first_low_trigger(network, "rx", ["ia", "ib", "ic", "id"]) == 24

    def test_derives_watch_list_from_graph(self, four_chain_network_text):
        assert first_low_trigger(build_network(four_chain_network_text), "rx") == 24

    def test_verification_rejects_free_running_counters(self, four_chain_network_text):
        network = build_network(four_chain_network_text)

        with pytest.raises(PeriodicityError, match="'ia' rose at triggers 3 and 7"):
            first_low_trigger(network, "rx", verify=True)

    def test_verification_accepts_resetting_counter(self, reset_counter_network_text):
        network = build_network(reset_counter_network_text)

        assert first_low_trigger(network, "rx", verify=True) == 3

    def test_prediction_matches_brute_force(self, reset_counter_network_text):
        predicted = first_low_trigger(build_network(reset_counter_network_text), "rx")
        observed = triggers_until_low(build_network(reset_counter_network_text), "rx")

        assert predicted == observed == 3

    def test_max_triggers_ceiling(self, four_chain_network_text):
        network = build_network(four_chain_network_text)

        with pytest.raises(ExtrapolationError, match=r"\['ic', 'id'\]"):
            first_low_trigger(network, "rx", max_triggers=5)

        assert network.trigger_count == 5

    def test_unknown_watched_node(self, four_chain_network_text):
        with pytest.raises(NetworkError, match="unknown modules"):
            first_low_trigger(build_network(four_chain_network_text), "rx", ["ghost"])

    def test_sink_must_not_be_a_module(self, four_chain_network_text):
        with pytest.raises(NetworkError, match="not an external sink"):
            first_low_trigger(build_network(four_chain_network_text), "hub")

    def test_empty_watch_list(self, four_chain_network_text):
        with pytest.raises(ValueError):
            first_low_trigger(build_network(four_chain_network_text), "rx", [])

    def test_brute_force_ceiling(self, counter_network_text):
        with pytest.raises(ExtrapolationError):
            triggers_until_low(build_network(counter_network_text), "rx", max_triggers=10)
