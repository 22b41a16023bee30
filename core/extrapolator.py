# core/extrapolator.py
# This file is part of Pulsar - A Pulse Network Simulator
#
# Answering questions about very long trigger sequences without running them

"""Extrapolation over long trigger sequences.

Two independent strategies are layered on top of ``Network.trigger``:

* Whole-system cycle detection. Every trigger is followed by a snapshot; as
  soon as the network returns to a state it has been in before, the pulse
  counts of any number of triggers follow from a prefix, a number of whole
  periods and a remainder.

* Rising-edge detection. When the network is far too large to ever repeat,
  the first Low pulse reaching a sink can still be predicted if the sink is
  fed by a Detector whose inputs each go High periodically. The first
  trigger at which each watched input emits High is recorded and the answer
  is the least common multiple of those counts. This assumes every watched
  node fires again exactly every ``k`` triggers after first firing at ``k``;
  ``verify=True`` checks that for one extra period before trusting it.

Both strategies advance the network they are given: counts are relative to
the state the network is in when the call starts.
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from utils.logger import get_logger
from .exceptions import ExtrapolationError, NetworkError, PeriodicityError
from .modules import Detector
from .network import Network
from .signal import Level, Signal
from .snapshot import PulseCounts, StateKey

DEFAULT_TRIGGERS = 1000
DEFAULT_SINK = "rx"
DEFAULT_MAX_TRIGGERS = 100_000


@dataclass(frozen=True)
class CycleInfo:
    """Outcome of a cycle search.

    ``counts[i]`` holds the pulses of trigger ``i + 1``. When a cycle was
    found, triggers ``offset + 1`` onwards repeat every ``period`` triggers;
    a period of 0 means no state repeated within the searched horizon.

    Attributes:
        offset: Number of triggers before the cyclic segment starts
        period: Cycle length in triggers, 0 if none was found
        counts: Per-trigger pulse counts of every simulated trigger
    """

    offset: int
    period: int
    counts: Tuple[PulseCounts, ...]

    @property
    def found(self) -> bool:
        return self.period > 0

    def total(self, triggers: int) -> PulseCounts:
        """Total pulse counts over the first ``triggers`` triggers.

        Raises:
            ExtrapolationError: No cycle was found and fewer than
                ``triggers`` triggers were simulated
        """
        if triggers <= len(self.counts):
            return PulseCounts.sum(self.counts[:triggers])

        if not self.found:
            raise ExtrapolationError(
                f"Only {len(self.counts)} triggers simulated and no cycle found; "
                f"cannot extrapolate to {triggers}"
            )

        cycle = self.counts[self.offset : self.offset + self.period]
        full_periods, remainder = divmod(triggers - self.offset, self.period)

        prefix = PulseCounts.sum(self.counts[: self.offset])
        periods = PulseCounts.sum(cycle) * full_periods
        rest = PulseCounts.sum(cycle[:remainder])

        get_logger().debug(
            f"Extrapolating {triggers} triggers: prefix [{prefix}], "
            f"{full_periods} x period [{PulseCounts.sum(cycle)}], remainder [{rest}]"
        )
        return prefix + periods + rest


def find_cycle(network: Network, limit: int) -> CycleInfo:
    """Trigger the network until its state repeats or ``limit`` is reached.

    The state before the first trigger takes part in the search, so a network
    that returns to its starting state after ``p`` triggers reports offset 0
    and period ``p``.

    Args:
        network: Network to drive; pending counters are discarded first
        limit: Maximum number of triggers to simulate

    Returns:
        Cycle description with the counts of every simulated trigger
    """
    logger = get_logger()

    network.snapshot()
    seen: Dict[StateKey, int] = {network.state_key(): 0}
    counts: List[PulseCounts] = []

    while len(counts) < limit:
        network.trigger()
        snapshot = network.snapshot()
        counts.append(snapshot.counts)

        offset = seen.get(snapshot.state)
        if offset is not None:
            period = len(counts) - offset
            logger.cycle_found(offset, period)
            return CycleInfo(offset, period, tuple(counts))

        seen[snapshot.state] = len(counts)

    logger.debug(f"No repeated state within {limit} triggers")
    return CycleInfo(0, 0, tuple(counts))


def extrapolate_pulse_counts(
    network: Network, triggers: int = DEFAULT_TRIGGERS
) -> PulseCounts:
    """Total Low and High pulses delivered by ``triggers`` triggers.

    Simulates at most ``triggers`` triggers; once a state repeats the rest is
    computed from the cycle.

    Raises:
        ValueError: ``triggers`` is not positive
    """
    if triggers <= 0:
        raise ValueError(f"Trigger count must be positive, got {triggers}")

    cycle = find_cycle(network, triggers)
    total = cycle.total(triggers)

    get_logger().extrapolation_result(
        f"Pulses after {triggers} triggers", f"{total} (product {total.product})"
    )
    return total


def extrapolate_pulse_product(network: Network, triggers: int = DEFAULT_TRIGGERS) -> int:
    """Product of total Low and High pulses after ``triggers`` triggers."""
    return extrapolate_pulse_counts(network, triggers).product


def watch_candidates(network: Network, sink: str = DEFAULT_SINK) -> List[str]:
    """Nodes whose rising edges decide when ``sink`` first receives Low.

    The sink must be fed by exactly one Detector; its inputs are returned in
    registration order.

    Raises:
        NetworkError: The sink is not fed by a single Detector
    """
    feeders = network.inputs_of(sink)
    if len(feeders) != 1:
        raise NetworkError(
            f"Sink '{sink}' must have exactly one feeding module, found {feeders}"
        )

    feeder = network.get_module(feeders[0])
    if not isinstance(feeder, Detector):
        raise NetworkError(f"Sink '{sink}' is not fed by a Detector")

    candidates = list(feeder.inputs)
    get_logger().debug(f"Watch candidates for '{sink}' via '{feeder.name}': {candidates}")
    return candidates


def find_rising_edges(
    network: Network,
    watched: Iterable[str],
    occurrences: int = 1,
    max_triggers: int = DEFAULT_MAX_TRIGGERS,
) -> Dict[str, List[int]]:
    """Record the triggers at which each watched node emits High.

    A node emitting High several times within one trigger counts once for
    that trigger.

    Args:
        network: Network to drive
        watched: Module names to observe
        occurrences: Number of distinct triggers to record per node
        max_triggers: Ceiling on the number of triggers to run

    Returns:
        Mapping from node name to its first ``occurrences`` trigger counts

    Raises:
        NetworkError: A watched name is not a module
        ExtrapolationError: Some node was not seen often enough in time
    """
    logger = get_logger()

    names = list(dict.fromkeys(watched))
    unknown = [name for name in names if name not in network]
    if unknown:
        raise NetworkError(f"Cannot watch unknown modules: {unknown}")

    edges: Dict[str, List[int]] = {name: [] for name in names}
    start = network.trigger_count

    def observe(signal: Signal) -> None:
        seen = edges.get(signal.source)
        if seen is None or signal.level is not Level.HIGH:
            return
        current = network.trigger_count - start + 1
        if len(seen) < occurrences and (not seen or seen[-1] != current):
            seen.append(current)
            logger.rising_edge(signal.source, current)

    while any(len(seen) < occurrences for seen in edges.values()):
        if network.trigger_count - start >= max_triggers:
            missing = [name for name, seen in edges.items() if len(seen) < occurrences]
            raise ExtrapolationError(
                f"No rising edge within {max_triggers} triggers for: {missing}"
            )
        network.trigger(observe)

    return edges


def first_low_trigger(
    network: Network,
    sink: str = DEFAULT_SINK,
    watched: Optional[Iterable[str]] = None,
    max_triggers: int = DEFAULT_MAX_TRIGGERS,
    verify: bool = False,
) -> int:
    """Predict the first trigger at which ``sink`` receives a Low pulse.

    Args:
        network: Network to drive
        sink: External sink name
        watched: Nodes to observe; derived with ``watch_candidates`` if None
        max_triggers: Ceiling on the number of triggers to run
        verify: Require each node's second rising edge at twice its first

    Returns:
        Least common multiple of the first rising-edge trigger counts

    Raises:
        NetworkError: ``sink`` names a module, or a watched name is unknown
        ExtrapolationError: Some node never rose within ``max_triggers``
        PeriodicityError: ``verify`` is set and a node is not periodic
    """
    logger = get_logger()

    if sink in network:
        raise NetworkError(f"'{sink}' is a module, not an external sink")

    names = watch_candidates(network, sink) if watched is None else list(watched)
    if not names:
        raise ValueError("At least one node must be watched")

    edges = find_rising_edges(
        network, names, occurrences=2 if verify else 1, max_triggers=max_triggers
    )

    if verify:
        for name, (first, second) in edges.items():
            if second != 2 * first:
                raise PeriodicityError(
                    f"'{name}' rose at triggers {first} and {second}; "
                    f"expected a period of {first}"
                )
        logger.debug(f"Periodicity confirmed for {list(edges)}")

    result = math.lcm(*(seen[0] for seen in edges.values()))
    logger.extrapolation_result(f"First low pulse at '{sink}'", str(result))
    return result


def triggers_until_low(
    network: Network, sink: str = DEFAULT_SINK, max_triggers: int = DEFAULT_MAX_TRIGGERS
) -> int:
    """Trigger until ``sink`` receives Low and return how many triggers it took.

    Raises:
        ExtrapolationError: No Low pulse reached the sink within ``max_triggers``
    """
    start = network.trigger_count
    reached = False

    def observe(signal: Signal) -> None:
        nonlocal reached
        if signal.destination == sink and signal.level is Level.LOW:
            reached = True

    while not reached:
        if network.trigger_count - start >= max_triggers:
            raise ExtrapolationError(
                f"No low pulse reached '{sink}' within {max_triggers} triggers"
            )
        network.trigger(observe)

    return network.trigger_count - start
