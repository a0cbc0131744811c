import logging
from typing import AbstractSet, Dict, FrozenSet, Iterator, NamedTuple, Tuple

from .automaton import Automaton

logger = logging.getLogger(__name__)


class SimulationResult(NamedTuple):
    """Outcome of running an automaton over one input string"""
    accepted: bool
    final_states: Tuple[int, ...]
    steps_taken: int


def step(automaton: Automaton, frontier: AbstractSet[int], symbol: str) -> FrozenSet[int]:
    """
    Advances every active state over one symbol.

    Args:
        automaton: The automaton being simulated
        frontier: The currently active state ids
        symbol: The input symbol to consume

    Returns:
        The deduplicated union of the destinations of every frontier state on
        `symbol`. States without a matching transition contribute nothing.
    """
    next_frontier = set()
    for state_id in frontier:
        next_frontier.update(automaton.next_states(state_id, symbol))
    return frozenset(next_frontier)


def _summary(automaton: Automaton, frontier: FrozenSet[int], steps_taken: int) -> Dict:
    return {
        'type': 'summary',
        'accepted': not frontier.isdisjoint(automaton.accept_states),
        'final_states': sorted(frontier),
        'steps_taken': steps_taken
    }


def simulate_steps(automaton: Automaton, input_string: str) -> Iterator[Dict]:
    """
    Simulates the automaton one symbol at a time, yielding an event per step.

    All active states advance together on each symbol, so every yielded
    frontier is the complete set of states reachable after consuming the
    input up to and including `position`.

    Yields:
        - {'type': 'start', 'frontier': [...]} before any input is consumed
        - {'type': 'step', 'position': int, 'symbol': str, 'frontier': [...]} per consumed symbol
        - {'type': 'dead', 'position': int, 'symbol': str} if every branch died on a symbol
        - {'type': 'summary', 'accepted': bool, 'final_states': [...], 'steps_taken': int} last
    """
    frontier = frozenset([automaton.start_state])
    yield {'type': 'start', 'frontier': sorted(frontier)}

    for position, symbol in enumerate(input_string):
        frontier = step(automaton, frontier, symbol)

        if not frontier:
            logger.debug("All branches died on %r at position %d", symbol, position)
            yield {'type': 'dead', 'position': position, 'symbol': symbol}
            yield _summary(automaton, frontier, position + 1)
            return

        yield {
            'type': 'step',
            'position': position,
            'symbol': symbol,
            'frontier': sorted(frontier)
        }

    yield _summary(automaton, frontier, len(input_string))


def run(automaton: Automaton, input_string: str) -> SimulationResult:
    """
    Runs the automaton over the whole input string.

    Args:
        automaton: A built Automaton
        input_string: The input to consume; symbols outside the alphabet simply
            kill every branch

    Returns:
        SimulationResult with the accept verdict, the sorted final frontier (empty
        when every branch died early) and the number of symbols consumed.
    """
    summary = None
    for event in simulate_steps(automaton, input_string):
        summary = event

    result = SimulationResult(
        accepted=summary['accepted'],
        final_states=tuple(summary['final_states']),
        steps_taken=summary['steps_taken']
    )
    logger.debug("Input %r: %s", input_string, 'accept' if result.accepted else 'reject')
    return result


def accepts(automaton: Automaton, input_string: str) -> bool:
    return run(automaton, input_string).accepted
