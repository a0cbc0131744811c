import logging
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, List, Mapping, Set

from .errors import MissingStartStateError, MultipleStartStatesError
from .spec_loader import Record, StateRecord, TransitionRecord

logger = logging.getLogger(__name__)

NO_STATES: FrozenSet[int] = frozenset()


@dataclass(frozen=True)
class State:
    id: int
    is_start: bool = False
    is_accept: bool = False


class Automaton:
    """
    Immutable partial NFA (no epsilon transitions).

    Built once by AutomatonBuilder and only read afterwards. The transition
    function maps each state id to a mapping from symbol to the frozenset of
    destination ids.
    """

    def __init__(self, states: Mapping[int, State],
                 transitions: Mapping[int, Mapping[str, FrozenSet[int]]],
                 start_state: int):
        self._states = MappingProxyType(dict(states))
        self._transitions = MappingProxyType({
            state_id: MappingProxyType(dict(by_symbol))
            for state_id, by_symbol in transitions.items()
        })
        self._start_state = start_state
        self._accept_states = frozenset(
            state.id for state in self._states.values() if state.is_accept
        )
        self._alphabet = tuple(sorted(
            {symbol for by_symbol in self._transitions.values() for symbol in by_symbol}
        ))

    @property
    def states(self) -> Mapping[int, State]:
        return self._states

    @property
    def transitions(self) -> Mapping[int, Mapping[str, FrozenSet[int]]]:
        return self._transitions

    @property
    def start_state(self) -> int:
        return self._start_state

    @property
    def accept_states(self) -> FrozenSet[int]:
        return self._accept_states

    @property
    def alphabet(self) -> List[str]:
        """Sorted list of every symbol used by at least one transition"""
        return list(self._alphabet)

    def next_states(self, state_id: int, symbol: str) -> FrozenSet[int]:
        """Destinations of `state_id` on `symbol`, empty when no transition matches"""
        by_symbol = self._transitions.get(state_id)
        if by_symbol is None:
            return NO_STATES
        return by_symbol.get(symbol, NO_STATES)

    def to_fsa_dict(self) -> Dict:
        """
        Returns the automaton as the JSON-friendly FSA dictionary used by the API:
            - states: List of all state ids
            - alphabet: List of symbols in the alphabet
            - transitions: {state: {symbol: [destinations]}} for every state
            - startingState: The starting state
            - acceptingStates: List of accepting states
        """
        return {
            'states': sorted(self._states),
            'alphabet': self.alphabet,
            'transitions': {
                state_id: {
                    symbol: sorted(destinations)
                    for symbol, destinations in sorted(self._transitions.get(state_id, {}).items())
                }
                for state_id in sorted(self._states)
            },
            'startingState': self._start_state,
            'acceptingStates': sorted(self._accept_states)
        }

    def __repr__(self):
        return (f"Automaton(states={sorted(self._states)}, start={self._start_state}, "
                f"accept={sorted(self._accept_states)})")


class AutomatonBuilder:
    """
    Collects state and transition records and produces an Automaton.

    A state id declared more than once keeps every flag it was ever given
    (the flags are merged), and a warning is logged for the repeated
    declaration. States referenced only by transitions are created with
    neither flag set.
    """

    def __init__(self):
        self._states: Dict[int, State] = {}
        self._declared: Set[int] = set()
        self._transitions: Dict[int, Dict[str, Set[int]]] = {}

    def ensure_state(self, state_id: int) -> State:
        state = self._states.get(state_id)
        if state is None:
            state = State(state_id)
            self._states[state_id] = state
            self._transitions[state_id] = {}
            logger.debug("Created state %d", state_id)
        return state

    def add_state(self, state_id: int, is_start: bool = False, is_accept: bool = False) -> State:
        if state_id in self._declared:
            logger.warning("State %d declared more than once, merging its flags", state_id)
        self._declared.add(state_id)

        existing = self.ensure_state(state_id)
        state = replace(
            existing,
            is_start=existing.is_start or is_start,
            is_accept=existing.is_accept or is_accept
        )
        self._states[state_id] = state
        return state

    def add_transition(self, from_id: int, symbol: str, to_id: int):
        self.ensure_state(from_id)
        self.ensure_state(to_id)
        self._transitions[from_id].setdefault(symbol, set()).add(to_id)

    def add_record(self, record: Record):
        if isinstance(record, StateRecord):
            self.add_state(record.id, record.is_start, record.is_accept)
        elif isinstance(record, TransitionRecord):
            self.add_transition(record.from_id, record.symbol, record.to_id)
        else:
            raise TypeError(f"Unsupported record type: {type(record).__name__}")

    def build(self) -> Automaton:
        """
        Freezes the collected states and transitions.

        Raises:
            MissingStartStateError: If no state is flagged as start
            MultipleStartStatesError: If more than one state is flagged as start
        """
        start_states = [state.id for state in self._states.values() if state.is_start]
        if not start_states:
            raise MissingStartStateError()
        if len(start_states) > 1:
            raise MultipleStartStatesError(start_states)

        transitions = {
            state_id: {symbol: frozenset(destinations) for symbol, destinations in by_symbol.items()}
            for state_id, by_symbol in self._transitions.items()
        }
        automaton = Automaton(self._states, transitions, start_states[0])
        logger.debug("Built %r", automaton)
        return automaton


def build_automaton(records: Iterable[Record]) -> Automaton:
    """
    Builds an immutable Automaton from state and transition records, in order.

    Args:
        records: StateRecord / TransitionRecord instances as produced by the spec loader

    Returns:
        Automaton: The finished automaton

    Raises:
        MissingStartStateError: If no start state was declared
        MultipleStartStatesError: If several start states were declared
    """
    builder = AutomatonBuilder()
    for record in records:
        builder.add_record(record)
    return builder.build()
