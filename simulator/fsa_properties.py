from typing import Dict, Set
from collections import deque

from .automaton import Automaton


def is_deterministic(automaton: Automaton) -> bool:
    """
    Checks if the automaton is deterministic.

    Without epsilon transitions an automaton is deterministic when every state
    has at most one destination per symbol.

    Args:
        automaton: The automaton to check

    Returns:
        bool: True if the automaton is deterministic, False otherwise
    """
    for by_symbol in automaton.transitions.values():
        for destinations in by_symbol.values():
            if len(destinations) > 1:
                return False

    return True


def is_complete(automaton: Automaton) -> bool:
    """
    Checks if the automaton is complete.

    An automaton is complete if for each state and each symbol of its alphabet,
    there is at least one transition. An empty alphabet is trivially complete.
    """
    alphabet = automaton.alphabet

    for state_id in automaton.states:
        for symbol in alphabet:
            if not automaton.next_states(state_id, symbol):
                return False

    return True


def reachable_states(automaton: Automaton) -> Set[int]:
    """Breadth-first search of every state reachable from the start state"""
    reachable = {automaton.start_state}
    queue = deque([automaton.start_state])

    while queue:
        current_state = queue.popleft()

        for destinations in automaton.transitions.get(current_state, {}).values():
            for next_state in destinations:
                if next_state not in reachable:
                    reachable.add(next_state)
                    queue.append(next_state)

    return reachable


def is_connected(automaton: Automaton) -> bool:
    """
    Checks if the automaton is connected.

    An automaton is connected if all states are reachable from the starting state.
    """
    return len(reachable_states(automaton)) == len(automaton.states)


def check_all_properties(automaton: Automaton) -> Dict:
    """
    Check all automaton properties at once.

    Returns:
        Dict: Dictionary containing all property check results:
        {
            'deterministic': bool,
            'complete': bool,
            'connected': bool,
            'unreachable_states': [int, ...]
        }
    """
    reachable = reachable_states(automaton)
    return {
        'deterministic': is_deterministic(automaton),
        'complete': is_complete(automaton),
        'connected': len(reachable) == len(automaton.states),
        'unreachable_states': sorted(set(automaton.states) - reachable)
    }
