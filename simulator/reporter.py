from typing import Dict, List

from .automaton import Automaton
from .fsa_simulation import SimulationResult

ACCEPT = 'accept'
REJECT = 'reject'


def reported_states(result: SimulationResult, automaton: Automaton) -> List[int]:
    """
    The state ids shown for a result: on accept only the accepting states of
    the final frontier, on reject every final state.
    """
    if result.accepted:
        return sorted(automaton.accept_states.intersection(result.final_states))
    return sorted(result.final_states)


def format_result(result: SimulationResult, automaton: Automaton) -> str:
    verdict = ACCEPT if result.accepted else REJECT
    ids = ' '.join(str(state_id) for state_id in reported_states(result, automaton))
    return f"{verdict}\t{ids}"


def result_to_dict(result: SimulationResult, automaton: Automaton) -> Dict:
    return {
        'accepted': result.accepted,
        'final_states': list(result.final_states),
        'accepting_states': sorted(automaton.accept_states.intersection(result.final_states)),
        'steps_taken': result.steps_taken,
        'output': format_result(result, automaton)
    }
