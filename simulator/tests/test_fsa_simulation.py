import unittest
from unittest.mock import patch

from simulator.automaton import build_automaton
from simulator.fsa_simulation import (
    SimulationResult,
    accepts,
    run,
    simulate_steps,
    step,
)
from simulator.spec_loader import parse_spec_text


def automaton_from_text(text):
    return build_automaton(parse_spec_text(text))


class TestFsaSimulation(unittest.TestCase):
    def setUp(self):
        # 1 -a-> 2 -b-> 3, accepts exactly "ab"
        self.chain = automaton_from_text(
            'state\t1\tstart\n'
            'state\t2\n'
            'state\t3\taccept\n'
            'transition\t1\ta\t2\n'
            'transition\t2\tb\t3\n'
        )

        # Strings over {a, b} ending with "ab"
        self.ends_with_ab = automaton_from_text(
            'state\t0\tstart\n'
            'state\t2\taccept\n'
            'transition\t0\ta\t0\n'
            'transition\t0\tb\t0\n'
            'transition\t0\ta\t1\n'
            'transition\t1\tb\t2\n'
        )

    def test_scenario_accept(self):
        result = run(self.chain, 'ab')
        self.assertEqual(result, SimulationResult(accepted=True, final_states=(3,), steps_taken=2))

    def test_scenario_branch_dies(self):
        result = run(self.chain, 'ac')
        self.assertFalse(result.accepted)
        self.assertEqual(result.final_states, ())

    def test_scenario_fan_out(self):
        automaton = automaton_from_text(
            'state\t1\tstart\n'
            'state\t2\taccept\n'
            'state\t3\taccept\n'
            'transition\t1\ta\t2\n'
            'transition\t1\ta\t3\n'
        )

        result = run(automaton, 'a')
        self.assertTrue(result.accepted)
        self.assertEqual(result.final_states, (2, 3))

    def test_scenario_unknown_symbol(self):
        for input_string in ['z', 'az', 'abz', '!']:
            with self.subTest(input_string=input_string):
                result = run(self.chain, input_string)
                self.assertFalse(result.accepted)
                self.assertEqual(result.final_states, ())

    def test_scenario_no_accept_states(self):
        automaton = automaton_from_text(
            'state\t1\tstart\n'
            'transition\t1\ta\t1\n'
            'transition\t1\tb\t2\n'
            'transition\t2\ta\t1\n'
        )

        for input_string in ['', 'a', 'ab', 'aba', 'aaaa']:
            with self.subTest(input_string=input_string):
                self.assertFalse(run(automaton, input_string).accepted)

        # Reachable states are still reported on reject
        self.assertEqual(run(automaton, 'ab').final_states, (2,))

    def test_rejected_with_live_states(self):
        result = run(self.chain, 'a')
        self.assertFalse(result.accepted)
        self.assertEqual(result.final_states, (2,))

    def test_empty_input(self):
        self.assertEqual(run(self.chain, ''), SimulationResult(False, (1,), 0))

        accepting_start = automaton_from_text('state\t1\tstart\taccept\n')
        self.assertEqual(run(accepting_start, ''), SimulationResult(True, (1,), 0))

    def test_final_states_are_not_filtered(self):
        # Both the accepting and non-accepting branches stay in the final frontier
        result = run(self.ends_with_ab, 'ab')
        self.assertTrue(result.accepted)
        self.assertEqual(result.final_states, (0, 2))

    def test_nondeterministic_language(self):
        accepted = ['ab', 'aab', 'bab', 'abab', 'bbbab']
        rejected = ['', 'a', 'b', 'ba', 'aba', 'abb']

        for input_string in accepted:
            with self.subTest(input_string=input_string):
                self.assertTrue(accepts(self.ends_with_ab, input_string))
        for input_string in rejected:
            with self.subTest(input_string=input_string):
                self.assertFalse(accepts(self.ends_with_ab, input_string))

    def test_run_is_repeatable(self):
        first = run(self.ends_with_ab, 'abbab')
        for _ in range(3):
            self.assertEqual(run(self.ends_with_ab, 'abbab'), first)

    def test_early_termination(self):
        result = run(self.chain, 'cab' * 100)
        self.assertEqual(result.steps_taken, 1)
        self.assertEqual(result.final_states, ())

    def test_step_count_is_bounded(self):
        input_string = 'ab' * 50
        with patch('simulator.fsa_simulation.step', wraps=step) as wrapped_step:
            run(self.ends_with_ab, input_string)

        self.assertLessEqual(wrapped_step.call_count, len(input_string) + 1)

    def test_long_input_terminates(self):
        result = run(self.ends_with_ab, 'ba' * 5000 + 'b')
        self.assertTrue(result.accepted)
        self.assertEqual(result.steps_taken, 10001)


class TestStep(unittest.TestCase):
    def setUp(self):
        self.automaton = automaton_from_text(
            'state\t1\tstart\n'
            'transition\t1\ta\t2\n'
            'transition\t1\ta\t3\n'
            'transition\t2\ta\t3\n'
            'transition\t2\ta\t4\n'
            'transition\t3\tb\t1\n'
        )

    def test_step_is_union_of_destinations(self):
        frontier = frozenset({1, 2, 3})
        expected = set()
        for state_id in frontier:
            expected |= self.automaton.next_states(state_id, 'a')

        self.assertEqual(step(self.automaton, frontier, 'a'), frozenset(expected))
        self.assertEqual(step(self.automaton, frontier, 'a'), frozenset({2, 3, 4}))

    def test_step_without_matches(self):
        self.assertEqual(step(self.automaton, {1, 2}, 'b'), frozenset())
        self.assertEqual(step(self.automaton, set(), 'a'), frozenset())

    def test_step_does_not_modify_frontier(self):
        frontier = {1, 2}
        step(self.automaton, frontier, 'a')
        self.assertEqual(frontier, {1, 2})


class TestSimulateSteps(unittest.TestCase):
    def setUp(self):
        self.automaton = automaton_from_text(
            'state\t1\tstart\n'
            'state\t3\taccept\n'
            'transition\t1\ta\t2\n'
            'transition\t1\ta\t3\n'
            'transition\t2\tb\t3\n'
        )

    def test_events(self):
        events = list(simulate_steps(self.automaton, 'ab'))

        self.assertEqual(events, [
            {'type': 'start', 'frontier': [1]},
            {'type': 'step', 'position': 0, 'symbol': 'a', 'frontier': [2, 3]},
            {'type': 'step', 'position': 1, 'symbol': 'b', 'frontier': [3]},
            {'type': 'summary', 'accepted': True, 'final_states': [3], 'steps_taken': 2},
        ])

    def test_dead_event(self):
        events = list(simulate_steps(self.automaton, 'abb'))

        self.assertEqual(events[-2], {'type': 'dead', 'position': 2, 'symbol': 'b'})
        self.assertEqual(events[-1], {
            'type': 'summary', 'accepted': False, 'final_states': [], 'steps_taken': 3
        })

    def test_empty_input_events(self):
        events = list(simulate_steps(self.automaton, ''))

        self.assertEqual(events, [
            {'type': 'start', 'frontier': [1]},
            {'type': 'summary', 'accepted': False, 'final_states': [1], 'steps_taken': 0},
        ])

    def test_summary_matches_run(self):
        for input_string in ['', 'a', 'ab', 'abb', 'b']:
            with self.subTest(input_string=input_string):
                summary = list(simulate_steps(self.automaton, input_string))[-1]
                result = run(self.automaton, input_string)
                self.assertEqual(summary['accepted'], result.accepted)
                self.assertEqual(tuple(summary['final_states']), result.final_states)
