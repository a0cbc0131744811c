from django.test import TestCase

from simulator.automaton import build_automaton
from simulator.fsa_properties import (
    check_all_properties,
    is_complete,
    is_connected,
    is_deterministic,
    reachable_states,
)
from simulator.spec_loader import parse_spec_text


def automaton_from_text(text):
    return build_automaton(parse_spec_text(text))


class TestFsaProperties(TestCase):
    """Test cases for automaton property checking functions"""

    def setUp(self):
        # Complete DFA over {a, b} accepting an odd number of 'a's
        self.odd_as = automaton_from_text(
            'state\t0\tstart\n'
            'state\t1\taccept\n'
            'transition\t0\ta\t1\n'
            'transition\t0\tb\t0\n'
            'transition\t1\ta\t0\n'
            'transition\t1\tb\t1\n'
        )

        # NFA with an unreachable state 3
        self.partial_nfa = automaton_from_text(
            'state\t1\tstart\n'
            'state\t2\taccept\n'
            'transition\t1\ta\t1\n'
            'transition\t1\ta\t2\n'
            'transition\t3\tb\t2\n'
        )

    def test_deterministic_property(self):
        """Test is_deterministic function"""
        self.assertTrue(is_deterministic(self.odd_as))
        self.assertFalse(is_deterministic(self.partial_nfa))

        # No transitions at all is trivially deterministic
        self.assertTrue(is_deterministic(automaton_from_text('state\t1\tstart\n')))

    def test_complete_property(self):
        """Test is_complete function"""
        self.assertTrue(is_complete(self.odd_as))
        self.assertFalse(is_complete(self.partial_nfa))

        # Empty alphabet is trivially complete
        self.assertTrue(is_complete(automaton_from_text('state\t1\tstart\n')))

    def test_connected_property(self):
        """Test is_connected and reachable_states functions"""
        self.assertTrue(is_connected(self.odd_as))
        self.assertFalse(is_connected(self.partial_nfa))
        self.assertEqual(reachable_states(self.partial_nfa), {1, 2})

    def test_check_all_properties(self):
        """Test check_all_properties function"""
        self.assertEqual(check_all_properties(self.odd_as), {
            'deterministic': True,
            'complete': True,
            'connected': True,
            'unreachable_states': []
        })
        self.assertEqual(check_all_properties(self.partial_nfa), {
            'deterministic': False,
            'complete': False,
            'connected': False,
            'unreachable_states': [3]
        })
