"""
Command line entry point: run a partial NFA over an input string.

    nfa-sim automaton_spec.txt input_string
"""
import argparse
import logging
import sys
from typing import List, Tuple

from .automaton import build_automaton
from .errors import AutomatonError
from .fsa_simulation import run
from .reporter import format_result
from .spec_loader import load_spec_file

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that exits with EXIT_FAILURE on usage errors"""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(EXIT_FAILURE, f"Error: {message}\nHalting with exit code {EXIT_FAILURE}.\n")


OPTION_FLAGS = ('--strict', '--verbose', '-v', '-h', '--help')


def make_parser() -> argparse.ArgumentParser:
    """
    Parser for the leading options only. The two positionals are taken verbatim
    so that an input string such as '-a' is never mistaken for an option.
    """
    parser = _ArgumentParser(
        prog='nfa-sim',
        usage='%(prog)s [--strict] [-v] [--] spec_file input_string',
        description='Simulate a partial nondeterministic finite automaton on an input string.',
        epilog='spec_file: path to the automaton specification. '
               'input_string: input string to run the automaton on.'
    )
    parser.add_argument(
        '--strict', action='store_true', help='Treat malformed specification lines as fatal.')
    parser.add_argument(
        '--verbose', '-v', action='store_true', help='Log every build and simulation step.')
    return parser


def split_argv(argv: List[str]) -> Tuple[List[str], List[str]]:
    """
    Splits argv into leading options and positionals. Options end at the first
    argument that is not a known flag, or at '--'.
    """
    for index, arg in enumerate(argv):
        if arg == '--':
            return argv[:index], argv[index + 1:]
        if arg not in OPTION_FLAGS:
            return argv[:index], argv[index:]
    return list(argv), []


def main(argv=None) -> int:
    """
    Main entry point.

    Prints `accept\\t<ids>` or `reject\\t<ids>` and returns 0, or reports the
    problem on stderr and returns 1.
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = make_parser()
    options, positionals = split_argv(list(argv))
    args = parser.parse_args(options)
    if len(positionals) != 2:
        parser.error(f'expected spec_file and input_string, got {len(positionals)} argument(s)')
    args.spec_file, args.input_string = positionals

    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s: %(message)s'
    )

    try:
        records = load_spec_file(args.spec_file, strict=args.strict)
        automaton = build_automaton(records)
    except AutomatonError as e:
        logger.error("%s", e)
        print(f"Halting with exit code {EXIT_FAILURE}.", file=sys.stderr)
        return EXIT_FAILURE

    result = run(automaton, args.input_string)
    print(format_result(result, automaton))
    return EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
