import logging
from pathlib import Path
from typing import List, NamedTuple, Optional, Union

from .errors import MalformedLineError, SpecFileNotFoundError, SpecFileUnreadableError

logger = logging.getLogger(__name__)

STATE_KEYWORD = 'state'
TRANSITION_KEYWORD = 'transition'
COMMENT_PREFIX = '#'


class StateRecord(NamedTuple):
    """A `state <id> [start] [accept]` line"""
    id: int
    is_start: bool = False
    is_accept: bool = False
    line_number: int = 0


class TransitionRecord(NamedTuple):
    """A `transition <from_id> <symbol> <to_id>` line"""
    from_id: int
    symbol: str
    to_id: int
    line_number: int = 0


Record = Union[StateRecord, TransitionRecord]


def _parse_state_id(token: str, line_number: int, line: str) -> int:
    # isdigit() also accepts characters like '²', which int() rejects
    if not (token.isascii() and token.isdigit()):
        raise MalformedLineError(line_number, line, f"'{token}' is not a state id")
    return int(token)


def _parse_state_line(tokens: List[str], line_number: int, line: str) -> StateRecord:
    if len(tokens) < 2:
        raise MalformedLineError(line_number, line, 'state line is missing its id')

    state_id = _parse_state_id(tokens[1], line_number, line)
    flags = tokens[2:]

    for flag in flags:
        if flag not in ('start', 'accept'):
            raise MalformedLineError(line_number, line, f"unknown state flag '{flag}'")
    if len(set(flags)) != len(flags):
        raise MalformedLineError(line_number, line, 'repeated state flag')

    return StateRecord(
        id=state_id,
        is_start='start' in flags,
        is_accept='accept' in flags,
        line_number=line_number
    )


def _parse_transition_line(tokens: List[str], line_number: int, line: str) -> TransitionRecord:
    if len(tokens) != 4:
        raise MalformedLineError(
            line_number, line, f'transition line needs 3 fields, got {len(tokens) - 1}'
        )

    from_id = _parse_state_id(tokens[1], line_number, line)
    symbol = tokens[2]
    to_id = _parse_state_id(tokens[3], line_number, line)

    if len(symbol) != 1:
        raise MalformedLineError(line_number, line, f"symbol '{symbol}' is not a single character")

    return TransitionRecord(from_id=from_id, symbol=symbol, to_id=to_id, line_number=line_number)


def parse_line(line: str, line_number: int = 0) -> Optional[Record]:
    """
    Parses one line of an automaton specification.

    Fields are separated by tabs, although any whitespace is accepted. Blank
    lines and lines starting with '#' carry no record.

    Args:
        line: The raw line, with or without its trailing newline
        line_number: 1-based position of the line, used in error messages

    Returns:
        A StateRecord, a TransitionRecord or None for blank/comment lines

    Raises:
        MalformedLineError: If the line matches neither grammar
    """
    stripped = line.strip()
    if not stripped or stripped.startswith(COMMENT_PREFIX):
        return None

    tokens = stripped.split()
    keyword = tokens[0]

    if keyword == STATE_KEYWORD:
        return _parse_state_line(tokens, line_number, stripped)
    if keyword == TRANSITION_KEYWORD:
        return _parse_transition_line(tokens, line_number, stripped)

    raise MalformedLineError(line_number, stripped, f"unknown keyword '{keyword}'")


def parse_spec_text(text: str, strict: bool = False) -> List[Record]:
    """
    Parses a whole specification into records, in file order.

    Malformed lines are skipped with a warning, unless `strict` is set in which
    case the first one raises MalformedLineError.
    """
    records = []

    for line_number, line in enumerate(text.splitlines(), start=1):
        try:
            record = parse_line(line, line_number)
        except MalformedLineError as e:
            if strict:
                raise
            logger.warning("Skipping malformed line: %s", e)
            continue

        if record is not None:
            records.append(record)

    logger.debug("Parsed %d records", len(records))
    return records


def load_spec_file(path: Union[str, Path], strict: bool = False) -> List[Record]:
    """
    Reads an automaton specification file and returns its records.

    Raises:
        SpecFileNotFoundError: If the file does not exist
        SpecFileUnreadableError: If the file exists but cannot be read or decoded
    """
    path = Path(path)

    try:
        text = path.read_text(encoding='utf-8')
    except FileNotFoundError:
        raise SpecFileNotFoundError(path, 'no such file')
    except (OSError, UnicodeDecodeError) as e:
        raise SpecFileUnreadableError(path, str(e))

    logger.debug("Loaded specification file %s", path)
    return parse_spec_text(text, strict=strict)
