from typing import Iterable


class AutomatonError(ValueError):
    """Base class for every error raised while loading or building an automaton."""


class SpecFileError(AutomatonError):
    """The specification file could not be read."""

    def __init__(self, path, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Cannot read specification file '{self.path}': {reason}")


class SpecFileNotFoundError(SpecFileError):
    pass


class SpecFileUnreadableError(SpecFileError):
    pass


class MalformedLineError(AutomatonError):
    """A line matches neither the state nor the transition grammar."""

    def __init__(self, line_number: int, line: str, reason: str):
        self.line_number = line_number
        self.line = line
        self.reason = reason
        super().__init__(f"Line {line_number}: {reason}: {line!r}")


class MissingStartStateError(AutomatonError):
    def __init__(self):
        super().__init__("Automaton has no start state")


class MultipleStartStatesError(AutomatonError):
    def __init__(self, state_ids: Iterable[int]):
        self.state_ids = sorted(state_ids)
        ids = ', '.join(str(state_id) for state_id in self.state_ids)
        super().__init__(f"Automaton has more than one start state: {ids}")
