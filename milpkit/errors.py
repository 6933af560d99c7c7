class MilpkitError(Exception):
    """Base class of all errors raised by milpkit."""


class ValidationError(MilpkitError, ValueError):
    """A problem description or a set of solver options is malformed. 
    Always raised before any solver is invoked."""


class SolverUnavailableError(MilpkitError):
    """The requested backend is unknown or cannot be located on this machine."""


class SolverError(MilpkitError):
    """The backend failed internally. Infeasible, unbounded or timed out 
    problems are not errors, they are reported through `Solution.status`."""
