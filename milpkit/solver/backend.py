from abc import ABC, abstractmethod
import math

from ..errors import ValidationError

class SolverOptions:
    """Options that are passed to a backend.

    .. code-block::

        options = SolverOptions(verbose=True, time_limit=10)
        options = SolverOptions.from_dict({ "verbose" : True, "time_limit" : 10 })
    """
    FIELDS = ("verbose", "time_limit", "gap_rel", "extra")

    def __init__(self, verbose=False, time_limit=None, gap_rel=None, extra=None):
        """
        :param verbose: If True, the log of the solver is printed to stdout, defaults to False
        :type verbose: bool, optional
        :param time_limit: Wall-clock time limit in seconds, defaults to None (no limit)
        :type time_limit: float, optional
        :param gap_rel: Relative MIP gap at which the solver may stop. Defaults to None, i.e. the backend's
            default (which is an exact optimum for the PuLP backends).
        :type gap_rel: float, optional
        :param extra: Backend-specific raw options (e.g. command line flags for CBC or GLPK,
            `(name, value)` pairs for Gurobi).
        :type extra: List, optional
        """
        if not isinstance(verbose, bool):
            raise ValidationError("verbose must be a bool but is of type %s" % type(verbose))
        if time_limit is not None:
            if isinstance(time_limit, bool) or not isinstance(time_limit, (int, float)) \
               or not math.isfinite(time_limit) or time_limit <= 0:
                raise ValidationError("time_limit must be a positive number of seconds but is %r" % (time_limit,))
        if gap_rel is not None:
            if isinstance(gap_rel, bool) or not isinstance(gap_rel, (int, float)) or not 0 <= gap_rel < 1:
                raise ValidationError("gap_rel must be a number in [0,1) but is %r" % (gap_rel,))
        self.verbose = verbose
        self.time_limit = time_limit
        self.gap_rel = gap_rel
        self.extra = list(extra) if extra is not None else []

    @classmethod
    def from_dict(cls, d):
        """Creates options from a dictionary. Unknown keys raise a `ValidationError`.

        :rtype: solver.SolverOptions
        """
        unknown = set(d.keys()) - set(cls.FIELDS)
        if unknown:
            raise ValidationError("unknown solver options: %s" % ", ".join(sorted(map(str, unknown))))
        return cls(**d)

    def to_dict(self):
        return { field : getattr(self, field) for field in self.FIELDS }

    def __repr__(self):
        return "SolverOptions(%s)" % ", ".join("%s=%s" % (k, v) for k, v in self.to_dict().items())


class SolverBackend(ABC):
    """A SolverBackend hands problems to an external solver. Implementations only translate
    problems and results; the actual optimization is done by the external solver."""

    name = None

    @abstractmethod
    def available(self):
        """Returns True if the external solver can be located."""
        pass

    @abstractmethod
    def solve(self, problem, options=None):
        """Solves a problem and returns its solution. Infeasible, unbounded or
        timed out problems are reported through the status of the solution.

        :param problem: The problem.
        :type problem: problem.Problem
        :param options: Solver options, defaults to `SolverOptions()`
        :type options: solver.SolverOptions, optional
        :raises SolverError: if the solver fails internally.
        :rtype: solver.Solution
        """
        pass

    def __repr__(self):
        return "%s(name=%s)" % (type(self).__name__, self.name)


def feasible_default(bound):
    """Returns a value within `bound` for variables the solver did not report, i.e. the lower
    bound if it is finite and 0 clipped to the upper bound otherwise."""
    lb, ub = bound
    if lb is not None:
        return lb
    if ub is not None and ub < 0:
        return ub
    return 0.0
