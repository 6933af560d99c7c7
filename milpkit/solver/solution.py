import numpy as np

from ..errors import ValidationError

STATUSES = ("optimal", "infeasible", "unbounded", "timelimit", "notsolved", "undefined")

class Solution:
    def __init__(self, status, result_vector, value, backend=None):
        """Result of a solved MILP or LP instance. A Solution is read-only.
        
        :param status: Status of the solved instance, i.e. optimal, infeasible, unbounded, timelimit 
            (the time limit was hit, `result_vector` holds the best assignment found so far if there is one),
            notsolved or undefined.
        :type status: str
        :param result_vector: Resulting assignments for primal variables, one entry per variable, or None
            if the solver did not produce an assignment.
        :type result_vector: List[float]
        :param value: Resulting value of the objective function, or None.
        :type value: float
        :param backend: Name of the backend that produced this solution.
        :type backend: str, optional
        """
        if status not in STATUSES:
            raise ValidationError("status must be in %s but is %r" % (list(STATUSES), status))
        if result_vector is not None:
            result_vector = np.array(result_vector, dtype=float)
            result_vector.setflags(write=False)
        self.__status = status
        self.__result_vector = result_vector
        self.__value = None if value is None else float(value)
        self.__backend = backend

    @property
    def status(self):
        return self.__status

    @property
    def result_vector(self):
        return self.__result_vector

    @property
    def value(self):
        return self.__value

    @property
    def backend(self):
        return self.__backend

    @property
    def is_optimal(self):
        return self.__status == "optimal"

    @property
    def has_values(self):
        return self.__result_vector is not None

    @property
    def values(self):
        """Dictionary mapping variable indices to their values. Empty if there is no assignment."""
        if self.__result_vector is None:
            return {}
        return { idx : float(val) for idx, val in enumerate(self.__result_vector) }

    def __getitem__(self, idx):
        if self.__result_vector is None:
            raise KeyError("solution with status %s has no values" % self.__status)
        return float(self.__result_vector[idx])

    def __len__(self):
        return 0 if self.__result_vector is None else len(self.__result_vector)

    def __repr__(self):
        return "Solution(status=%s, result_vector=%s, value=%s)" % (self.__status, self.__result_vector, self.__value)
