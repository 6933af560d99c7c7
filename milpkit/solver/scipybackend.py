import logging
import numpy as np
from scipy.optimize import milp, LinearConstraint, Bounds
from scipy.sparse import lil_matrix

from ..errors import SolverError
from .backend import SolverBackend, SolverOptions
from .solution import Solution

logger = logging.getLogger(__name__)

class ScipyBackend(SolverBackend):
    """Solves problems with `scipy.optimize.milp`, which uses the HiGHS solver that ships with scipy.
    Since scipy only minimizes, maximization problems are solved by negating the objective."""

    name = "scipy"

    def available(self):
        return True

    def to_arrays(self, problem):
        """Translates a problem into the arguments of `scipy.optimize.milp`.

        :return: objective vector, integrality vector, bounds and constraints (or None if there are no constraints)
        :rtype: Tuple[numpy.ndarray, numpy.ndarray, scipy.optimize.Bounds, scipy.optimize.LinearConstraint]
        """
        c = np.array(problem.objective, dtype=float)
        if problem.objective_sense == "max":
            c = -c
        integrality = np.array([0 if dom == "real" else 1 for dom in problem.domains])
        lb = np.array([-np.inf if l is None else l for l, _ in problem.bounds], dtype=float)
        ub = np.array([np.inf if u is None else u for _, u in problem.bounds], dtype=float)

        M = len(problem.constraints)
        if M == 0:
            return c, integrality, Bounds(lb, ub), None

        A = lil_matrix((M, problem.N))
        b_l, b_u = np.full(M, -np.inf), np.full(M, np.inf)
        for constridx, (lhs, sense, rhs) in enumerate(problem.constraints):
            for var, coeff in lhs:
                A[constridx, var] += coeff
            if sense in ("<=", "="):
                b_u[constridx] = rhs
            if sense in (">=", "="):
                b_l[constridx] = rhs
        return c, integrality, Bounds(lb, ub), LinearConstraint(A.tocsr(), b_l, b_u)

    def solve(self, problem, options=None):
        options = SolverOptions() if options is None else options
        c, integrality, bounds, constraints = self.to_arrays(problem)
        # exact optimum unless a gap is given
        milp_options = { "disp" : options.verbose, "mip_rel_gap" : 1e-9 }
        if options.time_limit is not None:
            milp_options["time_limit"] = options.time_limit
        if options.gap_rel is not None:
            milp_options["mip_rel_gap"] = options.gap_rel
        logger.debug("solving %s with scipy (%s)", problem, options)

        try:
            res = milp(c, integrality=integrality, bounds=bounds, constraints=constraints, options=milp_options)
        except ValueError as e:
            raise SolverError("scipy failed: %s" % e) from e

        if res.status == 4:
            raise SolverError("scipy failed: %s" % res.message)
        status = { 0 : "optimal", 1 : "timelimit", 2 : "infeasible", 3 : "unbounded" }[res.status]

        result_vector, value = None, None
        if res.x is not None and status in ("optimal", "timelimit"):
            result_vector = np.array(res.x, dtype=float)
            # integral variables come back with round-off, e.g. 0.9999999997
            isint = integrality == 1
            result_vector[isint] = np.round(result_vector[isint])
            value = problem.evaluate(result_vector)

        if status == "timelimit":
            logger.warning("scipy stopped at the time limit of %ss", options.time_limit)
        logger.info("scipy finished with status %s, objective value %s", status, value)
        return Solution(status, result_vector, value, backend=self.name)
