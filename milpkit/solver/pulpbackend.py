import logging
import pulp
import numpy as np

from ..errors import SolverError, ValidationError
from .backend import SolverBackend, SolverOptions, feasible_default
from .solution import Solution

logger = logging.getLogger(__name__)

_CATEGORIES = { "real" : pulp.LpContinuous, "integer" : pulp.LpInteger, "binary" : pulp.LpBinary }
_SENSES = { "<=" : pulp.LpConstraintLE, "=" : pulp.LpConstraintEQ, ">=" : pulp.LpConstraintGE }

def _cbc(options):
    cbc_options = list(options.extra)
    gap_rel = 1e-9 if options.gap_rel is None else options.gap_rel
    return pulp.PULP_CBC_CMD(gapRel=gap_rel, timeLimit=options.time_limit, msg=options.verbose, options=cbc_options)

def _glpk(options):
    glpk_options = ["--tmlim", str(int(max(1, round(options.time_limit))))] if options.time_limit is not None else []
    if options.gap_rel is not None:
        glpk_options += ["--mipgap", str(options.gap_rel)]
    return pulp.GLPK_CMD(msg=options.verbose, options=glpk_options + options.extra)

def _gurobi(options):
    gurobi_options = [
        ("MIPGap", 0 if options.gap_rel is None else options.gap_rel), ("MIPGapAbs", 0),
        ("FeasibilityTol", 1e-9), ("IntFeasTol", 1e-9), ("NumericFocus", 3)]
    if options.time_limit is not None:
        gurobi_options.append(("TimeLimit", str(options.time_limit)))
    return pulp.GUROBI_CMD(msg=options.verbose, options=gurobi_options + options.extra)

def _cplex(options):
    return pulp.CPLEX_PY(msg=options.verbose, timeLimit=options.time_limit, gapRel=options.gap_rel)

def _highs(options):
    return pulp.HiGHS_CMD(msg=options.verbose, timeLimit=options.time_limit, gapRel=options.gap_rel,
                          options=options.extra)

PULP_SOLVERS = { "cbc" : _cbc, "glpk" : _glpk, "gurobi" : _gurobi, "cplex" : _cplex, "highs" : _highs }


class PulpBackend(SolverBackend):
    """
    Solves problems through the PuLP library, which is capable of solving LP/MILP instances
    by using different kinds of solvers. Supported are "cbc" (bundled with PuLP), "glpk", "gurobi",
    "cplex" and "highs".

    .. code-block::

        backend = PulpBackend("cbc")
        result = backend.solve(problem, SolverOptions(time_limit=10))
        print(result)
    """
    def __init__(self, name="cbc"):
        """
        :param name: The solver that should be used, defaults to "cbc"
        :type name: str, optional
        """
        if name not in PULP_SOLVERS:
            raise ValidationError("solver must be in %s but is %r" % (list(PULP_SOLVERS), name))
        self.name = name

    def _solver(self, options):
        return PULP_SOLVERS[self.name](options)

    def available(self):
        try:
            return bool(self._solver(SolverOptions()).available())
        except pulp.PulpSolverError:
            return False

    def to_pulp(self, problem):
        """Translates a problem into a `pulp.LpProblem`.

        :return: The PuLP model and its variables (in column order).
        :rtype: Tuple[pulp.LpProblem, List[pulp.LpVariable]]
        """
        sense = { "min" : pulp.LpMinimize, "max" : pulp.LpMaximize }[problem.objective_sense]
        pulpmodel = pulp.LpProblem("milpkit", sense)

        variables = []
        for varidx, (domain, (lb, ub)) in enumerate(zip(problem.domains, problem.bounds)):
            var = pulp.LpVariable("x%d" % varidx, lowBound=lb, upBound=ub, cat=_CATEGORIES[domain])
            # variables that do not occur in any constraint must be known to the model as well
            pulpmodel.addVariable(var)
            variables.append(var)

        # zero coefficients are kept, so every column is written to the model file
        pulpmodel.setObjective(pulp.LpAffineExpression(
            [(var, float(coeff)) for var, coeff in zip(variables, problem.objective)]))

        for constridx, (lhs, sense, rhs) in enumerate(problem.constraints):
            expr = pulp.LpAffineExpression([(variables[var], coeff) for var, coeff in lhs])
            pulpmodel += pulp.LpConstraint(e=expr, sense=_SENSES[sense], name="c%d" % constridx, rhs=rhs)

        return pulpmodel, variables

    def solve(self, problem, options=None):
        options = SolverOptions() if options is None else options
        pulpmodel, variables = self.to_pulp(problem)
        logger.debug("solving %s with %s (%s)", problem, self.name, options)

        try:
            pulpmodel.solve(self._solver(options))
        except pulp.PulpSolverError as e:
            raise SolverError("%s failed: %s" % (self.name, e)) from e

        status = self._status(pulpmodel, options)
        result_vector, value = None, None
        if status in ("optimal", "timelimit"):
            values = [var.value() for var in variables]
            if status == "optimal" or any(val is not None for val in values):
                result_vector = np.array([feasible_default(bound) if val is None else val
                                          for val, bound in zip(values, problem.bounds)], dtype=float)
                isint = np.array([dom != "real" for dom in problem.domains], dtype=bool)
                result_vector[isint] = np.round(result_vector[isint])
                value = problem.evaluate(result_vector)

        if status == "timelimit":
            logger.warning("%s stopped at the time limit of %ss", self.name, options.time_limit)
        logger.info("%s finished with status %s, objective value %s", self.name, status, value)
        return Solution(status, result_vector, value, backend=self.name)

    def _status(self, pulpmodel, options):
        if pulpmodel.status == pulp.LpStatusOptimal:
            if options.time_limit is not None and pulpmodel.sol_status == pulp.LpSolutionIntegerFeasible:
                return "timelimit"
            return "optimal"
        if pulpmodel.status == pulp.LpStatusNotSolved:
            return "timelimit" if options.time_limit is not None else "notsolved"
        return {   pulp.LpStatusInfeasible : "infeasible",
                   pulp.LpStatusUnbounded : "unbounded",
                   pulp.LpStatusUndefined : "undefined" }.get(pulpmodel.status, "undefined")
