from collections import namedtuple
import math
import numpy as np

from ..errors import ValidationError
from ..utils import cast_csr_matrix, cast_vector

DOMAINS = ("real", "integer", "binary")
SENSES = ("<=", "=", ">=")
OBJECTIVES = ("min", "max")

_DOMAIN_ALIASES = { "continuous" : "real" }

Constraint = namedtuple("Constraint", ["lhs", "sense", "rhs"])
Constraint.__doc__ = """A linear constraint

.. math::

    \\sum_{j} a_j x_j \\circ b

where :math:`\\circ \\in \\{ \\leq, =, \\geq \\}`. `lhs` is a tuple of variable/coefficient pairs
:math:`(j, a_j)`, `sense` is one of "<=", "=" or ">=" and `rhs` is :math:`b`."""

def _is_number(value):
    try:
        return math.isfinite(float(value))
    except (TypeError, ValueError):
        return False

def normalize_domain(domain, idx=None):
    domain = _DOMAIN_ALIASES.get(domain, domain)
    if domain not in DOMAINS:
        where = "" if idx is None else " (@index=%d)" % idx
        raise ValidationError("domain must be in %s but is %r%s." % (list(DOMAINS), domain, where))
    return domain

def default_bounds(domain):
    return (0.0, 1.0) if domain == "binary" else (0.0, None)

def _check_bound(value, idx, side):
    if value is None:
        return None
    if isinstance(value, (float, np.floating)) and math.isinf(value):
        # only -inf below and +inf above mean "unbounded"
        if (side == "lower") == (value < 0):
            return None
        raise ValidationError("%s bound %s leaves no feasible value (@index=%d)." % (side, value, idx))
    if not _is_number(value):
        raise ValidationError("%s bound %r is not a number (@index=%d)." % (side, value, idx))
    return float(value)

def check_expression(expression, N, what="expression"):
    """Checks a list of variable/coefficient pairs against a variable count `N` and returns
    it as a tuple of `(int, float)` pairs."""
    checked = []
    for idx, pair in enumerate(expression):
        try:
            var, coeff = pair
        except (TypeError, ValueError):
            raise ValidationError("%s entry %r is not a variable/coefficient pair (@index=%d)." % (what, pair, idx))
        if isinstance(var, (bool, np.bool_)) or not isinstance(var, (int, np.integer)):
            raise ValidationError("Variable %r in %s is not an index (@index=%d)." % (var, what, idx))
        if var < 0 or var >= N:
            raise ValidationError("Variable %s does not exist (@index=%d)." % (var, idx))
        if not _is_number(coeff):
            raise ValidationError("Coefficient coeff=%s is not a number (@index=%d)." % (coeff, idx))
        checked.append((int(var), float(coeff)))
    return tuple(checked)


class Problem:
    """
    A Problem is an immutable description of a mixed integer linear program

    .. math::

        \\min_x/\\max_x\\ \\sigma^T x \\quad \\text{ s.t. } \\quad \\sum_j a_{ij} x_j \\circ_i b_i,
        \\ l_j \\leq x_j \\leq u_j, \\ x_j \\in \\mathbb{D}_j

    over the variables :math:`x_0,\\dots,x_{N-1}`. A Problem can either be assembled from coefficient
    matrices and -vectors (see `Problem.from_coefficients`) or through a `ProblemBuilder`.

    .. code-block::

        # optimal result should be x_opt=[0,1] with value 4.
        problem = Problem.from_coefficients([[1,1]], [1], [3,4],
                                            domains=["binary","binary"], objective="max")
        result = solve(problem, "cbc")
        print(result)
    """
    def __init__(self, objective, constraints=(), bounds=None, domains=None, objective_sense="min", names=None):
        """
        :param objective: Coefficients :math:`\\sigma` of the objective function, one per variable.
            The length of this vector defines the number of variables :math:`N`.
        :type objective: List[float]
        :param constraints: Constraints given as `Constraint` instances or `(lhs, sense, rhs)` triples.
        :type constraints: List[Tuple[List[Tuple[int,float]],str,float]]
        :param bounds: Lower/upper bounds, either a list of `(lb, ub)` pairs (one per variable) or a
            dictionary mapping variable indices to `(lb, ub)`. `None` means unbounded on that side.
            Variables without explicit bounds get `(0, 1)` if they are binary, `(0, None)` otherwise.
        :type bounds: List[Tuple[float,float]] or Dict[int,Tuple[float,float]], optional
        :param domains: Domain of each variable, i.e. "real", "integer" or "binary". Defaults to "real".
        :type domains: List[str], optional
        :param objective_sense: "min" or "max", defaults to "min"
        :type objective_sense: str, optional
        :param names: Variable names, defaults to "x0",..,"x{N-1}"
        :type names: List[str], optional
        """
        if objective_sense not in OBJECTIVES:
            raise ValidationError("objective must be either 'min' or 'max' but is %r." % (objective_sense,))

        opt = np.array(cast_vector(objective))
        if not np.all(np.isfinite(opt)):
            raise ValidationError("objective contains coefficients that are not finite numbers.")
        N = len(opt)

        if domains is None:
            domains = ["real"] * N
        domains = list(domains)
        if len(domains) != N:
            raise ValidationError("got %d domains for %d variables." % (len(domains), N))
        domains = tuple(normalize_domain(dom, idx) for idx, dom in enumerate(domains))

        self.__N = N
        self.__objective = opt
        self.__objective.setflags(write=False)
        self.__domains = domains
        self.__sense = objective_sense
        self.__bounds = self._check_bounds(bounds)
        self.__constraints = tuple(self._check_constraint(c, idx) for idx, c in enumerate(constraints))

        if names is None:
            names = ["x%d" % idx for idx in range(N)]
        names = tuple(str(name) for name in names)
        if len(names) != N:
            raise ValidationError("got %d names for %d variables." % (len(names), N))
        if len(set(names)) != N:
            raise ValidationError("variable names must be unique.")
        self.__names = names

    def _check_bounds(self, bounds):
        N = self.__N
        result = [default_bounds(dom) for dom in self.__domains]
        if bounds is None:
            return tuple(result)
        if isinstance(bounds, dict):
            items = bounds.items()
        else:
            bounds = list(bounds)
            if len(bounds) != N:
                raise ValidationError("got %d bounds for %d variables." % (len(bounds), N))
            items = enumerate(bounds)

        for idx, bound in items:
            if isinstance(idx, (bool, np.bool_)) or not isinstance(idx, (int, np.integer)) or idx < 0 or idx >= N:
                raise ValidationError("bounds refer to variable %r which does not exist." % (idx,))
            if bound is None:
                continue
            try:
                lb, ub = bound
            except (TypeError, ValueError):
                raise ValidationError("bound %r is not a (lb, ub) pair (@index=%d)." % (bound, idx))
            lb, ub = _check_bound(lb, idx, "lower"), _check_bound(ub, idx, "upper")
            if lb is not None and ub is not None and lb > ub:
                raise ValidationError("lower bound %s exceeds upper bound %s (@index=%d)." % (lb, ub, idx))
            if self.__domains[idx] == "binary":
                lb = 0.0 if lb is None else lb
                ub = 1.0 if ub is None else ub
                if lb < 0 or ub > 1:
                    raise ValidationError("bounds of binary variable leave [0,1] (@index=%d)." % idx)
            result[int(idx)] = (lb, ub)
        return tuple(result)

    def _check_constraint(self, constraint, constridx):
        try:
            lhs, sense, rhs = constraint
        except (TypeError, ValueError):
            raise ValidationError("constraint %r is not a (lhs, sense, rhs) triple (@index=%d)." % (constraint, constridx))
        if sense not in SENSES:
            raise ValidationError("sense must be in %s but is %r (@index=%d)." % (list(SENSES), sense, constridx))
        if not _is_number(rhs):
            raise ValidationError("Right hand side is not a number: rhs=%s (@index=%d)." % (rhs, constridx))
        return Constraint(check_expression(lhs, self.__N, "constraint %d" % constridx), sense, float(rhs))

    @classmethod
    def from_coefficients(cls, A, b, opt, domains=None, sense="<=", objective="min", bounds=None, names=None):
        """Returns a Mixed Integer Linear Programming (MILP) formulation of a problem

        .. math::

            \\min_x/\\max_x\\ \\sigma^T x \\quad \\text{ s.t. } \\quad Ax \\circ b, \\ x_i \\in \\mathbb{D}_i,\\ \\forall i=1,\\dots,N

        where :math:`\\circ \\in \\{ \\leq, =, \\geq \\}`, :math:`N` is the number of variables and :math:`M`
        the number of linear constraints. :math:`\\mathbb{D}_i` indicates the domain of each variable.
        `A` may be dense (nested lists, numpy arrays) or a scipy sparse matrix.

        :param A: Matrix for the constraints (:math:`A`). May be None or empty if there are no constraints.
        :type A: :math:`M \\times N`-Matrix
        :param b: Right hand side of the constraints (:math:`b`).
        :type b: :math:`M`-Vector
        :param opt: Weights for individual variables in x (:math:`\\sigma`).
        :type opt: :math:`N`-Vector
        :param domains: Array of strings, e.g. ["real", "integer", "integer", "binary", ...] which indicates
            the domain for each variable. Defaults to "real" for all variables.
        :type domains: List[str], optional
        :param sense: "<=", "=" or ">=" for all rows, or a list with one operator per row. Defaults to "<=".
        :type sense: str or List[str], optional
        :param objective: "min" or "max", defaults to "min"
        :type objective: str, optional
        :param bounds: lower/upper bounds, either one pair per variable or a dictionary from indices to pairs.
        :type bounds: [(float,float)] or Dict[int,(float,float)], optional
        :return: The resulting Problem.
        :rtype: problem.Problem
        """
        opt = cast_vector(opt)
        N = len(opt)

        if A is None or (not hasattr(A, "shape") and len(A) == 0):
            A = cast_csr_matrix(np.zeros((0, N)))
        else:
            try:
                A = cast_csr_matrix(A)
            except ValueError as e:
                raise ValidationError("constraint matrix is malformed: %s" % e) from e
        if A.shape[0] > 0 and A.shape[1] != N:
            raise ValidationError("constraint rows have %d entries but there are %d variables." % (A.shape[1], N))

        b = cast_vector([] if b is None else b)
        if len(b) != A.shape[0]:
            raise ValidationError("got %d right hand sides for %d constraint rows." % (len(b), A.shape[0]))

        if isinstance(sense, str):
            senses = [sense] * A.shape[0]
        else:
            senses = list(sense)
            if len(senses) != A.shape[0]:
                raise ValidationError("got %d senses for %d constraint rows." % (len(senses), A.shape[0]))

        # now: add linear constraints: Ax <= b, row by row.
        constraints = []
        for constridx in range(A.shape[0]):
            start, end = A.indptr[constridx], A.indptr[constridx + 1]
            lhs = [(int(j), float(d)) for j, d in zip(A.indices[start:end], A.data[start:end]) if d != 0]
            constraints.append((lhs, senses[constridx], b[constridx]))

        return cls(opt, constraints, bounds=bounds, domains=domains, objective_sense=objective, names=names)

    @property
    def N(self):
        """Number of variables."""
        return self.__N

    def __len__(self):
        return self.__N

    @property
    def objective(self):
        """Read-only vector of objective coefficients."""
        return self.__objective

    @property
    def objective_sense(self):
        return self.__sense

    @property
    def constraints(self):
        return self.__constraints

    @property
    def bounds(self):
        return self.__bounds

    @property
    def domains(self):
        return self.__domains

    @property
    def names(self):
        return self.__names

    @property
    def is_mixed_integer(self):
        return any(dom != "real" for dom in self.__domains)

    def relaxation(self):
        """Returns the LP relaxation of this problem, i.e. the same problem where every variable is real.
        Binary variables keep their bounds in :math:`[0,1]`.

        :rtype: problem.Problem
        """
        return Problem(self.__objective.copy(),
                       self.__constraints,
                       bounds=self.__bounds,
                       domains=["real"] * self.__N,
                       objective_sense=self.__sense,
                       names=self.__names)

    def evaluate(self, x):
        """Computes :math:`\\sigma^T x` for an assignment `x`."""
        x = self._check_assignment(x)
        return float(self.__objective @ x)

    def violated_constraints(self, x, tol=1e-6):
        """Returns the indices of all constraints that are violated by the assignment `x` (up to `tol`).

        :rtype: List[int]
        """
        x = self._check_assignment(x)
        violated = []
        for constridx, (lhs, sense, rhs) in enumerate(self.__constraints):
            val = sum(coeff * x[var] for var, coeff in lhs)
            if (sense == "<=" and val > rhs + tol) or \
               (sense == ">=" and val < rhs - tol) or \
               (sense == "=" and abs(val - rhs) > tol):
                violated.append(constridx)
        return violated

    def is_feasible(self, x, tol=1e-6):
        """Checks whether `x` satisfies all constraints, bounds and integrality requirements."""
        x = self._check_assignment(x)
        for idx, ((lb, ub), dom) in enumerate(zip(self.__bounds, self.__domains)):
            if lb is not None and x[idx] < lb - tol:
                return False
            if ub is not None and x[idx] > ub + tol:
                return False
            if dom != "real" and abs(x[idx] - round(x[idx])) > tol:
                return False
        return len(self.violated_constraints(x, tol)) == 0

    def _check_assignment(self, x):
        x = cast_vector(x)
        if len(x) != self.__N:
            raise ValidationError("assignment has %d entries but there are %d variables." % (len(x), self.__N))
        return x

    def __repr__(self):
        counts = { dom : self.__domains.count(dom) for dom in DOMAINS if dom in self.__domains }
        return "Problem(objective=%s, variables=%d, constraints=%d, domains=%s)" % (
            self.__sense, self.__N, len(self.__constraints), counts)
