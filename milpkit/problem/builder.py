import logging

from ..errors import ValidationError
from .problem import Problem, Constraint, OBJECTIVES, SENSES, normalize_domain, check_expression, default_bounds
from .family import VariableFamily

logger = logging.getLogger(__name__)

class ProblemBuilder:
    """
    A ProblemBuilder assembles a `Problem` by hand, i.e. by adding variables, constraints
    and the objective function one after another.

    .. code-block::

        # optimal result should be x_opt=[2,6].
        builder = ProblemBuilder(objective="max")
        var1, var2 = builder.add_variables(["integer", "real"])
        builder.add_constraint([(var1, 2), (var2, 1)], "<=", 10)
        builder.add_constraint([(var1, 4), (var2, -1)], "<=", 8)
        builder.add_constraint([(var1, -8), (var2, 2)], "<=", 2)
        builder.set_objective_function([(var1, 1), (var2, 1)])

        result = solve(builder.build(), "cbc")
        print(result)

    Indexed variables are added as a `VariableFamily`:

    .. code-block::

        builder = ProblemBuilder()
        open_ = builder.add_variable_family("open", range(m), domain="binary")
        assign = builder.add_variable_family("assign", range(n), range(m), domain="binary")
        for i in range(n):
            builder.add_constraint([(assign[i,j], 1) for j in range(m)], "=", 1)
    """
    def __init__(self, objective="min"):
        """Initializes an empty builder.

        :param objective: Whether the problem should minimize or maximize ("min" or "max"), defaults to "min"
        :type objective: str, optional
        """
        if objective not in OBJECTIVES:
            raise ValidationError("objective must be either 'min' or 'max' but is %r." % (objective,))
        self.__sense = objective
        self.__domains = []
        self.__bounds = []
        self.__names = []
        self.__objective = {}
        self.__constraints = []
        self.__families = {}

    @property
    def N(self):
        return len(self.__domains)

    @property
    def families(self):
        """Dictionary of all variable families that were added, by name."""
        return dict(self.__families)

    def add_variable(self, domain="real", lb=None, ub=None, name=None):
        """Adds a single variable.

        :param domain: "real", "integer" or "binary", defaults to "real"
        :type domain: str, optional
        :param lb: lower bound, defaults to 0. Use `float("-inf")` for variables that are unbounded below
        :type lb: float, optional
        :param ub: upper bound, defaults to 1 for binary variables and None otherwise
        :type ub: float, optional
        :param name: variable name, defaults to "x<index>"
        :type name: str, optional
        :return: Index of the new variable.
        :rtype: int
        """
        return self.add_variables([domain], bounds=[(lb, ub)], names=None if name is None else [name])[0]

    def add_variables(self, domains, bounds=None, names=None):
        """Adds a list of variables. Each element in `domains` must be either `integer`, `binary` or `real`.
        If `bounds` are given, they must be `(lb, ub)` pairs, one for each variable. A bound of None falls back
        to the default of the domain, i.e. :math:`[0,1]` for binary and :math:`[0,\\infty)` otherwise.

        :return: Indices of new variables.
        :rtype: List[int]
        """
        domains = [normalize_domain(dom, idx) for idx, dom in enumerate(domains)]
        if bounds is None:
            bounds = [(None, None)] * len(domains)
        bounds = list(bounds)
        if len(bounds) != len(domains):
            raise ValidationError("got %d bounds for %d variables." % (len(bounds), len(domains)))
        if names is not None:
            names = list(names)
            if len(names) != len(domains):
                raise ValidationError("got %d names for %d variables." % (len(names), len(domains)))

        indices = []
        for idx, (domain, bound) in enumerate(zip(domains, bounds)):
            lb, ub = (None, None) if bound is None else bound
            dlb, dub = default_bounds(domain)
            varidx = len(self.__domains)
            self.__domains.append(domain)
            self.__bounds.append((dlb if lb is None else lb, dub if ub is None else ub))
            self.__names.append("x%d" % varidx if names is None else names[idx])
            indices.append(varidx)
        return indices

    def add_variable_family(self, name, *index_sets, domain="real", lb=None, ub=None):
        """Adds one variable for every element of the cartesian product of `index_sets`.
        The new variables occupy consecutive columns in row-major order.

        :param name: Name of the family. Must be unique within this builder.
        :type name: str
        :param index_sets: One or more index sets.
        :type index_sets: Iterable
        :param domain: Domain of all variables of this family, defaults to "real"
        :type domain: str, optional
        :return: The new family.
        :rtype: problem.VariableFamily
        """
        if name in self.__families:
            raise ValidationError("variable family %s already exists." % name)
        family = VariableFamily.contiguous(name, self.N, *index_sets)
        self.add_variables([domain] * len(family),
                           bounds=[(lb, ub)] * len(family),
                           names=[family.variable_name(idx) for idx in family])
        self.__families[name] = family
        logger.debug("added variable family %s with %d variables", name, len(family))
        return family

    def set_objective_function(self, expression):
        """Sets the objective function of the form

        .. math::

            \\sum_j \\sigma_j x_j

        where :math:`\\sigma_j` indicates a coefficient and :math:`x_j` a variable. If the objective function
        was already set, the listed coefficients are overwritten and all others stay the same.

        :param expression: Sum is given as a list of variable/coefficient pairs. Each pair has the coefficient on the
            right and the variable on the left.
        :type expression: List[Tuple[int,float]]
        """
        for var, coeff in check_expression(expression, self.N, "objective"):
            self.__objective[var] = coeff

    def add_constraint(self, lhs, sense, rhs):
        """Adds a constraint of the form

        .. math::

            \\sum_{j} a_j x_j \\circ b

        where :math:`\\circ \\in \\{ \\leq, =, \\geq \\}`, :math:`a_j` indicates a coefficient and :math:`x_j` a variable.

        :param lhs: Left side of the equation, given as a list of variable/coefficient pairs. Each pair has the coefficient on the
            right and the variable on the left.
        :type lhs: List[Tuple[int,float]]
        :param sense: Type of equation, i.e. "<=", ">=" or "=".
        :type sense: str
        :param rhs: Right side of the equation, i.e. a number.
        :type rhs: float
        :return: index of the added constraint
        :rtype: int
        """
        if sense not in SENSES:
            raise ValidationError("sense must be in %s but is %r." % (list(SENSES), sense))
        try:
            rhs = float(rhs)
        except (TypeError, ValueError):
            raise ValidationError("Right hand side is not a number: rhs=%s" % (rhs,))
        lhs = check_expression(lhs, self.N, "constraint %d" % len(self.__constraints))

        constridx = len(self.__constraints)
        self.__constraints.append(Constraint(lhs, sense, rhs))
        return constridx

    def build(self):
        """Assembles the problem. The builder may be extended afterwards, which does not affect
        problems that were built before.

        :rtype: problem.Problem
        """
        opt = [self.__objective.get(idx, 0.0) for idx in range(self.N)]
        problem = Problem(opt,
                          self.__constraints,
                          bounds=self.__bounds,
                          domains=self.__domains,
                          objective_sense=self.__sense,
                          names=self.__names)
        logger.debug("built %s", problem)
        return problem

    def __repr__(self):
        return "ProblemBuilder(objective=%s, variables=%d, constraints=%d)" % (
            self.__sense, self.N, len(self.__constraints))
