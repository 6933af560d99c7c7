"""Warehouse location tutorial, using the algebraic interface.

Customers :math:`i \\in I` have to be served from warehouses :math:`j \\in J`. Opening warehouse
:math:`j` costs :math:`f_j`, serving customer :math:`i` from :math:`j` costs :math:`c_{ij}`
(demand times euclidean distance). The model uses the binary variables :math:`\\text{open}_j` and
:math:`\\text{assign}_{ij}`:

.. math::

    \\min \\sum_j f_j \\text{open}_j + \\sum_{i,j} c_{ij} \\text{assign}_{ij} \\quad \\text{ s.t. } \\quad
    \\sum_j \\text{assign}_{ij} = 1 \\ \\forall i, \\quad \\text{assign}_{ij} \\leq \\text{open}_j \\ \\forall i,j

and, if the warehouses have capacities :math:`K_j`, :math:`\\sum_i d_i \\text{assign}_{ij} \\leq K_j \\text{open}_j`.
"""
from collections import namedtuple
import numpy as np
from scipy.spatial.distance import cdist

from ..errors import ValidationError
from ..problem import ProblemBuilder
from ..solver import solve
from ..extraction import active

WarehouseInstance = namedtuple("WarehouseInstance",
                               ["customers", "warehouses", "fixed_costs", "demands", "capacities"])
WarehouseInstance.__new__.__defaults__ = (None,)

WarehouseResult = namedtuple("WarehouseResult", ["solution", "opened", "assignment", "cost"])

def random_instance(n_customers, n_warehouses, seed=0, capacitated=False):
    """Generates customers and warehouses at random positions in the unit square. Fixed costs are
    drawn from :math:`[1,3)`, demands from :math:`[0.5,1.5)`. If `capacitated` is True, every warehouse
    can serve 60% of the total demand.

    :rtype: tutorials.warehouse.WarehouseInstance
    """
    if n_customers <= 0 or n_warehouses <= 0:
        raise ValidationError("n_customers and n_warehouses must be positive but are %d and %d." % (n_customers, n_warehouses))
    rng = np.random.default_rng(seed)
    customers = rng.random((n_customers, 2))
    warehouses = rng.random((n_warehouses, 2))
    fixed_costs = rng.uniform(1, 3, size=n_warehouses)
    demands = rng.uniform(0.5, 1.5, size=n_customers)
    capacities = None
    if capacitated:
        capacities = np.full(n_warehouses, 0.6 * demands.sum())
    return WarehouseInstance(customers, warehouses, fixed_costs, demands, capacities)

def transport_costs(instance):
    """Returns the matrix :math:`c_{ij} = d_i \\cdot \\lVert p_i - q_j \\rVert_2`."""
    distances = cdist(np.asarray(instance.customers, dtype=float), np.asarray(instance.warehouses, dtype=float))
    return np.asarray(instance.demands, dtype=float)[:, None] * distances

def build_problem(instance):
    """Returns the warehouse location problem and its variable families `open` and `assign`."""
    customers = range(len(instance.customers))
    warehouses = range(len(instance.warehouses))
    costs = transport_costs(instance)

    builder = ProblemBuilder(objective="min")
    open_ = builder.add_variable_family("open", warehouses, domain="binary")
    assign = builder.add_variable_family("assign", customers, warehouses, domain="binary")

    builder.set_objective_function([(open_[j], instance.fixed_costs[j]) for j in warehouses])
    builder.set_objective_function([(assign[i,j], costs[i,j]) for i in customers for j in warehouses])

    for i in customers:
        builder.add_constraint([(assign[i,j], 1) for j in warehouses], "=", 1)
    for i in customers:
        for j in warehouses:
            builder.add_constraint([(assign[i,j], 1), (open_[j], -1)], "<=", 0)
    if instance.capacities is not None:
        for j in warehouses:
            lhs = [(assign[i,j], instance.demands[i]) for i in customers]
            builder.add_constraint(lhs + [(open_[j], -instance.capacities[j])], "<=", 0)

    return builder.build(), open_, assign

def solve_warehouse(instance, backend="cbc", options=None):
    """Solves a warehouse location instance.

    :return: The solution, the opened warehouses (ascending), the assignment customer -> warehouse
        and the total cost. `opened` and `assignment` are empty if there is no assignment.
    :rtype: tutorials.warehouse.WarehouseResult
    """
    problem, open_, assign = build_problem(instance)
    solution = solve(problem, backend, options)
    opened = [j for (j,), _ in active(solution, open_)]
    assignment = { i : j for (i, j), _ in active(solution, assign) }
    return WarehouseResult(solution, opened, assignment, solution.value)

def format_result(instance, result):
    lines = ["status: %s" % result.solution.status]
    if result.solution.has_values:
        lines.append("total cost: %.4f" % result.cost)
        lines.append("opened warehouses: %s" % ", ".join(str(j) for j in result.opened))
        for j in result.opened:
            served = sorted(i for i, w in result.assignment.items() if w == j)
            lines.append("  warehouse %d serves customers %s" % (j, ", ".join(str(i) for i in served)))
    return "\n".join(lines)
