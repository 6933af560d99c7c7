"""Knapsack tutorial, using the matrix-based interface.

Given items with values :math:`v_i` and weights :math:`w_{ki}` in one or more dimensions
:math:`k` (weight, volume, ...), choose the most valuable subset that respects every capacity
:math:`C_k`:

.. math::

    \\max_x\\ v^T x \\quad \\text{ s.t. } \\quad W x \\leq C,\\ x \\in \\{0,1\\}^N

The problem is handed over as its coefficient matrices, i.e. `Problem.from_coefficients(W, C, v, ...)`.

.. code-block::

    instance = random_instance(20, seed=1)
    result = solve_knapsack(instance, backend="cbc")
    print(format_result(instance, result))
"""
from collections import namedtuple
import numpy as np

from ..errors import ValidationError
from ..problem import Problem, VariableFamily
from ..solver import solve
from ..extraction import active

KnapsackInstance = namedtuple("KnapsackInstance", ["values", "weights", "capacities"])
KnapsackResult = namedtuple("KnapsackResult", ["solution", "items", "value", "weight"])

def random_instance(n_items, n_dims=1, seed=0):
    """Generates a knapsack instance with integral values in 1..100 and weights in 1..50. Every
    capacity is half of the total weight in its dimension. The same seed always yields the same instance.

    :param n_items: Number of items.
    :type n_items: int
    :param n_dims: Number of weight dimensions, defaults to 1
    :type n_dims: int, optional
    :param seed: Seed for `numpy.random.default_rng`, defaults to 0
    :type seed: int, optional
    :rtype: tutorials.knapsack.KnapsackInstance
    """
    if n_items <= 0 or n_dims <= 0:
        raise ValidationError("n_items and n_dims must be positive but are %d and %d." % (n_items, n_dims))
    rng = np.random.default_rng(seed)
    values = rng.integers(1, 101, size=n_items).astype(float)
    weights = rng.integers(1, 51, size=(n_dims, n_items)).astype(float)
    capacities = np.floor(weights.sum(axis=1) / 2)
    return KnapsackInstance(values, weights, capacities)

def build_problem(instance):
    """Returns the knapsack problem and the family of its item variables."""
    values, weights, capacities = instance
    weights = np.atleast_2d(weights)
    N = len(values)
    problem = Problem.from_coefficients(weights,
                                        capacities,
                                        values,
                                        domains=["binary"] * N,
                                        sense="<=",
                                        objective="max",
                                        names=["item%d" % i for i in range(N)])
    return problem, VariableFamily.contiguous("item", 0, range(N))

def solve_knapsack(instance, backend="cbc", options=None):
    """Solves a knapsack instance.

    :return: The solution, the chosen items (ascending), their total value and their total weight per dimension.
    :rtype: tutorials.knapsack.KnapsackResult
    """
    problem, items = build_problem(instance)
    solution = solve(problem, backend, options)
    chosen = [idx for (idx,), _ in active(solution, items)]
    weights = np.atleast_2d(instance.weights)
    return KnapsackResult(solution,
                          chosen,
                          float(np.sum(np.asarray(instance.values)[chosen])),
                          weights[:, chosen].sum(axis=1))

def format_result(instance, result):
    lines = ["status: %s" % result.solution.status]
    if result.solution.has_values:
        lines.append("total value: %g" % result.value)
        for dim, (w, cap) in enumerate(zip(result.weight, np.atleast_1d(instance.capacities))):
            lines.append("weight[%d]: %g / %g" % (dim, w, cap))
        lines.append("chosen items: %s" % ", ".join(str(i) for i in result.items))
    return "\n".join(lines)
