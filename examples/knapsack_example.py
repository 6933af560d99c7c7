from milpkit.problem import Problem
from milpkit.solver import solve, SolverOptions
from milpkit.extraction import active
from milpkit.problem import VariableFamily
import numpy as np

# five items, a single capacity. the problem is given by its coefficients:
#   max v^T x  s.t.  w^T x <= C,  x binary
rng = np.random.default_rng(42)
values = rng.integers(1, 101, size=5)
weights = rng.integers(1, 51, size=5)
capacity = weights.sum() // 2

problem = Problem.from_coefficients([weights], [capacity], values,
                                    domains=["binary"]*5, objective="max")
print(problem)

result = solve(problem, "cbc", SolverOptions(verbose=True))
print(result)

items = VariableFamily.contiguous("item", 0, range(5))
for (i,), _ in active(result, items):
    print("take item %d (value %d, weight %d)" % (i, values[i], weights[i]))
