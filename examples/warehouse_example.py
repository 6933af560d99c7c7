from milpkit.tutorials import warehouse
from milpkit.solver import SolverOptions

# 30 customers, 6 possible warehouse sites, all drawn from a seeded random source
instance = warehouse.random_instance(30, 6, seed=1)
problem, open_, assign = warehouse.build_problem(instance)
print(problem)

for solver in ["cbc", "scipy"]:
    result = warehouse.solve_warehouse(instance, backend=solver, options=SolverOptions(time_limit=60))
    print("--- %s" % solver)
    print(warehouse.format_result(instance, result))
