from milpkit.tutorials import knapsack, warehouse
from milpkit.solver import solve, SolverOptions
from milpkit.extraction import extract
import numpy as np
import itertools

from .example_problems import small_warehouse_instance, split_warehouse_instance

solvers = ["cbc", "scipy"]

def brute_force_knapsack(instance):
    N = len(instance.values)
    best = 0
    for x in itertools.product([0,1], repeat=N):
        x = np.array(x)
        if np.all(np.atleast_2d(instance.weights) @ x <= instance.capacities):
            best = max(best, float(np.dot(instance.values, x)))
    return best

def test_random_instances_are_reproducible():
    a, b = knapsack.random_instance(10, seed=3), knapsack.random_instance(10, seed=3)
    assert all(np.array_equal(x, y) for x, y in zip(a, b))
    c = knapsack.random_instance(10, seed=4)
    assert not np.array_equal(a.values, c.values)
    a, b = warehouse.random_instance(5, 2, seed=3), warehouse.random_instance(5, 2, seed=3)
    assert np.array_equal(a.customers, b.customers) and np.array_equal(a.fixed_costs, b.fixed_costs)

def test_knapsack_problem_layout():
    instance = knapsack.random_instance(6, n_dims=2, seed=1)
    problem, items = knapsack.build_problem(instance)
    assert problem.N == 6 and len(problem.constraints) == 2
    assert problem.objective_sense == "max"
    assert set(problem.domains) == { "binary" }
    assert items.columns() == list(range(6))

def test_knapsack_matches_brute_force():
    for seed, dims in [(0,1), (1,1), (2,2)]:
        instance = knapsack.random_instance(10, n_dims=dims, seed=seed)
        expected = brute_force_knapsack(instance)
        for solver in solvers:
            result = knapsack.solve_knapsack(instance, backend=solver)
            assert result.solution.status == "optimal"
            assert abs(result.value - expected) < 1e-6
            assert abs(result.solution.value - expected) < 1e-6
            assert np.all(result.weight <= instance.capacities + 1e-6)

def test_knapsack_report():
    instance = knapsack.random_instance(8, seed=5)
    result = knapsack.solve_knapsack(instance, backend="scipy", options=SolverOptions(time_limit=30))
    report = knapsack.format_result(instance, result)
    assert report.startswith("status: optimal")
    assert "chosen items: " in report

def check_assignment(instance, result):
    n, m = len(instance.customers), len(instance.warehouses)
    assert sorted(result.assignment) == list(range(n))
    for i, j in result.assignment.items():
        assert j in result.opened

def test_warehouse_scenario():
    instance = small_warehouse_instance()
    for solver in solvers:
        problem, open_, assign = warehouse.build_problem(instance)
        solution = solve(problem, solver)
        assert solution.status == "optimal"
        assert len(solution) == problem.N == 2 + 3*2
        for i in range(3):
            # every customer is assigned to exactly one opened warehouse
            assigned = [j for (k, j), val in extract(solution, assign) if k == i and val > 0.5]
            assert len(assigned) == 1
            assert solution[open_[assigned[0]]] > 0.5
        result = warehouse.solve_warehouse(instance, backend=solver)
        assert result.opened == [0]
        assert result.assignment == { 0 : 0, 1 : 0, 2 : 0 }
        check_assignment(instance, result)

def test_warehouse_nearest():
    instance = split_warehouse_instance()
    for solver in solvers:
        result = warehouse.solve_warehouse(instance, backend=solver)
        assert result.opened == [0, 1]
        assert result.assignment == { 0 : 0, 1 : 0, 2 : 1 }
        costs = warehouse.transport_costs(instance)
        expected = 0.02 + costs[0,0] + costs[1,0] + costs[2,1]
        assert abs(result.cost - expected) < 1e-6

def test_random_warehouses():
    for capacitated in [False, True]:
        instance = warehouse.random_instance(8, 3, seed=7, capacitated=capacitated)
        for solver in solvers:
            result = warehouse.solve_warehouse(instance, backend=solver)
            assert result.solution.status == "optimal"
            check_assignment(instance, result)
            if capacitated:
                for j in result.opened:
                    load = sum(instance.demands[i] for i, w in result.assignment.items() if w == j)
                    assert load <= instance.capacities[j] + 1e-6
        report = warehouse.format_result(instance, result)
        assert "opened warehouses" in report

def test_warehouse_backends_agree():
    instance = warehouse.random_instance(10, 4, seed=11)
    costs = [warehouse.solve_warehouse(instance, backend=solver).cost for solver in solvers]
    assert abs(costs[0] - costs[1]) < 1e-6
