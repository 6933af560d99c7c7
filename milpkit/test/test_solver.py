from milpkit.solver import solve, get_backend, register_backend, available_backends, \
                           SolverOptions, SolverBackend, Solution, PulpBackend, ScipyBackend
from milpkit.problem import Problem
from milpkit.errors import SolverError, SolverUnavailableError, ValidationError
import milpkit.solver.registry as registry
import milpkit.solver.scipybackend as scipybackend
from types import SimpleNamespace
import numpy as np
import pulp
import pytest

from .example_problems import toy_milp, toy_lp, toy_milp_by_hand, binary_pick_one, \
                              infeasible_lp, unbounded_lp, empty_problem

free_solvers = ["cbc", "scipy"]
all_solvers = ["cbc", "glpk", "cplex", "gurobi", "highs", "scipy"]

solvers = free_solvers

def test_toy_milp():
    for solver in solvers:
        for problem in [toy_milp(), toy_milp_by_hand()]:
            result = solve(problem, solver)
            assert result.status == "optimal"
            assert result.backend == solver
            assert np.allclose(result.result_vector, [2,6])
            assert abs(result.value - 8) < 1e-6

def test_toy_lp():
    for solver in solvers:
        result = solve(toy_lp(), solver)
        assert result.status == "optimal"
        assert np.allclose(result.result_vector, [1.5,7.0])
        assert abs(result.value - 8.5) < 1e-6

def test_binary_pick_one():
    for solver in solvers:
        result = solve(binary_pick_one(), solver)
        assert result.status == "optimal"
        assert abs(result.value - 4) < 1e-6
        assert result[0] == 0 and result[1] == 1

def test_optimal_solutions_have_all_values():
    for solver in solvers:
        for problem in [toy_milp(), toy_lp(), binary_pick_one(), empty_problem()]:
            result = solve(problem, solver)
            assert result.status == "optimal"
            assert len(result) == problem.N
            assert len(result.values) == problem.N
            assert problem.is_feasible(result.result_vector)

def test_empty_problem():
    problem = empty_problem()
    for solver in solvers:
        result = solve(problem, solver)
        assert result.status == "optimal"
        assert result.value == 0
        assert problem.is_feasible(result.result_vector)

def test_infeasible():
    for solver in solvers:
        result = solve(infeasible_lp(), solver)
        assert result.status == "infeasible"
        assert result.result_vector is None and result.value is None
        assert not result.has_values
        assert len(result) == 0

def test_unbounded():
    result = solve(unbounded_lp(), "scipy")
    assert result.status == "unbounded"
    assert result.result_vector is None
    # CBC may not tell unbounded from infeasible problems apart
    result = solve(unbounded_lp(), "cbc")
    assert result.status in ["unbounded", "infeasible", "undefined"]
    assert not result.is_optimal

def test_options():
    for solver in solvers:
        result = solve(toy_milp(), solver, SolverOptions(time_limit=30, gap_rel=0))
        assert result.status == "optimal"
        result = solve(toy_milp(), solver, verbose=True, time_limit=30)
        assert result.status == "optimal"

def test_option_validation():
    with pytest.raises(ValidationError):
        SolverOptions(time_limit=-1)
    with pytest.raises(ValidationError):
        SolverOptions(time_limit="10")
    with pytest.raises(ValidationError):
        SolverOptions(verbose="yes")
    with pytest.raises(ValidationError):
        SolverOptions(gap_rel=1.5)
    with pytest.raises(ValidationError):
        SolverOptions.from_dict({ "verbose" : True, "timeout" : 3 })
    options = SolverOptions.from_dict({ "time_limit" : 2.5 })
    assert options.time_limit == 2.5 and not options.verbose
    assert options.to_dict()["extra"] == []
    with pytest.raises(ValidationError):
        solve(toy_milp(), "cbc", SolverOptions(), time_limit=0)

def test_unknown_backend():
    with pytest.raises(SolverUnavailableError):
        get_backend("simplex-by-hand")
    with pytest.raises(SolverUnavailableError):
        solve(toy_milp(), "simplex-by-hand")
    with pytest.raises(ValidationError):
        PulpBackend("scipy")

class UnavailableBackend(SolverBackend):
    name = "nowhere"

    def available(self):
        return False

    def solve(self, problem, options=None):
        raise AssertionError("must not be called")

def test_unavailable_backend(monkeypatch):
    monkeypatch.setitem(registry._BACKENDS, "nowhere", UnavailableBackend)
    assert available_backends()["nowhere"] is False
    with pytest.raises(SolverUnavailableError):
        solve(toy_milp(), "nowhere")

class FixedBackend(SolverBackend):
    name = "fixed"

    def available(self):
        return True

    def solve(self, problem, options=None):
        return Solution("optimal", np.zeros(problem.N), 0.0, backend=self.name)

def test_injected_backend(monkeypatch):
    monkeypatch.setattr(registry, "_BACKENDS", dict(registry._BACKENDS))
    register_backend("fixed", FixedBackend)
    result = solve(toy_milp(), "fixed")
    assert result.backend == "fixed"
    assert list(result.result_vector) == [0, 0]

def test_registered_backends():
    backends = available_backends()
    for solver in all_solvers:
        assert solver in backends
    assert backends["cbc"] and backends["scipy"]

def test_scipy_internal_error(monkeypatch):
    failure = SimpleNamespace(status=4, message="HiGHS went wrong", x=None)
    monkeypatch.setattr(scipybackend, "milp", lambda *args, **kwargs: failure)
    with pytest.raises(SolverError):
        solve(toy_milp(), "scipy")

def test_scipy_time_limit(monkeypatch):
    stopped = SimpleNamespace(status=1, message="time limit reached", x=np.array([1.0, 4.0]))
    monkeypatch.setattr(scipybackend, "milp", lambda *args, **kwargs: stopped)
    result = ScipyBackend().solve(toy_milp(), SolverOptions(time_limit=1))
    assert result.status == "timelimit"
    assert list(result.result_vector) == [1, 4]
    assert result.value == 5

def test_pulp_internal_error(monkeypatch):
    def fail(self, *args, **kwargs):
        raise pulp.PulpSolverError("cbc crashed")
    monkeypatch.setattr(pulp.LpProblem, "solve", fail)
    with pytest.raises(SolverError):
        PulpBackend("cbc").solve(toy_milp())

def test_pulp_status_mapping():
    backend = PulpBackend("cbc")
    no_limit, limit = SolverOptions(), SolverOptions(time_limit=1)
    def model(status, sol_status):
        return SimpleNamespace(status=status, sol_status=sol_status)
    assert backend._status(model(pulp.LpStatusOptimal, pulp.LpSolutionOptimal), limit) == "optimal"
    assert backend._status(model(pulp.LpStatusOptimal, pulp.LpSolutionIntegerFeasible), limit) == "timelimit"
    assert backend._status(model(pulp.LpStatusNotSolved, pulp.LpSolutionNoSolutionFound), limit) == "timelimit"
    assert backend._status(model(pulp.LpStatusNotSolved, pulp.LpSolutionNoSolutionFound), no_limit) == "notsolved"
    assert backend._status(model(pulp.LpStatusInfeasible, pulp.LpSolutionInfeasible), no_limit) == "infeasible"
    assert backend._status(model(pulp.LpStatusUnbounded, pulp.LpSolutionUnbounded), no_limit) == "unbounded"
    assert backend._status(model(pulp.LpStatusUndefined, pulp.LpSolutionNoSolutionFound), no_limit) == "undefined"

def test_pulp_translation():
    problem = Problem([1,0,2], [([(0,1.0),(2,1.0)], ">=", 1)],
                      domains=["binary","integer","real"], bounds={ 1 : (-1, 5) })
    pulpmodel, variables = PulpBackend("cbc").to_pulp(problem)
    assert len(variables) == 3
    # x1 occurs nowhere but is still part of the model
    assert set(var.name for var in pulpmodel.variables()) == { "x0", "x1", "x2" }
    assert variables[1].lowBound == -1 and variables[1].upBound == 5
    assert variables[0].cat == pulp.LpBinary or variables[0].cat == pulp.LpInteger

def test_solution_is_read_only():
    result = Solution("optimal", [1.0, 2.0], 3.0)
    with pytest.raises(ValueError):
        result.result_vector[0] = 5
    with pytest.raises(AttributeError):
        result.status = "infeasible"
    assert result.values == { 0 : 1.0, 1 : 2.0 }
    with pytest.raises(KeyError):
        Solution("infeasible", None, None)[0]

def test_registered_backend_is_removed_again(monkeypatch):
    monkeypatch.setitem(registry._BACKENDS, "fixed", FixedBackend)
    monkeypatch.undo()
    assert "fixed" not in available_backends()
    assert "nowhere" not in available_backends()

def test_unknown_status():
    with pytest.raises(ValidationError):
        Solution("bogus", None, None)
