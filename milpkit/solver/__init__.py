"""This module is a thin adapter to external solvers. Backends are selected by name and 
share a single interface, `SolverBackend.solve(problem, options) -> Solution`. The PuLP 
backends ("cbc", "glpk", "gurobi", "cplex", "highs") call the respective solvers through 
PuLP, the "scipy" backend uses `scipy.optimize.milp`."""
from .solution import Solution, STATUSES
from .backend import SolverBackend, SolverOptions
from .pulpbackend import PulpBackend
from .scipybackend import ScipyBackend
from .registry import register_backend, available_backends, get_backend, solve
