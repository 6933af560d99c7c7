"""milpkit formulates mixed integer linear programs (MILPs) from coefficient 
matrices or indexed variable families and hands them to external solvers 
(CBC, GLPK, CPLEX, Gurobi and HiGHS via PuLP, or HiGHS via scipy)."""
from .errors import MilpkitError, ValidationError, SolverUnavailableError, SolverError
from .problem import Problem, Constraint, ProblemBuilder, VariableFamily
from .solver import Solution, SolverOptions, SolverBackend, get_backend, solve
from .extraction import extract, active, as_dict
