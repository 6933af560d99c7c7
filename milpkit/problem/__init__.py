"""This module contains the description of optimization problems. A `Problem` is either 
assembled from coefficient matrices and -vectors (`Problem.from_coefficients`) or by hand 
through a `ProblemBuilder`, which also supports indexed variable families."""
from .problem import Problem, Constraint, DOMAINS, SENSES, OBJECTIVES
from .family import VariableFamily
from .builder import ProblemBuilder
