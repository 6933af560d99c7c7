"""Tutorials: a knapsack problem built from coefficient matrices and a warehouse location
problem built with variable families. Instances are generated from seeded random sources."""
from . import knapsack, warehouse
