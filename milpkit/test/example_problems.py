from milpkit.problem import Problem, ProblemBuilder
from milpkit.tutorials import warehouse
import numpy as np

def toy_milp():
    # optimal result is x_opt=[2,6] with value 8
    A = [[2,1],[4,-1],[-8,2],[-1,0],[0,-1]]
    b = [10,8,2,0,0]
    opt = [1,1]
    return Problem.from_coefficients(A, b, opt, domains=["integer","real"], objective="max")

def toy_lp():
    # optimal result is x_opt=[1.5,7.0] with value 8.5
    return toy_milp().relaxation()

def toy_milp_by_hand():
    builder = ProblemBuilder(objective="max")
    var1, var2 = builder.add_variables(["integer", "real"])
    builder.add_constraint([(var1, 2), (var2, 1)], "<=", 10)
    builder.add_constraint([(var1, 4), (var2, -1)], "<=", 8)
    builder.add_constraint([(var1, -8), (var2, 2)], "<=", 2)
    builder.add_constraint([(var1, 1)], ">=", 0)
    builder.add_constraint([(var2, 1)], ">=", 0)
    builder.set_objective_function([(var1, 1), (var2, 1)])
    return builder.build()

def binary_pick_one():
    # objective=[3,4], x1+x2<=1, both binary, maximize: optimal is x=[0,1] with value 4
    return Problem.from_coefficients([[1,1]], [1], [3,4], domains=["binary","binary"], objective="max")

def infeasible_lp():
    return Problem.from_coefficients([[1],[1]], [2,1], [1], sense=[">=","<="])

def unbounded_lp():
    return Problem.from_coefficients([[1,-1]], [1], [1,0], objective="max")

def empty_problem():
    return Problem([0,0,0],
                   domains=["real","integer","binary"],
                   bounds={ 0 : (-2.5, 4), 1 : (1, None) })

def small_warehouse_instance():
    # 3 customers, 2 warehouses. Warehouse 1 is expensive to open, hence everybody is served from 0
    customers = np.array([[0.0,0.0],[0.2,0.0],[1.0,1.0]])
    warehouses = np.array([[0.1,0.0],[1.0,1.0]])
    return warehouse.WarehouseInstance(customers, warehouses, np.array([1.0, 100.0]), np.ones(3))

def split_warehouse_instance():
    # both warehouses are cheap, customers are served from the nearest one
    customers = np.array([[0.0,0.0],[0.2,0.0],[1.0,1.0]])
    warehouses = np.array([[0.1,0.0],[1.0,0.9]])
    return warehouse.WarehouseInstance(customers, warehouses, np.array([0.01, 0.01]), np.ones(3))
