import argparse
import logging
import sys

from .errors import MilpkitError
from .solver import SolverOptions, available_backends
from .tutorials import knapsack, warehouse

def run_knapsack(args, options):
    instance = knapsack.random_instance(args.items, n_dims=args.dims, seed=args.seed)
    result = knapsack.solve_knapsack(instance, backend=args.solver, options=options)
    print(knapsack.format_result(instance, result))

def run_warehouse(args, options):
    instance = warehouse.random_instance(args.customers, args.warehouses, seed=args.seed,
                                         capacitated=args.capacitated)
    result = warehouse.solve_warehouse(instance, backend=args.solver, options=options)
    print(warehouse.format_result(instance, result))

def run_backends(args, options):
    for name, available in available_backends().items():
        print("%-8s %s" % (name, "available" if available else "not available"))

def make_parser():
    parser = argparse.ArgumentParser(prog="milpkit", description="Solves the milpkit tutorial problems.")
    sub = parser.add_subparsers(dest="command", required=True)

    def common(p):
        p.add_argument("--solver", default="cbc", help="backend name (default: cbc)")
        p.add_argument("--timeout", type=float, default=None, help="time limit in seconds")
        p.add_argument("--verbose", action="store_true", help="print the solver log")
        p.add_argument("--seed", type=int, default=0, help="seed of the instance generator")

    p = sub.add_parser("knapsack", help="solve a random knapsack instance")
    common(p)
    p.add_argument("--items", type=int, default=20)
    p.add_argument("--dims", type=int, default=1)
    p.set_defaults(func=run_knapsack)

    p = sub.add_parser("warehouse", help="solve a random warehouse location instance")
    common(p)
    p.add_argument("--customers", type=int, default=20)
    p.add_argument("--warehouses", type=int, default=5)
    p.add_argument("--capacitated", action="store_true")
    p.set_defaults(func=run_warehouse)

    p = sub.add_parser("backends", help="list backends and whether they are available")
    p.set_defaults(func=run_backends, verbose=False, timeout=None)
    return parser

def main(argv=None):
    args = make_parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")
    try:
        options = SolverOptions(verbose=args.verbose, time_limit=args.timeout)
        args.func(args, options)
    except MilpkitError as e:
        print("milpkit: %s" % e, file=sys.stderr)
        return 1
    return 0
