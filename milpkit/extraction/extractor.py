def extract(solution, family):
    """Lazily yields `(index, value)` pairs for all variables of a family, in the
    family's row-major order. Yields nothing if the solution carries no assignment;
    indices whose column lies beyond the solution are skipped.

    :param solution: The solution.
    :type solution: solver.Solution
    :param family: The variable family.
    :type family: problem.VariableFamily
    :rtype: Iterator[Tuple[tuple,float]]
    """
    if not solution.has_values:
        return
    N = len(solution)
    for idx in family:
        column = family[idx]
        if column < N:
            yield idx, solution[column]

def active(solution, family, threshold=0.99):
    """Like `extract`, but only yields variables whose value exceeds `threshold`. With the
    default threshold this selects the binary decisions that are switched on."""
    return ((idx, value) for idx, value in extract(solution, family) if value > threshold)

def as_dict(solution, family):
    """Returns a dictionary from indices of `family` to values."""
    return dict(extract(solution, family))
