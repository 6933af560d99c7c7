import logging

from ..errors import SolverUnavailableError
from .backend import SolverOptions
from .pulpbackend import PulpBackend, PULP_SOLVERS
from .scipybackend import ScipyBackend

logger = logging.getLogger(__name__)

_BACKENDS = {}

def register_backend(name, factory):
    """Registers a backend under a name. `factory` is called without arguments and must return
    an instance of `solver.SolverBackend`. Registering an existing name replaces the old backend."""
    _BACKENDS[name] = factory

def available_backends():
    """Returns a dictionary that maps the names of all registered backends to whether 
    the corresponding solver can be located."""
    return { name : factory().available() for name, factory in sorted(_BACKENDS.items()) }

def get_backend(name):
    """Returns the backend that is registered under `name`.

    :raises SolverUnavailableError: if no backend is registered under that name or the solver cannot be located.
    :rtype: solver.SolverBackend
    """
    if name not in _BACKENDS:
        raise SolverUnavailableError("unknown backend %r, known backends are %s" % (name, sorted(_BACKENDS)))
    backend = _BACKENDS[name]()
    if not backend.available():
        raise SolverUnavailableError("backend %r is not available on this machine" % name)
    return backend

def solve(problem, backend="cbc", options=None, **kwargs):
    """Solves a problem with the backend registered under `backend`. Options are either given as 
    `SolverOptions` or as keyword arguments, e.g.

    .. code-block::

        result = solve(problem, "glpk", verbose=True, time_limit=10)

    :rtype: solver.Solution
    """
    if options is None:
        options = SolverOptions(**kwargs)
    elif kwargs:
        options = SolverOptions.from_dict({ **options.to_dict(), **kwargs })
    return get_backend(backend).solve(problem, options)

for _name in PULP_SOLVERS:
    register_backend(_name, lambda name=_name: PulpBackend(name))
register_backend("scipy", ScipyBackend)
