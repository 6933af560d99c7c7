import itertools
import numpy as np
from bidict import bidict, DuplicationError

from ..errors import ValidationError

class VariableFamily:
    """A VariableFamily describes a set of variables that are indexed by the cartesian product of
    a number of index sets, e.g. "all (i,j) pairs for i in 1..n, j in 1..m". It implements the mapping

    .. math::

        \\text{col}: I_1 \\times \\dots \\times I_k \\mapsto \\{0,\\dots,N-1\\}

    from index tuples to problem columns, together with its inverse. Iteration is row-major
    with respect to the declared order of the index sets.

    .. code-block::

        builder = ProblemBuilder()
        assign = builder.add_variable_family("assign", range(3), ["a","b"], domain="binary")
        assign[2,"b"]           # column of variable assign[2,b]
        assign.index_of(0)      # (0, "a")
    """
    def __init__(self, name, index_sets, columns):
        """
        :param name: Name of the family, used as prefix for variable names.
        :type name: str
        :param index_sets: The index sets, in the order they should be iterated.
        :type index_sets: List[Iterable]
        :param columns: Problem columns, one for each element of the cartesian product (in row-major order).
        :type columns: Iterable[int]
        """
        self.__name = name
        self.__index_sets = tuple(tuple(s) for s in index_sets)
        if len(self.__index_sets) == 0:
            raise ValidationError("variable family %s needs at least one index set." % name)
        for idx, s in enumerate(self.__index_sets):
            if len(set(s)) != len(s):
                raise ValidationError("index set %d of family %s contains duplicates." % (idx, name))

        indices = list(itertools.product(*self.__index_sets))
        columns = list(columns)
        for col in columns:
            if isinstance(col, (bool, np.bool_)) or not isinstance(col, (int, np.integer)) or col < 0:
                raise ValidationError("column %r of family %s is not a non-negative index." % (col, name))
        columns = [int(col) for col in columns]
        if len(columns) != len(indices):
            raise ValidationError("family %s has %d indices but %d columns." % (name, len(indices), len(columns)))
        try:
            self.__columns = bidict(zip(indices, columns))
        except DuplicationError as e:
            raise ValidationError("columns of family %s are not unique." % name) from e
        self.__order = indices

    @classmethod
    def contiguous(cls, name, offset, *index_sets):
        """Returns a family whose variables occupy the columns `offset, offset+1, ...` in row-major order.
        This is the layout `ProblemBuilder.add_variable_family` produces, and it can be used to describe
        blocks of columns of problems that were built with `Problem.from_coefficients`.

        :param name: Name of the family.
        :type name: str
        :param offset: First column.
        :type offset: int
        :rtype: problem.VariableFamily
        """
        size = 1
        for s in index_sets:
            size *= len(tuple(s))
        return cls(name, index_sets, range(offset, offset + size))

    @property
    def name(self):
        return self.__name

    @property
    def index_sets(self):
        return self.__index_sets

    @property
    def dimension(self):
        return len(self.__index_sets)

    def _key(self, idx):
        if not isinstance(idx, tuple) or (self.dimension == 1 and idx not in self.__columns):
            idx = (idx,)
        return idx

    def column(self, idx):
        """Returns the problem column of the variable at index `idx`. One-dimensional families
        also accept the bare index instead of a 1-tuple."""
        key = self._key(idx)
        if key not in self.__columns:
            raise KeyError("%r is not an index of family %s" % (idx, self.__name))
        return self.__columns[key]

    def __getitem__(self, idx):
        return self.column(idx)

    def index_of(self, column):
        """Returns the index tuple of a problem column."""
        return self.__columns.inverse[column]

    def columns(self):
        """Columns in iteration order."""
        return [self.__columns[idx] for idx in self.__order]

    def variable_name(self, idx):
        return "%s[%s]" % (self.__name, ",".join(str(i) for i in self._key(idx)))

    def __contains__(self, idx):
        return self._key(idx) in self.__columns

    def __iter__(self):
        return iter(self.__order)

    def __len__(self):
        return len(self.__order)

    def __repr__(self):
        return "VariableFamily(name=%s, shape=%s)" % (self.__name, tuple(len(s) for s in self.__index_sets))
