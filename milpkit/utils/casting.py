import numpy as np
from scipy.sparse import csr_matrix, issparse

def cast_csr_matrix(obj):
    """Casts a 1d or 2d-object as a `scipy.sparse.csr_matrix`. 
    If the input is 1d, it will create a (:math:`1 \\times N`) `csr_matrix`, i.e. a single row.
    
    :param obj: Input array/list/sparse matrix.
    :type obj: 1d or 2d-object type
    :return: Resulting csr_matrix.
    :rtype: scipy.sparse.csr_matrix
    """    
    if not issparse(obj):
        obj = np.array(obj, dtype=float)
        if obj.ndim == 1:
            obj = np.array([obj])
    return csr_matrix(obj, dtype=float)

def cast_vector(obj):
    """Casts a vector-like object (list, array, :math:`N \\times 1` or :math:`1 \\times N` matrix, 
    sparse or dense) as a flat float `numpy.ndarray`.

    :param obj: Input vector.
    :type obj: 1d-object type
    :return: Flat vector.
    :rtype: numpy.ndarray
    """
    if issparse(obj):
        obj = obj.toarray()
    return np.asarray(obj, dtype=float).ravel()
