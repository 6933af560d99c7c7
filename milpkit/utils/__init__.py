from .casting import cast_csr_matrix, cast_vector
