# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from typing import Sequence
from copy import deepcopy

from .backend  import ArrayLike, namespace_of_arrays, shape_size
from .matrixdecomposition import MatrixDecompositionResult, MatrixDecomposition

class TensorDecomposition[T: ArrayLike, ResType: MatrixDecompositionResult]:
    """
    Applies a matrix decomposition to a tensor by grouping its axes into rows and columns.
    The left factor keeps the row axes followed by the rank, the right factor starts with
    the rank followed by the column axes.
    """

    _mat_decomp: MatrixDecomposition[T, ResType]

    def __init__(self, decomposition: MatrixDecomposition[T, ResType]) -> None:
        self._mat_decomp = deepcopy(decomposition)

    def split(self, tn: T, nleft: int, /) -> ResType:
        """Rows are the first nleft axes, columns the remaining ones."""
        axes = list(range(len(tn.shape)))
        return self._decompose(tn, axes[:nleft], axes[nleft:])

    def mode(self, tn: T, axis: int, /) -> ResType:
        """Mode unfolding: rows are the given axis, columns all other axes in order."""
        axes = list(range(len(tn.shape)))
        return self._decompose(tn, [axis], axes[:axis] + axes[axis+1:])

    def _decompose(self, tn: T, left_axes: Sequence[int], right_axes: Sequence[int]) -> ResType:
        xp = namespace_of_arrays(tn)
        if sorted([*left_axes, *right_axes]) != list(range(len(tn.shape))):
            raise ValueError("Invalid input arguments")
        tn = xp.permute_dims(tn, (*left_axes, *right_axes))
        ldims = tn.shape[:len(left_axes)]
        rdims = tn.shape[len(left_axes):]
        mat = xp.reshape(tn, (shape_size(ldims), shape_size(rdims)))
        res = self._mat_decomp.left(mat)
        res.left = xp.reshape(res.left, (*ldims, res.left.shape[1]))
        res.right = xp.reshape(res.right, (res.right.shape[0], *rdims))
        return res
