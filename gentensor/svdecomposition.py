# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from typing import Any, Optional
from dataclasses import dataclass
from .backend import ArrayLike, namespace_of_arrays, device
from .matrixdecomposition import MatrixDecompositionResult
from .utils import check_non_neg, check_pos

@dataclass(kw_only=True)
class SVDecompositionResult[T: ArrayLike](MatrixDecompositionResult[T]):
    #: Left matrix of the decomposition.
    left: T
    #: Right matrix of the decomposition.
    right: T
    #: Kept singular values.
    singular_values: T

@dataclass(kw_only=True)
class SVDecomposition[T: ArrayLike]:
    """
    Truncated singular value decomposition. Singular values not above cutoff are discarded
    and at most max_rank singular values are kept. A matrix without singular values above
    the cutoff decomposes into factors of rank zero.
    """

    cutoff: float = 0.0
    max_rank: Optional[int] = None

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "max_rank" and value is not None:
            check_pos(name, value)
        elif name == "cutoff":
            check_non_neg(name, value)
        super().__setattr__(name, value)

    def right(self, mat: T) -> SVDecompositionResult[T]:
        """Calculate :math:`U \\Sigma V^H` and return :math:`U \\Sigma` and :math:`V^H`."""
        xp = namespace_of_arrays(mat)
        u, s, vh = self._svd(mat)
        u = u * xp.astype(s, u.dtype)[xp.newaxis,:]
        return SVDecompositionResult(left=u, right=vh, singular_values=s)

    def left(self, mat: T) -> SVDecompositionResult[T]:
        """Calculate :math:`U \\Sigma V^H` and return :math:`U` and :math:`\\Sigma V^H`."""
        xp = namespace_of_arrays(mat)
        u, s, vh = self._svd(mat)
        vh = xp.astype(s, vh.dtype)[:,xp.newaxis] * vh
        return SVDecompositionResult(left=u, right=vh, singular_values=s)

    def _svd(self, mat: T) -> tuple[T, T, T]:
        xp = namespace_of_arrays(mat)
        if not hasattr(xp, "linalg"):
            raise NotImplementedError("Linalg extension missing on this backend, implement your own SVDecomposition!.")
        m, n = mat.shape
        if min(m, n) == 0: # type: ignore
            dev = device(mat)
            return (xp.zeros((m, 0), dtype=mat.dtype, device=dev),
                    xp.zeros((0,), dtype=xp.real(mat).dtype, device=dev),
                    xp.zeros((0, n), dtype=mat.dtype, device=dev))
        u, s, vh = xp.linalg.svd(mat, full_matrices=False)
        numel = int(xp.sum(xp.astype(s > self.cutoff, xp.int64)))
        if self.max_rank is not None:
            numel = min(numel, self.max_rank)
        return u[:,:numel], s[:numel], vh[:numel,:]

    def __repr__(self) -> str:
        return f"SVDecomposition(cutoff={self.cutoff}, max_rank={self.max_rank})"
