# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

"""Kernels on dense arrays that the array API standard does not provide."""

from typing import Sequence, Any
import numpy as np

from .backend import ArrayLike, ArrayNamespace, namespace_of_arrays, is_complex, shape
from .errors import InvalidOperation

def copy[T: ArrayLike](tn: T) -> T:
    xp = namespace_of_arrays(tn)
    return xp.asarray(tn, copy=True)

def conj[T: ArrayLike](tn: T) -> T:
    xp = namespace_of_arrays(tn)
    if is_complex(xp, tn.dtype):
        return xp.conj(tn)
    return tn

def scalar(value: Any) -> Any:
    xp = namespace_of_arrays(value)
    if is_complex(xp, value.dtype):
        return complex(value)
    return float(value)

def transform[T: ArrayLike](tn: T, c: T) -> T:
    """
    Transform all dimensions with the same matrix:
    :math:`r_{ij\\dots} = \\sum_{i'j'\\dots} t_{i'j'\\dots} c_{i'i} c_{j'j} \\dots`
    """
    return general_transform(tn, [c] * len(tn.shape))

def general_transform[T: ArrayLike](tn: T, cs: Sequence[T]) -> T:
    """Transform every dimension with its own matrix, cs[i] acting on dimension i."""
    xp = namespace_of_arrays(tn, *cs)
    if len(cs) != len(tn.shape):
        raise InvalidOperation(f"Expected {len(tn.shape)} matrices, got {len(cs)}")
    # contracting the leading axis cycles the new axis to the end
    for i, c in enumerate(cs):
        check_matrix(c, tn.shape[0], i)
        tn = xp.tensordot(tn, c, axes=([0], [0]))
    return tn

def transform_dir[T: ArrayLike](tn: T, c: T, axis: int) -> T:
    """Transform a single dimension: :math:`r_{i\\dots j\\dots} = \\sum_{j'} t_{i\\dots j'\\dots} c_{j'j}`"""
    xp = namespace_of_arrays(tn, c)
    ndim = len(tn.shape)
    if axis < 0 or axis >= ndim:
        raise InvalidOperation(f"Axis {axis} out of range for {ndim} dimensions")
    check_matrix(c, tn.shape[axis], axis)
    res = xp.tensordot(tn, c, axes=([axis], [0]))
    perm = [*range(axis), ndim-1, *range(axis, ndim-1)]
    return xp.permute_dims(res, perm)

def swapdim[T: ArrayLike](tn: T, idim: int, jdim: int) -> T:
    xp = namespace_of_arrays(tn)
    ndim = len(tn.shape)
    if not (0 <= idim < ndim and 0 <= jdim < ndim):
        raise InvalidOperation(f"Cannot swap dimensions {idim} and {jdim} of a {ndim}-dimensional tensor")
    perm = list(range(ndim))
    perm[idim], perm[jdim] = perm[jdim], perm[idim]
    return xp.permute_dims(tn, perm)

def trace_conj[T: ArrayLike](tn1: T, tn2: T) -> Any:
    """Return :math:`\\sum_i \\overline{t_1[i]} t_2[i]`."""
    xp = namespace_of_arrays(tn1, tn2)
    if shape(tn1) != shape(tn2):
        raise InvalidOperation(f"Shapes {shape(tn1)} and {shape(tn2)} do not match")
    return scalar(xp.sum(conj(tn1) * tn2))

def normf[T: ArrayLike](tn: T) -> float:
    xp = namespace_of_arrays(tn)
    return float(xp.sqrt(xp.sum(xp.abs(tn)**2)))

def gaxpy[T: ArrayLike](tn: T, alpha: float, other: T, beta: float) -> None:
    """In place :math:`t = \\alpha t + \\beta o`."""
    if shape(tn) != shape(other):
        raise InvalidOperation(f"Shapes {shape(tn)} and {shape(other)} do not match")
    upd = beta * other
    tn *= alpha
    tn += upd

def random[T: ArrayLike](xp: ArrayNamespace[T], shape: Sequence[int], dtype: Any, dev: Any = None) -> T:
    rng = np.random.default_rng()
    data = rng.random(tuple(shape))
    if is_complex(xp, dtype):
        data = data + 1j * rng.random(tuple(shape))
    return xp.asarray(data, dtype=dtype, device=dev)

def check_matrix(c: ArrayLike, size: int, axis: int) -> None:
    if len(c.shape) != 2 or c.shape[0] != size:
        raise InvalidOperation(f"Transformation matrix of shape {c.shape} does not fit dimension {axis} of size {size}")
