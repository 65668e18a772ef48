# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

"""Conversions between representations and basis transformations of GenTensors."""

import logging
from typing import Sequence

from .backend import ArrayLike
from .tensortype import TensorType
from .fulltensor import FullTensor
from .lowranktensor import LowRankTensor
from .gentensor import GenTensor
from .errors import InvalidOperation
from .utils import check_pos

logger = logging.getLogger(__name__)

def to_full_rank[T: ArrayLike](arg: GenTensor[T]) -> None:
    """
    Convert the tensor in place to full rank. Low-rank tensors are reconstructed, tensors
    without data become empty full rank tensors. Slices taken before become stale.
    """
    if arg.tensor_type == TensorType.FULL:
        return
    if arg.has_data():
        logger.debug("converting %s of dims %s to full rank", arg.what_am_i(), arg.dims())
        arg._rebind(FullTensor(arg.reconstruct_tensor()))
    else:
        arg._rebind(FullTensor())

def to_low_rank[T: ArrayLike](arg: GenTensor[T], eps: float, tt: TensorType) -> None:
    """
    Convert the tensor in place to the low-rank representation tt with a Frobenius error
    of at most eps times its norm. Tensors already of type tt are left untouched.
    """
    if not tt.is_lowrank:
        raise InvalidOperation(f"{tt.name} is not a low-rank tensor type")
    check_pos("eps", eps)
    if arg.tensor_type == tt:
        return
    if arg.has_data():
        logger.debug("converting %s of dims %s to %s at eps=%g", arg.what_am_i(), arg.dims(), tt.name, eps)
        if arg.tensor_type == TensorType.FULL:
            data = arg.full_tensor()
        else:
            data = arg.reconstruct_tensor()
        arg._rebind(LowRankTensor.from_dense(data, eps, tt))
    else:
        arg._rebind(LowRankTensor(tt, eps))

def transform[T: ArrayLike](t: GenTensor[T], c: T) -> GenTensor[T]:
    """
    Transform all dimensions with the same matrix:
    :math:`r_{ij\\dots} = \\sum_{i'j'\\dots} t_{i'j'\\dots} c_{i'i} c_{j'j} \\dots`
    """
    return t.transform(c)

def general_transform[T: ArrayLike](t: GenTensor[T], cs: Sequence[T]) -> GenTensor[T]:
    """Transform dimension i with matrix cs[i]."""
    return t.general_transform(cs)

def transform_dir[T: ArrayLike](t: GenTensor[T], c: T, axis: int) -> GenTensor[T]:
    return t.transform_dir(c, axis)
