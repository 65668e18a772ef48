# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from typing import Any, Optional, Sequence, Self

from .backend import ArrayLike, ArrayNamespace, namespace_of_arrays, default_dtype, is_array, shape, size
from .tensortype import TensorType, FULL_RANK
from .sepreptensor import SepRepTensor
from .errors import InvalidOperation
from .utils import Slices, sliced_dims, check_non_neg
from . import densekernels as dk

class FullTensor[T: ArrayLike](SepRepTensor[T]):
    """
    Full rank representation wrapping a dense array. All operations are exact.
    The wrapped array is not copied, callers hand over ownership.
    """

    _data: Optional[T]

    @property
    def tensor_type(self) -> TensorType:
        return TensorType.FULL

    @property
    def dtype(self) -> Any:
        return None if self._data is None else self._data.dtype

    def namespace(self) -> Optional[ArrayNamespace[T]]:
        if self._data is None:
            return None
        return namespace_of_arrays(self._data)

    def __init__(self, data: Optional[T] = None) -> None:
        self._data = data

    @classmethod
    def zeros(cls, dims: Sequence[int], xp: ArrayNamespace[T], dtype: Any = None) -> Self:
        if dtype is None:
            dtype = default_dtype(xp)
        return cls(xp.zeros(tuple(dims), dtype=dtype))

    def what_am_i(self) -> str:
        return "FullRank"

    def clone(self, cuts: Optional[Slices] = None) -> Self:
        if self._data is None:
            return type(self)()
        if cuts is None:
            return type(self)(dk.copy(self._data))
        self._check_cuts(cuts)
        return type(self)(dk.copy(self._data[cuts]))

    def deep_copy(self) -> Self:
        return self.clone()

    def has_data(self) -> bool:
        return self._data is not None

    def size(self) -> int:
        return 0 if self._data is None else size(self._data)

    def dims(self) -> tuple[int, ...]:
        self.check_data()
        return shape(self._data) # type: ignore

    def rank(self) -> int:
        return FULL_RANK

    def normf(self) -> float:
        self.check_data()
        return dk.normf(self._data)

    def trace_conj(self, other: SepRepTensor[T]) -> Any:
        self.check_type(other)
        self.check_data()
        other.check_data()
        return dk.trace_conj(self._data, other.full_tensor())

    def element(self, *idx: int) -> Any:
        self.check_data()
        if len(idx) != len(self.dims()):
            raise InvalidOperation(f"Expected {len(self.dims())} indices, got {len(idx)}")
        return dk.scalar(self._data[idx]) # type: ignore

    def full_tensor(self) -> T:
        self.check_data()
        return self._data # type: ignore

    def reconstruct_tensor(self) -> T:
        self.check_data()
        return dk.copy(self._data) # type: ignore

    def reduce_rank(self, eps: float) -> None:
        check_non_neg("eps", eps)

    def scale(self, fac: Any) -> None:
        if self._data is not None:
            self._data *= fac

    def gaxpy(self, alpha: float, other: SepRepTensor[T], beta: float) -> None:
        self.check_type(other)
        self.check_data()
        other.check_data()
        self.check_dims(other)
        dk.gaxpy(self._data, alpha, other.full_tensor(), beta)

    def inplace_add(self, other: SepRepTensor[T], lhs_cuts: Slices, rhs_cuts: Slices) -> None:
        self.check_type(other)
        self.check_data()
        other.check_data()
        self._check_cuts(lhs_cuts)
        if len(rhs_cuts) != len(other.dims()):
            raise InvalidOperation(f"Expected {len(other.dims())} slices, got {len(rhs_cuts)}")
        lhs_dims = sliced_dims(lhs_cuts, self.dims())
        rhs_dims = sliced_dims(rhs_cuts, other.dims())
        if lhs_dims != rhs_dims:
            raise InvalidOperation(f"Slices of shape {lhs_dims} and {rhs_dims} do not match")
        self._data[lhs_cuts] += other.full_tensor()[rhs_cuts] # type: ignore

    def accumulate_into(self, target: T | SepRepTensor[T], fac: float) -> None:
        self.check_data()
        if is_array(target):
            if shape(target) != self.dims(): # type: ignore
                raise InvalidOperation(f"Target of shape {shape(target)} does not match {self.dims()}") # type: ignore
            target += fac * self._data # type: ignore
            return
        self.check_type(target) # type: ignore
        assert isinstance(target, FullTensor)
        if not target.has_data():
            target._data = fac * self._data # type: ignore
            return
        self.check_dims(target)
        target._data += fac * self._data # type: ignore

    def update_by(self, other: SepRepTensor[T]) -> None:
        other.accumulate_into(self, 1.0)

    def finalize_accumulate(self) -> None:
        return

    def fillrandom(self) -> None:
        self.check_data()
        xp = namespace_of_arrays(self._data)
        self._data[...] = dk.random(xp, self.dims(), self.dtype) # type: ignore

    def swapdim(self, idim: int, jdim: int) -> Self:
        """New representation viewing the same data with two dimensions exchanged."""
        self.check_data()
        return type(self)(dk.swapdim(self._data, idim, jdim))

    def transform(self, c: T) -> Self:
        self.check_data()
        return type(self)(dk.transform(self._data, c))

    def general_transform(self, cs: Sequence[T]) -> Self:
        self.check_data()
        return type(self)(dk.general_transform(self._data, cs))

    def transform_dir(self, c: T, axis: int) -> Self:
        self.check_data()
        return type(self)(dk.transform_dir(self._data, c, axis))

    def _check_cuts(self, cuts: Slices) -> None:
        if len(cuts) != len(self.dims()):
            raise InvalidOperation(f"Expected {len(self.dims())} slices, got {len(cuts)}")
