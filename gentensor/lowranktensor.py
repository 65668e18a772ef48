# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from typing import Any, Optional, Sequence, Self

from .backend import ArrayLike, ArrayNamespace, is_array, shape
from .tensortype import TensorType
from .sepreptensor import SepRepTensor
from .seprep import SepRep, overlap
from .options import get_options, OptionType
from .errors import InvalidOperation, UnsupportedForRepresentation
from .utils import Slices

class LowRankTensor[T: ArrayLike](SepRepTensor[T]):
    """
    Low rank representation wrapping a separated representation. Individual elements cannot
    be addressed; inner products and accumulations work on the terms directly and a dense
    tensor is only produced by reconstruct_tensor. A tensor of rank zero is a valid zero tensor.
    """

    _data: SepRep[T]
    #: Accuracy used when finalizing accumulations.
    _thresh: float
    _pending: bool

    @property
    def tensor_type(self) -> TensorType:
        return self._data.tensor_type

    @property
    def dtype(self) -> Any:
        return self._data.dtype

    def namespace(self) -> Optional[ArrayNamespace[T]]:
        if not self._data.is_valid:
            return None
        return self._data.namespace

    @property
    def thresh(self) -> float:
        return self._thresh

    @property
    def data(self) -> SepRep[T]:
        return self._data

    def __init__(self, data: SepRep[T] | TensorType, thresh: Optional[float] = None) -> None:
        if isinstance(data, TensorType):
            data = SepRep(data)
        if thresh is None:
            thresh = get_options(OptionType.ACCURACY).thresh
        self._data = data
        self._thresh = thresh
        self._pending = False

    @classmethod
    def zeros(cls, tt: TensorType, dims: Sequence[int], xp: ArrayNamespace[T],
              dtype: Any = None, thresh: Optional[float] = None) -> Self:
        return cls(SepRep.zeros(tt, dims, xp, dtype), thresh)

    @classmethod
    def from_dense(cls, tn: T, eps: float, tt: TensorType) -> Self:
        return cls(SepRep.from_dense(tn, eps, tt), eps)

    def what_am_i(self) -> str:
        if self.tensor_type == TensorType.LOWRANK_2D:
            return "LowRank-2D"
        return "LowRank-3D"

    def clone(self, cuts: Optional[Slices] = None) -> Self:
        """Shallow copy sharing the terms, or a deep copy of the slice addressed by cuts."""
        if cuts is None:
            return type(self)(self._data, self._thresh)
        self.check_data()
        return type(self)(self._data[cuts], self._thresh)

    def deep_copy(self) -> Self:
        return type(self)(self._data.copy(), self._thresh)

    def has_data(self) -> bool:
        return self._data.is_valid

    def size(self) -> int:
        return self._data.n_coeff()

    def dims(self) -> tuple[int, ...]:
        self.check_data()
        return self._data.dims

    def rank(self) -> int:
        return self._data.rank

    def normf(self) -> float:
        self.check_data()
        return self._data.normf()

    def trace_conj(self, other: SepRepTensor[T]) -> Any:
        self.check_type(other)
        self.check_data()
        other.check_data()
        assert isinstance(other, LowRankTensor)
        return overlap(self._data, other._data)

    def element(self, *idx: int) -> Any:
        raise UnsupportedForRepresentation(f"No element access in {self.what_am_i()}; reconstruct first")

    def full_tensor(self) -> T:
        raise UnsupportedForRepresentation(f"No full tensor in {self.what_am_i()}; reconstruct first")

    def reconstruct_tensor(self) -> T:
        self.check_data()
        return self._data.reconstruct()

    def reduce_rank(self, eps: float) -> None:
        self.check_data()
        self._data.reduce_rank(eps)

    def scale(self, fac: Any) -> None:
        if self.has_data():
            self._data.scale(fac)

    def gaxpy(self, alpha: float, other: SepRepTensor[T], beta: float) -> None:
        self.check_type(other)
        self.check_data()
        other.check_data()
        self.check_dims(other)
        assert isinstance(other, LowRankTensor)
        rhs = other._data.copy() if other._data is self._data else other._data
        self._data.scale(alpha)
        self._data.append(rhs, beta)

    def inplace_add(self, other: SepRepTensor[T], lhs_cuts: Slices, rhs_cuts: Slices) -> None:
        self.check_type(other)
        self.check_data()
        other.check_data()
        assert isinstance(other, LowRankTensor)
        self._data.embed(other._data[rhs_cuts], lhs_cuts)

    def accumulate_into(self, target: T | SepRepTensor[T], fac: float) -> None:
        self.check_data()
        if is_array(target):
            if shape(target) != self.dims(): # type: ignore
                raise InvalidOperation(f"Target of shape {shape(target)} does not match {self.dims()}") # type: ignore
            target += fac * self._data.reconstruct() # type: ignore
            return
        self.check_type(target) # type: ignore
        assert isinstance(target, LowRankTensor)
        target._data.append(self._data, fac)

    def update_by(self, other: SepRepTensor[T]) -> None:
        other.accumulate_into(self, 1.0)
        self._pending = True

    def finalize_accumulate(self) -> None:
        """Recompress the terms gathered by update_by at the accuracy of this tensor."""
        if self._pending and self.has_data():
            self._data.reduce_rank(self._thresh)
        self._pending = False

    def fillrandom(self) -> None:
        self.check_data()
        self._data.fillrandom()

    def swapdim(self, idim: int, jdim: int) -> Self:
        raise UnsupportedForRepresentation(f"No swapdim for {self.what_am_i()}")

    def transform(self, c: T) -> Self:
        self.check_data()
        return type(self)(self._data.transform(c), self._thresh)

    def general_transform(self, cs: Sequence[T]) -> Self:
        self.check_data()
        return type(self)(self._data.general_transform(cs), self._thresh)

    def transform_dir(self, c: T, axis: int) -> Self:
        self.check_data()
        return type(self)(self._data.transform_dir(c, axis), self._thresh)
