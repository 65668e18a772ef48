# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence, Self

from .backend import ArrayLike, ArrayNamespace, is_complex
from .tensortype import TensorType
from .errors import TypeMismatch, InvalidOperation, UninitializedOperand
from .utils import Slices

class SepRepTensor[T: ArrayLike](ABC):
    """
    Backing store of a GenTensor. Subclasses implement one representation of the tensor
    content. Binary operations require the other operand to be of the same tensor type.
    """

    @property
    @abstractmethod
    def tensor_type(self) -> TensorType: ...

    @property
    @abstractmethod
    def dtype(self) -> Any: ...

    @abstractmethod
    def namespace(self) -> Optional[ArrayNamespace[T]]:
        """Array namespace of the stored data, None without data."""

    def complex_data(self) -> bool:
        xp = self.namespace()
        return xp is not None and is_complex(xp, self.dtype)

    @abstractmethod
    def what_am_i(self) -> str:
        """Human readable name of the representation."""

    # ------------------------------------------------------------------------
    # virtual constructors

    @abstractmethod
    def clone(self, cuts: Optional[Slices] = None) -> Self:
        """Copy of this representation, or a deep copy of the slice addressed by cuts."""

    @abstractmethod
    def deep_copy(self) -> Self: ...

    # ------------------------------------------------------------------------
    # queries

    @abstractmethod
    def has_data(self) -> bool: ...

    @abstractmethod
    def size(self) -> int:
        """Number of stored coefficients."""

    @abstractmethod
    def dims(self) -> tuple[int, ...]: ...

    def dim(self, i: int) -> int:
        return self.dims()[i]

    def ndim(self) -> int:
        if not self.has_data():
            return -1
        return len(self.dims())

    @abstractmethod
    def rank(self) -> int: ...

    @abstractmethod
    def normf(self) -> float: ...

    @abstractmethod
    def trace_conj(self, other: "SepRepTensor[T]") -> Any:
        """Conjugate inner product with a representation of the same type."""

    @abstractmethod
    def element(self, *idx: int) -> Any: ...

    @abstractmethod
    def full_tensor(self) -> T:
        """The dense payload itself, without copying."""

    @abstractmethod
    def reconstruct_tensor(self) -> T:
        """Dense copy of the content."""

    # ------------------------------------------------------------------------
    # in place modifications

    @abstractmethod
    def reduce_rank(self, eps: float) -> None: ...

    @abstractmethod
    def scale(self, fac: Any) -> None: ...

    @abstractmethod
    def gaxpy(self, alpha: float, other: "SepRepTensor[T]", beta: float) -> None:
        """In place :math:`this = \\alpha this + \\beta other`."""

    @abstractmethod
    def inplace_add(self, other: "SepRepTensor[T]", lhs_cuts: Slices, rhs_cuts: Slices) -> None:
        """In place :math:`this[lhs] \\mathrel{+}= other[rhs]`."""

    @abstractmethod
    def accumulate_into(self, target: "T | SepRepTensor[T]", fac: float) -> None:
        """Add fac times this to a dense array or to a representation of the same type."""

    @abstractmethod
    def update_by(self, other: "SepRepTensor[T]") -> None:
        """Add other, deferring representation specific work to finalize_accumulate."""

    @abstractmethod
    def finalize_accumulate(self) -> None: ...

    @abstractmethod
    def fillrandom(self) -> None: ...

    # ------------------------------------------------------------------------
    # basis transformations

    @abstractmethod
    def swapdim(self, idim: int, jdim: int) -> Self: ...

    @abstractmethod
    def transform(self, c: T) -> Self: ...

    @abstractmethod
    def general_transform(self, cs: Sequence[T]) -> Self: ...

    @abstractmethod
    def transform_dir(self, c: T, axis: int) -> Self: ...

    # ------------------------------------------------------------------------
    # checks

    def check_type(self, other: "SepRepTensor") -> None:
        if other.tensor_type != self.tensor_type:
            raise TypeMismatch(f"{self.what_am_i()} and {other.what_am_i()} differ in tensor type")

    def check_data(self) -> None:
        if not self.has_data():
            raise UninitializedOperand(f"{self.what_am_i()} holds no data")

    def check_dims(self, other: "SepRepTensor") -> None:
        if self.dims() != other.dims():
            raise InvalidOperation(f"Dimensions {self.dims()} and {other.dims()} do not match")

    def __repr__(self) -> str:
        if not self.has_data():
            return f"{self.what_am_i()}: empty"
        return f"{self.what_am_i()}: dims={self.dims()}, rank={self.rank()}"
