# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from typing import TYPE_CHECKING, Any, Self
from numbers import Number
import weakref

from .backend import ArrayLike
from .tensortype import TensorType
from .errors import InvalidOperation, InvalidSliceAssignment, StaleSlice
from .utils import Slices, full_slices, sliced_dims

if TYPE_CHECKING:
    from .gentensor import GenTensor

class SliceGenTensor[T: ArrayLike]:
    """
    Slice of a GenTensor for temporary use, created by slicing a tensor. The content of a
    slice can only be changed by in place addition or by assigning zero, which subtracts
    the current content. Assigning tensors to a slice is refused: use += instead.
    The slice refers to its tensor weakly and becomes stale when the tensor is collected
    or changes its representation.
    """

    _tensor: "weakref.ref[GenTensor[T]]"
    _backend: weakref.ref
    _cuts: Slices
    #: Set after an in place addition, tells the tensor that h[s] += x is complete.
    _updated: bool

    def __init__(self, tensor: "GenTensor[T]", cuts: Slices) -> None:
        self._tensor = weakref.ref(tensor)
        self._backend = weakref.ref(tensor._backend())
        self._cuts = tuple(cuts)
        self._updated = False

    @property
    def cuts(self) -> Slices:
        """One slice with explicit start, stop and step per dimension."""
        return self._cuts

    @property
    def tensor(self) -> "GenTensor[T]":
        """The sliced tensor."""
        tensor = self._tensor()
        if tensor is None:
            raise StaleSlice("The sliced tensor does not exist anymore")
        if tensor._ptr is None or tensor._ptr is not self._backend():
            raise StaleSlice("The sliced tensor changed its representation")
        return tensor

    @property
    def tensor_type(self) -> TensorType:
        return self.tensor.tensor_type

    def dims(self) -> tuple[int, ...]:
        return sliced_dims(self._cuts, self.tensor.dims())

    def __iadd__(self, rhs: "GenTensor[T] | SliceGenTensor[T]", /) -> Self:
        from .gentensor import GenTensor
        tensor = self.tensor
        if isinstance(rhs, SliceGenTensor):
            tensor._inplace_add(rhs.tensor, self._cuts, rhs.cuts)
        elif isinstance(rhs, GenTensor):
            tensor._inplace_add(rhs, self._cuts, full_slices(rhs.ndim()))
        else:
            raise InvalidOperation(f"Cannot add {type(rhs).__name__} to a slice of a GenTensor")
        self._updated = True
        return self

    def assign(self, value: Any, /) -> None:
        """Assignment through a slice; only zero is accepted."""
        if isinstance(value, Number) and not isinstance(value, bool) and value == 0:
            self._zero()
            return
        raise InvalidSliceAssignment("You don't want to assign to a slice of a GenTensor; use += instead")

    def _zero(self) -> None:
        tensor = self.tensor
        tmp = self.copy()
        tmp._backend().scale(-1)
        tensor._inplace_add(tmp, self._cuts, full_slices(len(self._cuts)))

    def copy(self) -> "GenTensor[T]":
        """Deep copy of the slice."""
        from .gentensor import GenTensor
        return GenTensor(self)

    def __repr__(self) -> str:
        tensor = self._tensor()
        name = "stale" if tensor is None else tensor.what_am_i()
        return f"SliceGenTensor: {name} {self._cuts}"
