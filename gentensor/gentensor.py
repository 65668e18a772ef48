# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from typing import Any, Optional, Sequence, Self, overload
from numbers import Integral, Real

from .backend import ArrayLike, ArrayNamespace, is_array
from .tensortype import TensorType, TensorArgs
from .sepreptensor import SepRepTensor
from .fulltensor import FullTensor
from .lowranktensor import LowRankTensor
from .slicegentensor import SliceGenTensor
from .errors import InvalidOperation, UninitializedOperand
from .utils import check_real_factor, check_scalar, full_slices, normalize_slices, Slices
from . import densekernels as dk

class GenTensor[T: ArrayLike]:
    """
    Tensor in either full rank or low-rank representation. The tensor owns one reference to
    its backing store: share() hands out another reference to the same store while copy()
    duplicates the data. Binary operations require both operands to be of the same
    tensor type.

    Slicing with integers reads a single element, which is only possible for full rank tensors.
    Slicing with slices returns a SliceGenTensor through which the slice can be updated in place::

        h[0:2, :, :] += g
        h[0:2, :, :] = 0
    """

    _ptr: Optional[SepRepTensor[T]]

    @overload
    def __init__(self) -> None: ...

    @overload
    def __init__(self, tt: TensorType, /) -> None: ...

    @overload
    def __init__(self, dims: Sequence[int], targs: TensorArgs | TensorType, /, *, xp: ArrayNamespace[T], dtype: Any = None) -> None: ...

    @overload
    def __init__(self, data: T, targs: TensorArgs, /) -> None: ...

    @overload
    def __init__(self, data: T, eps: float, tt: TensorType, /) -> None: ...

    @overload
    def __init__(self, data: SliceGenTensor[T], /) -> None: ...

    def __init__(self, arg: Any = None, targs: Any = None, tt: Any = None, /, *,
                 xp: Optional[ArrayNamespace[T]] = None, dtype: Any = None) -> None:
        self._ptr = None
        if arg is None:
            if targs is not None or tt is not None:
                raise InvalidOperation("Arguments given without data or dimensions")
        elif isinstance(arg, SliceGenTensor):
            src = arg.tensor
            self._ptr = src._backend().clone(arg.cuts)
        elif isinstance(arg, TensorType):
            if targs is not None or tt is not None:
                raise InvalidOperation("A tensor type alone creates an empty tensor")
            self._ptr = _empty_backend(arg)
        elif is_array(arg):
            args = _tensor_args(targs, tt)
            if args.tt == TensorType.FULL:
                self._ptr = FullTensor(dk.copy(arg))
            elif args.tt.is_lowrank:
                self._ptr = LowRankTensor.from_dense(arg, args.thresh, args.tt)
            else:
                raise InvalidOperation(f"Cannot store data as {args.tt.name}")
        elif isinstance(arg, Sequence):
            if tt is not None:
                raise InvalidOperation("Dimensions take either TensorArgs or a TensorType")
            if xp is None:
                raise InvalidOperation("An array namespace is required to create a tensor from dimensions")
            if isinstance(targs, TensorType):
                kind, thresh = targs, None
            elif isinstance(targs, TensorArgs):
                kind, thresh = targs.tt, targs.thresh
            else:
                raise InvalidOperation(f"Expected TensorArgs or TensorType, got {type(targs).__name__}")
            if kind == TensorType.FULL:
                self._ptr = FullTensor.zeros(arg, xp, dtype)
            elif kind.is_lowrank:
                self._ptr = LowRankTensor.zeros(kind, arg, xp, dtype, thresh)
            else:
                raise InvalidOperation(f"Cannot create a tensor of dimensions as {kind.name}")
        else:
            raise InvalidOperation(f"Cannot create a GenTensor from {type(arg).__name__}")

    @classmethod
    def _wrap(cls, ptr: Optional[SepRepTensor[T]]) -> Self:
        obj = cls.__new__(cls)
        obj._ptr = ptr
        return obj

    def _rebind(self, ptr: Optional[SepRepTensor[T]]) -> None:
        self._ptr = ptr

    def _backend(self) -> SepRepTensor[T]:
        if self._ptr is None:
            raise UninitializedOperand("GenTensor without representation")
        return self._ptr

    def _check_operand(self, other: "GenTensor[T]") -> tuple[SepRepTensor[T], SepRepTensor[T]]:
        if not isinstance(other, GenTensor):
            raise InvalidOperation(f"Expected a GenTensor, got {type(other).__name__}")
        lhs, rhs = self._backend(), other._backend()
        lhs.check_type(rhs)
        return lhs, rhs

    def _check_scalar(self, fac: Any) -> None:
        check_scalar(fac, self._ptr is not None and self._ptr.complex_data())

    # ------------------------------------------------------------------------
    # references and copies

    def share(self) -> Self:
        """New handle referring to the same data."""
        return type(self)._wrap(self._ptr)

    def copy(self) -> Self:
        """New handle with a deep copy of the data."""
        if self._ptr is None:
            return type(self)._wrap(None)
        return type(self)._wrap(self._ptr.deep_copy())

    def __copy__(self) -> Self:
        return self.share()

    def __deepcopy__(self, memo: dict) -> Self:
        return self.copy()

    # ------------------------------------------------------------------------
    # queries

    @property
    def tensor_type(self) -> TensorType:
        if self._ptr is None:
            return TensorType.NONE
        return self._ptr.tensor_type

    @property
    def dtype(self) -> Any:
        return self._backend().dtype

    def what_am_i(self) -> str:
        return self._backend().what_am_i()

    def has_data(self) -> bool:
        return self._ptr is not None and self._ptr.has_data()

    def size(self) -> int:
        if self._ptr is None:
            return 0
        return self._ptr.size()

    def ndim(self) -> int:
        if self._ptr is None:
            return -1
        return self._ptr.ndim()

    def dims(self) -> tuple[int, ...]:
        return self._backend().dims()

    def dim(self, i: int) -> int:
        return self._backend().dim(i)

    def rank(self) -> int:
        return self._backend().rank()

    def normf(self) -> float:
        return self._backend().normf()

    def trace_conj(self, other: "GenTensor[T]") -> Any:
        lhs, rhs = self._check_operand(other)
        return lhs.trace_conj(rhs)

    def full_tensor(self) -> T:
        """The dense array itself, only for full rank tensors."""
        return self._backend().full_tensor()

    def reconstruct_tensor(self) -> T:
        return self._backend().reconstruct_tensor()

    def full_tensor_copy(self) -> Optional[T]:
        """Dense copy of the content in any representation, None without data."""
        if self._ptr is None or not self._ptr.has_data():
            return None
        return self._ptr.reconstruct_tensor()

    # ------------------------------------------------------------------------
    # slicing

    def __getitem__(self, key: Any) -> Any:
        key = key if isinstance(key, tuple) else (key,)
        ptr = self._backend()
        ptr.check_data()
        if all(isinstance(k, Integral) and not isinstance(k, bool) for k in key):
            return ptr.element(*(int(k) for k in key))
        return SliceGenTensor(self, normalize_slices(key, ptr.dims()))

    def __setitem__(self, key: Any, value: Any) -> None:
        # h[s] += g already updated the data through the slice
        if (isinstance(value, SliceGenTensor) and value._updated and value._tensor() is self
                and value.cuts == normalize_slices(key if isinstance(key, tuple) else (key,), self.dims())):
            value._updated = False
            return
        sl = self[key]
        if not isinstance(sl, SliceGenTensor):
            raise InvalidOperation("Elements cannot be assigned, use slices and +=")
        sl.assign(value)

    def _inplace_add(self, rhs: "GenTensor[T]", lhs_cuts: Slices, rhs_cuts: Slices) -> None:
        lhs, other = self._check_operand(rhs)
        lhs.inplace_add(other, lhs_cuts, rhs_cuts)

    # ------------------------------------------------------------------------
    # arithmetic

    def __iadd__(self, rhs: "GenTensor[T] | SliceGenTensor[T]") -> Self:
        if isinstance(rhs, SliceGenTensor):
            self._inplace_add(rhs.tensor, full_slices(self.ndim()), rhs.cuts)
            return self
        lhs, other = self._check_operand(rhs)
        other.accumulate_into(lhs, 1.0)
        return self

    def __isub__(self, rhs: "GenTensor[T]") -> Self:
        lhs, other = self._check_operand(rhs)
        other.accumulate_into(lhs, -1.0)
        return self

    def __add__(self, rhs: "GenTensor[T]") -> Self:
        self._check_operand(rhs)
        res = self.copy()
        res += rhs
        return res

    def __sub__(self, rhs: "GenTensor[T]") -> Self:
        self._check_operand(rhs)
        res = self.copy()
        res -= rhs
        return res

    def __neg__(self) -> Self:
        res = self.copy()
        res._backend().scale(-1)
        return res

    def __mul__(self, fac: Any) -> Self:
        self._check_scalar(fac)
        res = self.copy()
        res._backend().scale(fac)
        return res

    def __rmul__(self, fac: Any) -> Self:
        return self.__mul__(fac)

    def __imul__(self, fac: Any) -> Self:
        return self.scale(fac)

    def scale(self, fac: Any) -> Self:
        """In place multiplication with a scalar of the element type."""
        self._check_scalar(fac)
        self._backend().scale(fac)
        return self

    def gaxpy(self, alpha: float, rhs: "GenTensor[T]", beta: float) -> Self:
        """In place :math:`this = \\alpha this + \\beta rhs` with real factors."""
        check_real_factor("alpha", alpha)
        check_real_factor("beta", beta)
        lhs, other = self._check_operand(rhs)
        lhs.gaxpy(float(alpha), other, float(beta))
        return self

    def accumulate_into(self, target: "T | GenTensor[T]", fac: float) -> None:
        """Add fac times this tensor to a dense array or to a tensor of the same type."""
        check_real_factor("fac", fac)
        if isinstance(target, GenTensor):
            tgt, src = target._check_operand(self)
            src.accumulate_into(tgt, float(fac))
        else:
            self._backend().accumulate_into(target, float(fac))

    def update_by(self, rhs: "GenTensor[T]") -> Self:
        """Add rhs; low-rank tensors postpone the recompression until finalize_accumulate."""
        lhs, other = self._check_operand(rhs)
        lhs.update_by(other)
        return self

    def finalize_accumulate(self) -> Self:
        self._backend().finalize_accumulate()
        return self

    def reduce_rank(self, eps: float) -> Self:
        self._backend().reduce_rank(eps)
        return self

    def fillrandom(self) -> Self:
        self._backend().fillrandom()
        return self

    # ------------------------------------------------------------------------
    # new tensors

    def swapdim(self, idim: int, jdim: int) -> Self:
        return type(self)._wrap(self._backend().swapdim(idim, jdim))

    def transform(self, c: T) -> Self:
        return type(self)._wrap(self._backend().transform(c))

    def general_transform(self, cs: Sequence[T]) -> Self:
        return type(self)._wrap(self._backend().general_transform(cs))

    def transform_dir(self, c: T, axis: int) -> Self:
        return type(self)._wrap(self._backend().transform_dir(c, axis))

    def __repr__(self) -> str:
        if self._ptr is None:
            return "GenTensor: empty"
        return f"GenTensor: {self._ptr!r}"


def copy[T: ArrayLike](arg: GenTensor[T] | SliceGenTensor[T]) -> GenTensor[T]:
    """Deep copy of a tensor or of a slice of a tensor."""
    if isinstance(arg, SliceGenTensor):
        return GenTensor(arg)
    return arg.copy()

def _empty_backend(tt: TensorType) -> Optional[SepRepTensor]:
    if tt == TensorType.FULL:
        return FullTensor()
    elif tt.is_lowrank:
        return LowRankTensor(tt)
    return None

def _tensor_args(targs: Any, tt: Any) -> TensorArgs:
    if isinstance(targs, TensorArgs) and tt is None:
        return targs
    if isinstance(targs, Real) and isinstance(tt, TensorType):
        return TensorArgs(float(targs), tt)
    raise InvalidOperation("Data takes either TensorArgs or an accuracy and a TensorType")
