# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from typing import Sequence, overload, Any, Type, Optional
from dataclasses import dataclass
import h5py

from .backend import ArrayNamespace, get_namespace
from .tensortype import TensorType, TensorArgs
from .gentensor import GenTensor, copy as _copy
from .slicegentensor import SliceGenTensor
from .conversion import (
    to_full_rank as _to_full_rank,
    to_low_rank as _to_low_rank,
    transform as _transform,
    general_transform as _general_transform,
    transform_dir as _transform_dir
)
from .io import write as _write
from .io import read as _read
from .options import AccuracyOptions, OptionType, set_options, get_options

@dataclass(frozen=True)
class GenTensors[NDArray: Any]:

    #: Array namespace for the underlying array library.
    namespace: ArrayNamespace[NDArray]

    def __init__(self, namespace: Any) -> None:
        object.__setattr__(self, "namespace", get_namespace(namespace))

        set_options(self.accuracy(thresh=1e-10))

    #-------------------------------------------------------------------------------------------------
    # construction wrapper

    def tensorargs(self, thresh: float, tt: TensorType) -> TensorArgs:
        """
        Accuracy and representation for constructing tensors.
        """
        return TensorArgs(thresh, tt)

    def empty(self, tt: TensorType = TensorType.NONE) -> GenTensor[NDArray]:
        """
        Tensor without data. With a tensor type, the tensor adopts the dimensions of the
        first tensor added to it.
        """
        return GenTensor(tt)

    def zeros(self, dims: Sequence[int], targs: TensorArgs | TensorType, dtype: Any = None) -> GenTensor[NDArray]:
        """
        Zero tensor of the given dimensions. Low-rank tensors have rank zero.
        """
        return GenTensor(dims, targs, xp=self.namespace, dtype=dtype)

    @overload
    def gentensor(self, data: Any, targs: TensorArgs, /) -> GenTensor[NDArray]: ...
    @overload
    def gentensor(self, data: Any, eps: float, tt: TensorType, /) -> GenTensor[NDArray]: ...
    # implementation
    def gentensor(self, data: Any, targs: Any, tt: Optional[TensorType] = None, /) -> GenTensor[NDArray]:
        """
        Tensor holding a copy of the provided dense data. Low-rank tensors approximate the
        data with a Frobenius error of at most eps times its norm.
        """
        data = self.namespace.asarray(data)
        if tt is None:
            return GenTensor(data, targs)
        return GenTensor(data, targs, tt)

    def random(self, dims: Sequence[int], targs: TensorArgs | TensorType, dtype: Any = None) -> GenTensor[NDArray]:
        """
        Tensor with random entries, low-rank tensors have rank one.
        """
        return self.zeros(dims, targs, dtype).fillrandom()

    def copy(self, arg: GenTensor[NDArray] | SliceGenTensor[NDArray]) -> GenTensor[NDArray]:
        """
        Deep copy of a tensor or of a slice.
        """
        return _copy(arg)

    #-------------------------------------------------------------------------------------------------
    # conversion wrapper

    def to_full_rank(self, arg: GenTensor[NDArray]) -> None:
        """
        Convert a tensor in place to full rank.
        """
        _to_full_rank(arg)

    def to_low_rank(self, arg: GenTensor[NDArray], eps: float, tt: TensorType) -> None:
        """
        Convert a tensor in place to a low-rank representation with a Frobenius error of at
        most eps times its norm.
        """
        _to_low_rank(arg, eps, tt)

    def transform(self, arg: GenTensor[NDArray], c: NDArray) -> GenTensor[NDArray]:
        """
        :math:`r_{ij\\dots} = \\sum_{i'j'\\dots} t_{i'j'\\dots} c_{i'i} c_{j'j} \\dots`\n
        Transform every dimension with the same matrix.
        """
        return _transform(arg, c)

    def general_transform(self, arg: GenTensor[NDArray], cs: Sequence[NDArray]) -> GenTensor[NDArray]:
        """
        Transform dimension i with the matrix cs[i].
        """
        return _general_transform(arg, cs)

    def transform_dir(self, arg: GenTensor[NDArray], c: NDArray, axis: int) -> GenTensor[NDArray]:
        """
        Transform a single dimension.
        """
        return _transform_dir(arg, c, axis)

    #-------------------------------------------------------------------------------------------------
    # io wrapper

    @overload
    def write(self, group: h5py.Group, obj: TensorArgs) -> None: ...
    @overload
    def write(self, group: h5py.Group, obj: GenTensor[NDArray]) -> None: ...
    # implementation
    def write(self, group: h5py.Group, obj: Any) -> None:
        """
        Write a tensor or tensor arguments to a hdf5 group.
        """
        _write(group, obj)

    @overload
    def read(self, group: h5py.Group, cls: Type[TensorArgs]) -> TensorArgs: ...
    @overload
    def read(self, group: h5py.Group, cls: Type[GenTensor[NDArray]]) -> GenTensor[NDArray]: ...
    # implementation
    def read(self, group: h5py.Group, cls: Any) -> Any:
        """
        Read a tensor or tensor arguments from a hdf5 group.
        """
        if cls == GenTensor:
            return _read(group, GenTensor, self.namespace)
        return _read(group, cls)

    #-------------------------------------------------------------------------------------------------
    # options

    def accuracy(self, *, thresh: float) -> AccuracyOptions:
        """
        Manager for the accuracy of low-rank tensors created from a tensor type only,
        e.g. by empty or zeros without TensorArgs.
        """
        return AccuracyOptions(thresh=thresh)

    def set_options(self, options: AccuracyOptions) -> None:
        """
        Set options globally. The options are stored per thread.
        """
        set_options(options)

    def get_options(self, otype: OptionType = OptionType.ACCURACY) -> AccuracyOptions:
        """
        Get the current options.
        """
        return get_options(otype)
