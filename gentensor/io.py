# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from typing import Any, Optional, Type, overload
import h5py
import numpy as np

from .backend import ArrayNamespace, ArrayLike, to_numpy
from .tensortype import TensorType, TensorArgs
from .seprep import SepRep
from .fulltensor import FullTensor
from .lowranktensor import LowRankTensor
from .gentensor import GenTensor

@overload
def write(group: h5py.Group, obj: TensorArgs) -> None: ...
@overload
def write(group: h5py.Group, obj: SepRep) -> None: ...
@overload
def write(group: h5py.Group, obj: GenTensor) -> None: ...
#implementation
def write(group: h5py.Group, obj: Any) -> None:
    if isinstance(obj, TensorArgs):
        group.attrs["thresh"] = obj.thresh
        group.attrs["tt"] = obj.tt.name
    elif isinstance(obj, SepRep):
        group.attrs["tt"] = obj.tensor_type.name
        if obj.is_valid:
            group.create_dataset("weights", data=to_numpy(obj.weights))
            for i, vec in enumerate(obj.vectors):
                group.create_dataset(f"vectors{i}", data=to_numpy(vec))
    elif isinstance(obj, GenTensor):
        ptr = obj._ptr
        group.attrs["tt"] = obj.tensor_type.name
        if isinstance(ptr, FullTensor):
            if ptr.has_data():
                group.create_dataset("data", data=to_numpy(ptr.full_tensor()))
        elif isinstance(ptr, LowRankTensor):
            group.attrs["thresh"] = ptr.thresh
            sgroup = group.create_group("seprep")
            write(sgroup, ptr.data)
    else:
        raise ValueError("Invalid object.")

@overload
def read(group: h5py.Group, cls: Type[TensorArgs]) -> TensorArgs: ...
@overload
def read[T: ArrayLike](group: h5py.Group, cls: Type[SepRep[T]], xp: Optional[ArrayNamespace[T]]) -> SepRep[T]: ...
@overload
def read[T: ArrayLike](group: h5py.Group, cls: Type[GenTensor[T]], xp: Optional[ArrayNamespace[T]]) -> GenTensor[T]: ...
#implementation
def read(group: h5py.Group, cls: Any, xp: Optional[ArrayNamespace] = None) -> Any:
    if cls == TensorArgs:
        return TensorArgs(float(get_attr(group, "thresh")),
                          TensorType[str(get_attr(group, "tt"))])
    elif cls == SepRep:
        if xp is None:
            raise ValueError("Array namespace must be provided to read SepRep.")
        tt = TensorType[str(get_attr(group, "tt"))]
        if "weights" not in group.keys():
            return SepRep(tt)
        vectors = []
        while f"vectors{len(vectors)}" in group.keys():
            vectors.append(read_array(group, f"vectors{len(vectors)}", xp))
        return SepRep(tt, read_array(group, "weights", xp), vectors)
    elif cls == GenTensor:
        if xp is None:
            raise ValueError("Array namespace must be provided to read GenTensor.")
        tt = TensorType[str(get_attr(group, "tt"))]
        if tt == TensorType.FULL:
            if "data" in group.keys():
                return GenTensor._wrap(FullTensor(read_array(group, "data", xp)))
            return GenTensor._wrap(FullTensor())
        elif tt.is_lowrank:
            sgroup = group["seprep"]
            assert isinstance(sgroup, h5py.Group)
            thresh = float(get_attr(group, "thresh"))
            return GenTensor._wrap(LowRankTensor(read(sgroup, SepRep, xp), thresh))
        return GenTensor()

    raise ValueError("Invalid class.")

def get_attr(group: h5py.Group, name: str) -> Any:
    return group.attrs[name]

def read_array(group: h5py.Group, name: str, xp: ArrayNamespace) -> Any:
    dataset = group[name]
    assert isinstance(dataset, h5py.Dataset)
    return xp.asarray(np.asarray(dataset))
