# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from enum import Enum
from dataclasses import dataclass

from .utils import check_pos, check_non_neg

#: Rank reported by representations that do not track one.
FULL_RANK = -1

class TensorType(Enum):
    NONE = 0
    FULL = 1
    LOWRANK_2D = 2
    LOWRANK_3D = 3

    @property
    def is_lowrank(self) -> bool:
        return self in (TensorType.LOWRANK_2D, TensorType.LOWRANK_3D)

    @property
    def dim_eff(self) -> int:
        """Number of particle groups the dimensions of a low-rank tensor are split into."""
        if self == TensorType.LOWRANK_2D:
            return 2
        elif self == TensorType.LOWRANK_3D:
            return 3
        raise ValueError(f"{self.name} has no separated representation")

@dataclass(frozen=True)
class TensorArgs:
    """
    Arguments for creating a tensor of a given representation. There is no default:
    both the accuracy threshold and the tensor type have to be provided.
    """

    #: Accuracy threshold of the low-rank approximation.
    thresh: float
    #: Representation of the tensor.
    tt: TensorType

    def __post_init__(self) -> None:
        if not isinstance(self.tt, TensorType):
            raise TypeError(f"tt must be a TensorType, got {type(self.tt).__name__}")
        if self.tt.is_lowrank:
            check_pos("thresh", self.thresh)
        else:
            check_non_neg("thresh", self.thresh)
