# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

"""typing has all classes used in the external API of gentensor."""

from .tensortype import TensorType, TensorArgs, FULL_RANK
from .gentensor import GenTensor
from .slicegentensor import SliceGenTensor

from .sepreptensor import SepRepTensor
from .fulltensor import FullTensor
from .lowranktensor import LowRankTensor
from .seprep import SepRep

from .svdecomposition import SVDecomposition
from .matrixdecomposition import MatrixDecomposition

from .options import Options, AccuracyOptions, OptionType

from .errors import (
    GenTensorError,
    TypeMismatch,
    UnsupportedForRepresentation,
    UninitializedOperand,
    InvalidSliceAssignment,
    InvalidOperation,
    StaleSlice
)

from .gentensors import GenTensors
