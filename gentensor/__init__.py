# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from .gentensors import GenTensors
from .tensortype import TensorType, TensorArgs
from .gentensor import GenTensor, copy
from .conversion import to_full_rank, to_low_rank, transform, general_transform, transform_dir
