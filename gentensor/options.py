# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from typing import Hashable, Any, Self
from enum import Enum
import threading

from .utils import check_pos

class OptionType(Enum):
    ACCURACY = 0

class Options:

    key: Hashable

    def __init__(self, category: OptionType):
        self.key = (category, threading.get_ident())

    def __enter__(self) -> Self:
        global _opts
        if self.key in _opts:
            self._tmp = _opts[self.key]
        else:
            self._tmp = None
        _opts[self.key] = self
        return self

    def __exit__(self, *_) -> None:
        global _opts
        if self._tmp is not None:
            _opts[self.key] = self._tmp
        else:
            del _opts[self.key]

class AccuracyOptions(Options):
    """
    Context manager for the accuracy of low-rank tensors that are created from a tensor type
    only. Tensors created with explicit arguments keep their own threshold.
    """

    #: Accuracy threshold used when finalizing accumulations.
    thresh: float

    def __init__(self, *, thresh: float):
        check_pos("thresh", thresh)
        self.thresh = float(thresh)
        super().__init__(OptionType.ACCURACY)

    def __repr__(self) -> str:
        return f"AccuracyOptions(thresh={self.thresh})"

_opts: dict[Any, Options] = {}
_defaults: dict[OptionType, Options] = {OptionType.ACCURACY: AccuracyOptions(thresh=1e-10)}

def get_options(otype: OptionType) -> AccuracyOptions:
    """Return the options of the current thread, or the process wide defaults if none are set."""
    global _opts
    key = (otype, threading.get_ident())
    if key in _opts:
        return _opts[key] # type: ignore
    return _defaults[otype] # type: ignore

def set_options(opts: AccuracyOptions) -> None:
    global _opts
    _opts[opts.key] = opts
