# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

"""Structural types for arrays and namespaces of the Python array API standard."""

from typing import Protocol, Any

class ArrayLike(Protocol):

    @property
    def shape(self) -> tuple[int | None, ...]: ...

    @property
    def dtype(self) -> Any: ...

    @property
    def ndim(self) -> int: ...

    def __getitem__(self, key: Any, /) -> Any: ...

class ArrayNamespace[T](Protocol):

    def asarray(self, obj: Any, /, *, dtype: Any = None, device: Any = None, copy: bool | None = None) -> T: ...

    def zeros(self, shape: int | tuple[int, ...], *, dtype: Any = None, device: Any = None) -> T: ...

    def __getattr__(self, name: str) -> Any: ...
