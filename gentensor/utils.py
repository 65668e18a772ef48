# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

from typing import Sequence, Generator, Any
from numbers import Number, Real
import opt_einsum as oe

from .errors import InvalidOperation, UnsupportedForRepresentation

type Slices = tuple[slice, ...]

def check_pos(msg: str, value: int | float):
    if value <= 0:
        raise ValueError(f"{msg} must be above zero, got {value}")

def check_non_neg(msg: str, value: int | float):
    if value < 0:
        raise ValueError(f"{msg} must be a positive, got {value}")

def check_real_factor(msg: str, value: Any):
    if isinstance(value, bool) or not isinstance(value, Real):
        raise UnsupportedForRepresentation(f"{msg} has to be a real number, got {type(value).__name__}")

def check_scalar(value: Any, complex_data: bool):
    """Scalars have to match the element type: real for real tensors and complex for complex tensors."""
    if isinstance(value, bool) or not isinstance(value, Number):
        raise UnsupportedForRepresentation(f"Cannot scale by {type(value).__name__}")
    if isinstance(value, Real) == complex_data:
        kind = "complex" if complex_data else "real"
        raise UnsupportedForRepresentation(
            f"Scaling a {kind} tensor by {type(value).__name__} is not supported")

def full_slices(ndim: int) -> Slices:
    return tuple(slice(None) for _ in range(ndim))

def normalize_slices(key: Sequence[Any], dims: Sequence[int]) -> Slices:
    """Turn a slicing key into one slice with explicit start, stop and step per dimension."""
    key = list(key)
    if any(k is Ellipsis for k in key):
        if key.count(Ellipsis) > 1:
            raise InvalidOperation("Only one ellipsis allowed in a slice")
        pos = key.index(Ellipsis)
        key[pos:pos+1] = [slice(None)] * (len(dims) - len(key) + 1)
    if len(key) != len(dims):
        raise InvalidOperation(f"Expected {len(dims)} slices, got {len(key)}")
    res = []
    for k, n in zip(key, dims):
        if not isinstance(k, slice):
            raise InvalidOperation(f"Invalid slice specification {k!r}")
        start, stop, step = k.indices(n)
        if step < 0 and stop < 0:
            stop = None
        res.append(slice(start, stop, step))
    return tuple(res)

def slice_extent(cut: slice, size: int) -> int:
    return len(range(*cut.indices(size)))

def sliced_dims(cuts: Slices, dims: Sequence[int]) -> tuple[int, ...]:
    return tuple(slice_extent(cut, n) for cut, n in zip(cuts, dims))

def symbol_generator() -> Generator[str]:
    idx = 0
    while True:
        yield oe.get_symbol(idx)
        idx += 1
