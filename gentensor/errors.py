# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

"""Exceptions raised on violated preconditions of tensor operations."""

class GenTensorError(Exception):
    pass

class TypeMismatch(GenTensorError, TypeError):
    """The representations of the operands differ."""

class UnsupportedForRepresentation(GenTensorError, NotImplementedError):
    """The operation is not meaningful for the active representation."""

class UninitializedOperand(GenTensorError, ValueError):
    """The operand has no representation or no data attached."""

class InvalidSliceAssignment(GenTensorError, TypeError):
    """A slice was assigned to directly instead of being updated in place."""

class InvalidOperation(GenTensorError, ValueError):
    """Dimensions, slices or arguments do not fit the operation."""

class StaleSlice(InvalidOperation):
    """A slice outlived its tensor or the tensor changed its representation."""
