# Copyright© 2025-2026 Gesellschaft zur Förderung der angewandten Forschung e.V.
# acting on behalf of its Fraunhofer Institut für Graphische Datenverarbeitung.
# Licensed under the EUPL. See LICENSE.txt.

import logging
from typing import Optional, Sequence, Self, Any
from math import sqrt, prod
import opt_einsum as oe

from .backend import ArrayLike, ArrayNamespace, namespace_of_arrays, default_dtype, device, shape
from .tensortype import TensorType
from .errors import InvalidOperation, UninitializedOperand, TypeMismatch
from .svdecomposition import SVDecomposition
from .tensordecomposition import TensorDecomposition
from .utils import Slices, sliced_dims, symbol_generator, check_pos
from . import densekernels as dk

logger = logging.getLogger(__name__)

class SepRep[T: ArrayLike]:
    """
    Separated representation of a tensor. The dimensions are split into dim_eff particles of
    consecutive axes and the tensor is stored as a weighted sum of rank terms, each term being
    the outer product of one vector per particle. A valid representation of rank zero is the
    zero tensor. Without dimensions the representation is not valid and holds no data.
    """

    _tt: TensorType
    _dims: Optional[tuple[int, ...]]
    _weights: Optional[T]
    _vectors: list[T]
    #: Accuracy of the last recompression, None once the terms changed since.
    _reduced_eps: Optional[float]

    @property
    def tensor_type(self) -> TensorType:
        return self._tt

    @property
    def is_valid(self) -> bool:
        return self._dims is not None

    @property
    def dims(self) -> tuple[int, ...]:
        self._check_valid()
        return self._dims # type: ignore

    @property
    def ndim(self) -> int:
        return -1 if self._dims is None else len(self._dims)

    @property
    def rank(self) -> int:
        if self._weights is None:
            return 0
        return self._weights.shape[0] # type: ignore

    @property
    def weights(self) -> T:
        self._check_valid()
        return self._weights # type: ignore

    @property
    def vectors(self) -> Sequence[T]:
        """Particle vectors, each of shape (rank, *particle dimensions)."""
        self._check_valid()
        return self._vectors

    @property
    def namespace(self) -> ArrayNamespace[T]:
        self._check_valid()
        return namespace_of_arrays(self._weights, *self._vectors) # type: ignore

    @property
    def dtype(self) -> Any:
        if self._weights is None:
            return None
        return self._vectors[0].dtype

    def __init__(self,
                 tt: TensorType,
                 weights: Optional[T] = None,
                 vectors: Optional[Sequence[T]] = None) -> None:
        if not tt.is_lowrank:
            raise InvalidOperation(f"No separated representation for {tt.name}")
        self._tt = tt
        self._reduced_eps = None
        if weights is None or vectors is None:
            self._dims = None
            self._weights = None
            self._vectors = []
        else:
            self._weights = weights
            self._vectors = list(vectors)
            self._dims = tuple(int(d) for v in self._vectors for d in shape(v)[1:])
            self._check_layout()

    @classmethod
    def zeros(cls, tt: TensorType, dims: Sequence[int], xp: ArrayNamespace[T], dtype: Any = None) -> Self:
        """Valid representation of rank zero."""
        if dtype is None:
            dtype = default_dtype(xp)
        groups = particle_dims(tt, dims)
        weights = xp.zeros((0,), dtype=dtype)
        vectors = [xp.zeros((0, *pdims), dtype=dtype) for pdims in groups]
        return cls(tt, weights, vectors)

    @classmethod
    def from_dense(cls, tn: T, eps: float, tt: TensorType) -> Self:
        """Decompose a dense tensor with a Frobenius error of at most eps times its norm."""
        check_pos("eps", eps)
        xp = namespace_of_arrays(tn)
        groups = particle_dims(tt, shape(tn))
        sizes = [prod(pdims) for pdims in groups]
        core = xp.reshape(tn, tuple(sizes))
        weights, flat = compress(core, [None] * len(sizes), eps, sizes)
        vectors = [xp.reshape(v, (v.shape[0], *pdims)) for v, pdims in zip(flat, groups)]
        logger.debug("decomposed tensor of shape %s into %s of rank %d",
                     shape(tn), tt.name, weights.shape[0])
        res = cls(tt, weights, vectors)
        res._reduced_eps = eps
        return res

    # ------------------------------------------------------------------------
    # access

    def copy(self) -> Self:
        if not self.is_valid:
            return type(self)(self._tt)
        res = type(self)(self._tt,
                         dk.copy(self._weights), # type: ignore
                         [dk.copy(v) for v in self._vectors])
        res._reduced_eps = self._reduced_eps
        return res

    def __getitem__(self, cuts: Slices) -> Self:
        """Sliced copy; every term of the result is the slice of the corresponding term."""
        self._check_valid()
        self._check_cuts(cuts)
        cut_iter = iter(cuts)
        vectors = []
        for v in self._vectors:
            pcuts = tuple(next(cut_iter) for _ in range(len(v.shape)-1))
            vectors.append(dk.copy(v[(slice(None), *pcuts)]))
        return type(self)(self._tt, dk.copy(self._weights), vectors) # type: ignore

    def n_coeff(self) -> int:
        if not self.is_valid:
            return 0
        return self.rank * (1 + sum(prod(v.shape[1:]) for v in self._vectors)) # type: ignore

    def reconstruct(self) -> T:
        """Expand the sum of terms into a dense tensor."""
        xp = self.namespace
        if self.rank == 0:
            return xp.zeros(self.dims, dtype=self.dtype, device=device(self._weights))
        sgen = symbol_generator()
        r = next(sgen)
        ops, res = [r], ""
        for v in self._vectors:
            chars = "".join(next(sgen) for _ in range(len(v.shape)-1))
            ops.append(r + chars)
            res += chars
        return oe.contract(f"{','.join(ops)}->{res}", self._weights, *self._vectors)

    def normf(self) -> float:
        val = overlap(self, self)
        return sqrt(max(val.real, 0.0))

    # ------------------------------------------------------------------------
    # in place modifications

    def scale(self, fac: Any) -> None:
        self._check_valid()
        self._weights = self._weights * fac # type: ignore
        self._reduced_eps = None

    def append(self, other: "SepRep[T]", fac: Any = 1.0) -> None:
        """Add fac times other by concatenating the terms. An invalid representation adopts the dimensions of other."""
        if other._tt != self._tt:
            raise TypeMismatch(f"Cannot add {other._tt.name} to {self._tt.name}")
        other._check_valid()
        if not self.is_valid:
            tmp = SepRep.zeros(self._tt, other.dims, other.namespace, other.dtype)
            self._dims, self._weights, self._vectors = tmp._dims, tmp._weights, tmp._vectors
        self._check_compatible(other)
        xp = self.namespace
        weights = xp.concat([self._weights, other._weights * fac]) # type: ignore
        vectors = [xp.concat([v1, v2]) for v1, v2 in zip(self._vectors, other._vectors)]
        self._weights, self._vectors = weights, vectors
        self._reduced_eps = None

    def embed(self, other: "SepRep[T]", cuts: Slices, fac: Any = 1.0) -> None:
        """Add fac times other to the region of this tensor addressed by cuts."""
        if other._tt != self._tt:
            raise TypeMismatch(f"Cannot add {other._tt.name} to {self._tt.name}")
        self._check_valid()
        other._check_valid()
        self._check_cuts(cuts)
        if sliced_dims(cuts, self.dims) != other.dims:
            raise InvalidOperation(f"Slice of shape {sliced_dims(cuts, self.dims)} does not match {other.dims}")
        xp = self.namespace
        dtype = xp.result_type(self._weights, other._weights) # type: ignore
        cut_iter = iter(cuts)
        vectors = []
        for v, ov in zip(self._vectors, other._vectors):
            pcuts = tuple(next(cut_iter) for _ in range(len(v.shape)-1))
            tmp = xp.zeros((other.rank, *v.shape[1:]), dtype=dtype, device=device(v))
            tmp[(slice(None), *pcuts)] = ov
            vectors.append(xp.concat([v, tmp]))
        self._weights = xp.concat([self._weights, other._weights * fac]) # type: ignore
        self._vectors = vectors
        self._reduced_eps = None

    def reduce_rank(self, eps: float) -> None:
        """
        Recompress to the smallest rank with a Frobenius error of at most eps times the norm of
        the terms. The rank never increases and a repeated reduction with the same or a looser
        eps leaves the terms unchanged.
        """
        check_pos("eps", eps)
        self._check_valid()
        if self._reduced_eps is not None and eps <= self._reduced_eps:
            return
        rank = self.rank
        if rank == 0:
            self._reduced_eps = eps
            return
        xp = self.namespace
        decomp = TensorDecomposition(SVDecomposition(cutoff=0.0))
        bases, coeffs, sizes = [], [], []
        for v in self._vectors:
            nd = len(v.shape)
            res = decomp.split(xp.permute_dims(v, (*range(1, nd), 0)), nd-1)
            sizes.append(prod(v.shape[1:]))
            bases.append(xp.reshape(res.left, (sizes[-1], res.left.shape[-1])))
            coeffs.append(res.right)

        sgen = symbol_generator()
        r = next(sgen)
        chars = [next(sgen) for _ in coeffs]
        eq = f"{r},{','.join(c + r for c in chars)}->{''.join(chars)}"
        core = oe.contract(eq, self._weights, *coeffs)

        # cancelling terms leave a core of tiny norm, the cutoff follows the terms instead
        term_norm2 = xp.abs(self._weights)**2
        for v in self._vectors:
            term_norm2 = term_norm2 * xp.sum(xp.abs(xp.reshape(v, (rank, -1)))**2, axis=1)
        norm = max(dk.normf(core), sqrt(float(xp.sum(term_norm2))))

        weights, flat = compress(core, bases, eps, sizes, norm)
        self._reduced_eps = eps
        if weights.shape[0] > rank:
            logger.debug("keeping rank %d of %s, recompression gave rank %d",
                         rank, self._tt.name, weights.shape[0])
            return
        self._vectors = [xp.reshape(f, (f.shape[0], *v.shape[1:])) for f, v in zip(flat, self._vectors)]
        self._weights = weights
        logger.debug("reduced rank of %s from %d to %d at eps=%g", self._tt.name, rank, self.rank, eps)

    def fillrandom(self, rank: Optional[int] = None) -> None:
        self._check_valid()
        xp = self.namespace
        if rank is None:
            rank = max(self.rank, 1)
        dtype = self.dtype
        self._weights = xp.ones((rank,), dtype=dtype)
        self._vectors = [dk.random(xp, (rank, *v.shape[1:]), dtype) for v in self._vectors]
        self._reduced_eps = None

    # ------------------------------------------------------------------------
    # basis transformations

    def transform(self, c: T) -> Self:
        return self.general_transform([c] * self.ndim)

    def general_transform(self, cs: Sequence[T]) -> Self:
        self._check_valid()
        if len(cs) != self.ndim:
            raise InvalidOperation(f"Expected {self.ndim} matrices, got {len(cs)}")
        xp = self.namespace
        c_iter = iter(cs)
        vectors = []
        for v in self._vectors:
            # the rank axis stays in front while the particle axes cycle through
            for i in range(len(v.shape)-1):
                c = next(c_iter)
                dk.check_matrix(c, v.shape[1], i)
                v = xp.tensordot(v, c, axes=([1], [0]))
            vectors.append(v)
        return type(self)(self._tt, dk.copy(self._weights), vectors) # type: ignore

    def transform_dir(self, c: T, axis: int) -> Self:
        self._check_valid()
        if axis < 0 or axis >= self.ndim:
            raise InvalidOperation(f"Axis {axis} out of range for {self.ndim} dimensions")
        vectors = []
        offset = 0
        for v in self._vectors:
            npv = len(v.shape)-1
            if offset <= axis < offset + npv:
                vectors.append(dk.transform_dir(v, c, axis - offset + 1))
            else:
                vectors.append(dk.copy(v))
            offset += npv
        return type(self)(self._tt, dk.copy(self._weights), vectors) # type: ignore

    # ------------------------------------------------------------------------
    # checks

    def _check_valid(self) -> None:
        if not self.is_valid:
            raise UninitializedOperand(f"{self._tt.name} representation without dimensions")

    def _check_compatible(self, other: "SepRep[T]") -> None:
        if other._tt != self._tt:
            raise TypeMismatch(f"Representations {self._tt.name} and {other._tt.name} differ")
        self._check_valid()
        other._check_valid()
        if self._dims != other._dims:
            raise InvalidOperation(f"Dimensions {self._dims} and {other._dims} do not match")

    def _check_cuts(self, cuts: Slices) -> None:
        if len(cuts) != self.ndim:
            raise InvalidOperation(f"Expected {self.ndim} slices, got {len(cuts)}")

    def _check_layout(self) -> None:
        if len(self._vectors) != self._tt.dim_eff:
            raise InvalidOperation(f"{self._tt.name} needs {self._tt.dim_eff} particles, got {len(self._vectors)}")
        ranks = {v.shape[0] for v in self._vectors}
        if ranks != {self.rank} or len(self._weights.shape) != 1: # type: ignore
            raise InvalidOperation("Weights and particle vectors disagree on the rank")

    def __repr__(self) -> str:
        return f"SepRep({self._tt.name}, dims={self._dims}, rank={self.rank})"


def particle_dims(tt: TensorType, dims: Sequence[int]) -> list[tuple[int, ...]]:
    """Split the dimensions into dim_eff groups of equal length."""
    dims = tuple(int(d) for d in dims)
    dim_eff = tt.dim_eff
    if len(dims) == 0 or len(dims) % dim_eff != 0:
        raise InvalidOperation(f"{tt.name} needs a multiple of {dim_eff} dimensions, got {len(dims)}")
    npv = len(dims) // dim_eff
    return [dims[p*npv:(p+1)*npv] for p in range(dim_eff)]

def overlap[T: ArrayLike](sr1: SepRep[T], sr2: SepRep[T]) -> Any:
    """Conjugate inner product :math:`\\langle sr_1 | sr_2 \\rangle` computed on the terms."""
    sr1._check_compatible(sr2)
    if sr1.rank == 0 or sr2.rank == 0:
        return 0.0
    xp = namespace_of_arrays(sr1.weights, sr2.weights)
    gram = None
    for v1, v2 in zip(sr1.vectors, sr2.vectors):
        m1 = xp.reshape(v1, (sr1.rank, -1))
        m2 = xp.reshape(v2, (sr2.rank, -1))
        g = xp.matmul(dk.conj(m1), m2.T)
        gram = g if gram is None else gram * g
    w1 = dk.conj(sr1.weights)[:, xp.newaxis]
    w2 = sr2.weights[xp.newaxis, :]
    return dk.scalar(xp.sum(w1 * gram * w2))

def compress[T: ArrayLike](
        core: T,
        bases: Sequence[Optional[T]],
        eps: float,
        sizes: Sequence[int],
        norm: Optional[float] = None
        ) -> tuple[T, list[T]]:
    """
    Turn the coefficient tensor core of a tensor with orthonormal particle bases into terms.
    A basis of None is the identity. Two particles are truncated by a singular value
    decomposition, more particles by a truncated higher order singular value decomposition
    whose nonzero core entries become the terms. The cutoffs only depend on sizes, eps and
    norm, which defaults to the norm of core. Returns the weights and the flat particle
    vectors of shape (rank, size).
    """
    if len(bases) == 2:
        return _svd_terms(core, bases, eps, sizes, norm)
    return _hosvd_terms(core, bases, eps, sizes, norm)

def _svd_terms[T: ArrayLike](
        core: T,
        bases: Sequence[Optional[T]],
        eps: float,
        sizes: Sequence[int],
        norm: Optional[float] = None
        ) -> tuple[T, list[T]]:
    xp = namespace_of_arrays(core)
    if norm is None:
        norm = dk.normf(core)
    cutoff = eps * norm / sqrt(min(sizes))
    res = SVDecomposition(cutoff=cutoff).left(core)
    s = xp.astype(res.singular_values, core.dtype)
    left = res.left
    right = (res.right / s[:, xp.newaxis]).T
    if bases[0] is not None:
        left = xp.matmul(bases[0], left)
    if bases[1] is not None:
        right = xp.matmul(bases[1], right)
    return s, [left.T, right.T]

def _hosvd_terms[T: ArrayLike](
        core: T,
        bases: Sequence[Optional[T]],
        eps: float,
        sizes: Sequence[int],
        norm: Optional[float] = None
        ) -> tuple[T, list[T]]:
    xp = namespace_of_arrays(core)
    dim_eff = len(bases)
    # half of the error budget for the mode truncations, half for dropping core entries
    if norm is None:
        norm = dk.normf(core)
    budget = 0.5 * eps * norm

    factors = []
    for p in range(dim_eff):
        decomp = TensorDecomposition(SVDecomposition(cutoff=budget / sqrt(dim_eff * sizes[p])))
        factors.append(decomp.mode(core, p).left)
    small = dk.general_transform(core, [dk.conj(f) for f in factors])
    new_bases = [f if b is None else xp.matmul(b, f) for b, f in zip(bases, factors)]

    flat = xp.reshape(small, (-1,))
    idx = xp.nonzero(xp.abs(flat) > budget / sqrt(prod(sizes)))[0]
    weights = xp.take(flat, idx)
    vectors = []
    for p in reversed(range(dim_eff)):
        ip = idx % small.shape[p]
        idx = idx // small.shape[p]
        vectors.insert(0, xp.take(new_bases[p], ip, axis=1).T)
    return weights, vectors
