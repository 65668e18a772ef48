import unittest
from itertools import product

from gentensor.typing import SepRep, TensorType, InvalidOperation, UninitializedOperand, TypeMismatch
from gentensor.seprep import overlap, particle_dims
from gentensor import densekernels as dk
from utils import backends, rand_data, max_diff

class TestSepRep(unittest.TestCase):

    def setUp(self):
        self.cases = [(TensorType.LOWRANK_2D, (4, 4, 4, 4)),
                      (TensorType.LOWRANK_2D, (6, 5)),
                      (TensorType.LOWRANK_3D, (4, 4, 4)),
                      (TensorType.LOWRANK_3D, (3, 4, 2, 3, 2, 2))]

    def rank_one(self, xp, tt, dims):
        groups = particle_dims(tt, dims)
        vectors = [rand_data(xp, 1, *pdims) for pdims in groups]
        return SepRep(tt, xp.ones((1,)), vectors)

    def test_particle_dims(self):
        self.assertEqual(particle_dims(TensorType.LOWRANK_2D, (2, 3, 4, 5)), [(2, 3), (4, 5)])
        self.assertEqual(particle_dims(TensorType.LOWRANK_3D, (2, 3, 4)), [(2,), (3,), (4,)])
        self.assertRaises(InvalidOperation, particle_dims, TensorType.LOWRANK_3D, (4, 4, 4, 4))
        self.assertRaises(InvalidOperation, particle_dims, TensorType.LOWRANK_2D, ())
        self.assertRaises(InvalidOperation, SepRep, TensorType.FULL)

    def test_invalid(self):
        sr = SepRep(TensorType.LOWRANK_2D)
        self.assertFalse(sr.is_valid)
        self.assertEqual(sr.rank, 0)
        self.assertEqual(sr.ndim, -1)
        self.assertEqual(sr.n_coeff(), 0)
        with self.assertRaises(UninitializedOperand):
            sr.dims
        self.assertRaises(UninitializedOperand, sr.reconstruct)

    def test_zeros(self):
        for xp, (tt, dims) in product(backends, self.cases):
            sr = SepRep.zeros(tt, dims, xp)
            self.assertTrue(sr.is_valid)
            self.assertEqual(sr.rank, 0)
            self.assertEqual(sr.dims, dims)
            tn = sr.reconstruct()
            self.assertEqual(tuple(tn.shape), dims)
            self.assertEqual(float(xp.max(xp.abs(tn))), 0.0)
            self.assertEqual(sr.normf(), 0.0)

    def test_from_dense(self):
        for xp, (tt, dims) in product(backends, self.cases):
            tn = rand_data(xp, *dims)
            sr = SepRep.from_dense(tn, 1e-10, tt)
            self.assertEqual(sr.dims, dims)
            self.assertLessEqual(dk.normf(sr.reconstruct() - tn), 1e-10 * dk.normf(tn))

            self.assertRaises(ValueError, SepRep.from_dense, tn, 0.0, tt)

    def test_from_dense_complex(self):
        for xp, (tt, dims) in product(backends, self.cases):
            tn = rand_data(xp, *dims, complex_data=True)
            sr = SepRep.from_dense(tn, 1e-10, tt)
            self.assertLessEqual(dk.normf(sr.reconstruct() - tn), 1e-10 * dk.normf(tn))

    def test_accuracy(self):
        for xp, (tt, dims) in product(backends, self.cases):
            tn = rand_data(xp, *dims)
            for eps in (1e-1, 1e-3):
                sr = SepRep.from_dense(tn, eps, tt)
                self.assertLessEqual(dk.normf(sr.reconstruct() - tn), eps * dk.normf(tn))

    def test_normf_overlap(self):
        for xp, (tt, dims) in product(backends, self.cases):
            tn1 = rand_data(xp, *dims, complex_data=True)
            tn2 = rand_data(xp, *dims, complex_data=True)
            sr1 = SepRep.from_dense(tn1, 1e-12, tt)
            sr2 = SepRep.from_dense(tn2, 1e-12, tt)

            ref = dk.trace_conj(tn1, tn2)
            self.assertLess(abs(overlap(sr1, sr2) - ref), 1e-8 * abs(ref))
            self.assertLess(abs(sr1.normf() - dk.normf(tn1)), 1e-8 * dk.normf(tn1))

            self.assertEqual(overlap(sr1, SepRep.zeros(tt, dims, xp)), 0.0)

    def test_reduce_rank(self):
        for xp, (tt, dims) in product(backends, self.cases):
            sr = self.rank_one(xp, tt, dims)
            ref = sr.reconstruct()
            sr.append(sr, 2.0)
            sr.append(self.rank_one(xp, tt, dims), 0.0)
            self.assertEqual(sr.rank, 3)

            sr.reduce_rank(1e-10)
            self.assertEqual(sr.rank, 1)
            self.assertLess(max_diff(xp, sr.reconstruct(), 3.0 * ref), 1e-10)

    def test_reduce_rank_zero(self):
        for xp, (tt, dims) in product(backends, self.cases):
            sr = self.rank_one(xp, tt, dims)
            sr.append(self.rank_one(xp, tt, dims))
            sr.scale(0.0)
            self.assertEqual(sr.rank, 2)
            sr.reduce_rank(1e-10)
            self.assertEqual(sr.rank, 0)
            self.assertEqual(tuple(sr.reconstruct().shape), dims)

    def test_reduce_rank_monotone(self):
        for xp, (tt, dims) in product(backends, self.cases):
            tn = rand_data(xp, *dims)
            sr = SepRep.from_dense(tn, 1e-10, tt)
            rank = sr.rank
            sr.reduce_rank(1e-10)
            self.assertLessEqual(sr.rank, rank)
            self.assertLessEqual(dk.normf(sr.reconstruct() - tn), 3e-10 * dk.normf(tn))

            self.assertRaises(ValueError, sr.reduce_rank, 0.0)

    def test_reduce_rank_idempotent(self):
        for xp, (tt, dims) in product(backends, self.cases):
            sr = SepRep.from_dense(rand_data(xp, *dims), 1e-10, tt)
            sr.reduce_rank(0.3)
            rank = sr.rank
            ref = sr.reconstruct()
            sr.reduce_rank(0.3)
            self.assertEqual(sr.rank, rank)
            self.assertEqual(max_diff(xp, sr.reconstruct(), ref), 0.0)
            sr.reduce_rank(0.5)
            self.assertEqual(sr.rank, rank)
            self.assertEqual(max_diff(xp, sr.reconstruct(), ref), 0.0)

            # new terms are recompressed again
            sr.append(sr.copy())
            self.assertEqual(sr.rank, 2 * rank)
            sr.reduce_rank(0.3)
            self.assertLessEqual(sr.rank, 2 * rank)
            self.assertLess(max_diff(xp, sr.reconstruct(), 2.0 * ref), 0.3 * 2.0 * dk.normf(ref))

    def test_reduce_rank_cancellation(self):
        for xp, (tt, dims) in product(backends, self.cases):
            sr = SepRep.from_dense(rand_data(xp, *dims), 1e-10, tt)
            self.assertGreater(sr.rank, 0)
            sr.append(sr, -1.0)
            sr.reduce_rank(1e-10)
            self.assertEqual(sr.rank, 0)
            self.assertEqual(sr.normf(), 0.0)

    def test_append(self):
        for xp, (tt, dims) in product(backends, self.cases):
            sr1 = SepRep.from_dense(rand_data(xp, *dims), 1e-10, tt)
            sr2 = SepRep.from_dense(rand_data(xp, *dims), 1e-10, tt)
            ref = sr1.reconstruct() - 0.5 * sr2.reconstruct()
            rank = sr1.rank + sr2.rank

            sr1.append(sr2, -0.5)
            self.assertEqual(sr1.rank, rank)
            self.assertLess(max_diff(xp, sr1.reconstruct(), ref), 1e-10)

            empty = SepRep(tt)
            empty.append(sr2)
            self.assertEqual(empty.dims, dims)
            self.assertLess(max_diff(xp, empty.reconstruct(), sr2.reconstruct()), 1e-12)

            other = TensorType.LOWRANK_3D if tt == TensorType.LOWRANK_2D else TensorType.LOWRANK_2D
            self.assertRaises(TypeMismatch, sr1.append, SepRep(other))

    def test_slicing(self):
        for xp, (tt, dims) in product(backends, self.cases):
            tn = rand_data(xp, *dims)
            sr = SepRep.from_dense(tn, 1e-10, tt)
            cuts = tuple(slice(1, n, 2) if i % 2 == 0 else slice(0, n-1, 1) for i, n in enumerate(dims))

            sub = sr[cuts]
            ref = sr.reconstruct()[cuts]
            self.assertEqual(sub.dims, tuple(ref.shape))
            self.assertLess(max_diff(xp, sub.reconstruct(), ref), 1e-12)

            # the slice is a deep copy
            sub.scale(0.0)
            self.assertLess(max_diff(xp, sr.reconstruct(), tn), 1e-8)

    def test_embed(self):
        for xp, (tt, dims) in product(backends, self.cases):
            cuts = tuple(slice(0, n-1, 1) for n in dims)
            sub_dims = tuple(n-1 for n in dims)

            tn = rand_data(xp, *dims)
            sub = rand_data(xp, *sub_dims)
            sr = SepRep.from_dense(tn, 1e-10, tt)
            sr.embed(SepRep.from_dense(sub, 1e-10, tt), cuts, 2.0)

            ref = xp.asarray(tn, copy=True)
            ref[cuts] += 2.0 * sub
            self.assertLess(max_diff(xp, sr.reconstruct(), ref), 1e-8)

            self.assertRaises(InvalidOperation, sr.embed, SepRep.from_dense(tn, 1e-10, tt), cuts)

    def test_transform(self):
        for xp, (tt, dims) in product(backends, self.cases):
            tn = rand_data(xp, *dims)
            sr = SepRep.from_dense(tn, 1e-10, tt)
            cs = [rand_data(xp, n, n) for n in dims]

            res = sr.general_transform(cs)
            self.assertLess(max_diff(xp, res.reconstruct(), dk.general_transform(tn, cs)), 1e-8)

            for axis, c in enumerate(cs):
                res = sr.transform_dir(c, axis)
                self.assertLess(max_diff(xp, res.reconstruct(), dk.transform_dir(tn, c, axis)), 1e-8)

            if len(set(dims)) == 1:
                res = sr.transform(cs[0])
                self.assertLess(max_diff(xp, res.reconstruct(), dk.transform(tn, cs[0])), 1e-8)

    def test_fillrandom(self):
        for xp, (tt, dims) in product(backends, self.cases):
            sr = SepRep.zeros(tt, dims, xp)
            sr.fillrandom()
            self.assertEqual(sr.rank, 1)
            self.assertGreater(sr.normf(), 0.0)
            sr.fillrandom(3)
            self.assertEqual(sr.rank, 3)

if __name__ == '__main__':
    unittest.main()
