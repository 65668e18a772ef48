import unittest
from itertools import product
import os
import tempfile
import h5py

from gentensor import GenTensors, GenTensor
from gentensor.typing import TensorArgs, TensorType
from utils import backends, rand_data, max_diff

class TestIO(unittest.TestCase):

    def setUp(self) -> None:
        self.gentensors = [GenTensors(backend) for backend in backends]
        self.cases = [(TensorType.FULL, (4, 4, 4, 4)),
                      (TensorType.LOWRANK_2D, (4, 4, 4, 4)),
                      (TensorType.LOWRANK_3D, (4, 4, 4))]

        self.dir = tempfile.TemporaryDirectory()
        self.file = h5py.File(os.path.join(self.dir.name, "test_io.h5"), "w")

    def tearDown(self) -> None:
        self.file.close()
        self.dir.cleanup()

    def test_gentensor(self) -> None:
        for gt, (tt, dims) in product(self.gentensors, self.cases):
            xp = gt.namespace
            name = f"gentensor_{tt.name}"
            group = self.file.create_group(name)

            ref = gt.gentensor(rand_data(xp, *dims), 1e-8, tt)
            gt.write(group, ref)
            tn = gt.read(group, GenTensor)

            self.assertEqual(tn.tensor_type, ref.tensor_type)
            self.assertEqual(tn.dims(), ref.dims())
            self.assertEqual(tn.rank(), ref.rank())
            self.assertLess(max_diff(xp, tn.reconstruct_tensor(), ref.reconstruct_tensor()), 1e-12)
            if tt.is_lowrank:
                self.assertEqual(tn._ptr.thresh, 1e-8) # type: ignore

            del self.file[name]

    def test_empty(self) -> None:
        for gt, tt in product(self.gentensors, TensorType):
            name = f"empty_{tt.name}"
            group = self.file.create_group(name)

            gt.write(group, gt.empty(tt))
            tn = gt.read(group, GenTensor)
            self.assertEqual(tn.tensor_type, tt)
            self.assertFalse(tn.has_data())

            del self.file[name]

    def test_zero_rank(self) -> None:
        for gt in self.gentensors:
            xp = gt.namespace
            group = self.file.create_group("zero")
            gt.write(group, gt.zeros((4, 4, 4), TensorType.LOWRANK_3D))
            tn = gt.read(group, GenTensor)
            self.assertTrue(tn.has_data())
            self.assertEqual(tn.rank(), 0)
            self.assertEqual(tn.dims(), (4, 4, 4))
            self.assertEqual(float(xp.max(xp.abs(tn.reconstruct_tensor()))), 0.0)
            del self.file["zero"]

    def test_tensorargs(self) -> None:
        for gt in self.gentensors:
            group = self.file.create_group("tensorargs")
            ref = gt.tensorargs(1e-6, TensorType.LOWRANK_3D)
            gt.write(group, ref)
            self.assertEqual(gt.read(group, TensorArgs), ref)
            del self.file["tensorargs"]

if __name__ == '__main__':
    unittest.main()
