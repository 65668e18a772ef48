import unittest
from dataclasses import FrozenInstanceError

from gentensor import GenTensors
from gentensor.typing import TensorArgs, TensorType
from utils import backends

class TestTensorArgs(unittest.TestCase):

    def setUp(self):
        self.gentensors = [GenTensors(backend) for backend in backends]

    def test_construction(self):
        for gt in self.gentensors:
            targs = gt.tensorargs(1e-6, TensorType.LOWRANK_2D)
            self.assertEqual(targs.thresh, 1e-6)
            self.assertEqual(targs.tt, TensorType.LOWRANK_2D)
            self.assertEqual(targs, TensorArgs(1e-6, TensorType.LOWRANK_2D))

            self.assertRaises(TypeError, TensorArgs)
            self.assertRaises(TypeError, TensorArgs, 1e-6)
            self.assertRaises(TypeError, TensorArgs, 1e-6, "LOWRANK_2D")
            self.assertRaises(ValueError, gt.tensorargs, 0.0, TensorType.LOWRANK_3D)
            self.assertRaises(ValueError, gt.tensorargs, -1e-6, TensorType.FULL)
            gt.tensorargs(0.0, TensorType.FULL)

    def test_frozen(self):
        targs = TensorArgs(1e-6, TensorType.FULL)
        with self.assertRaises(FrozenInstanceError):
            targs.thresh = 1e-3 # type: ignore

    def test_tensortype(self):
        self.assertTrue(TensorType.LOWRANK_2D.is_lowrank)
        self.assertTrue(TensorType.LOWRANK_3D.is_lowrank)
        self.assertFalse(TensorType.FULL.is_lowrank)
        self.assertFalse(TensorType.NONE.is_lowrank)
        self.assertEqual(TensorType.LOWRANK_2D.dim_eff, 2)
        self.assertEqual(TensorType.LOWRANK_3D.dim_eff, 3)
        with self.assertRaises(ValueError):
            TensorType.FULL.dim_eff

if __name__ == '__main__':
    unittest.main()
