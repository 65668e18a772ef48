import unittest
import threading

from gentensor import GenTensors
from gentensor.typing import OptionType, TensorType
from utils import backends

class TestOptions(unittest.TestCase):

    def setUp(self):
        self.gentensors = [GenTensors(backend) for backend in backends]

    def test_options(self) -> None:
        for gt in self.gentensors:
            with gt.accuracy(thresh=1e-4) as opts1:
                with gt.accuracy(thresh=1e-6) as opts2:
                    self.assertEqual(opts2, gt.get_options(OptionType.ACCURACY))
                self.assertEqual(opts1, gt.get_options(OptionType.ACCURACY))

            opt = gt.accuracy(thresh=1e-8)
            gt.set_options(opt)
            self.assertEqual(opt, gt.get_options(OptionType.ACCURACY))
            gt.set_options(gt.accuracy(thresh=1e-10))

    def test_invalid(self) -> None:
        for gt in self.gentensors:
            self.assertRaises(ValueError, gt.accuracy, thresh=0.0)
            self.assertRaises(ValueError, gt.accuracy, thresh=-1.0)

    def test_default_thresh(self) -> None:
        for gt in self.gentensors:
            with gt.accuracy(thresh=1e-5):
                tensor = gt.zeros((4, 4), TensorType.LOWRANK_2D)
                empty = gt.empty(TensorType.LOWRANK_3D)
            self.assertEqual(tensor._ptr.thresh, 1e-5) # type: ignore
            self.assertEqual(empty._ptr.thresh, 1e-5) # type: ignore

            tensor = gt.zeros((4, 4), gt.tensorargs(1e-3, TensorType.LOWRANK_2D))
            self.assertEqual(tensor._ptr.thresh, 1e-3) # type: ignore

    def test_threads(self) -> None:
        for gt in self.gentensors:
            result = []
            def worker():
                result.append(gt.get_options(OptionType.ACCURACY).thresh)

            with gt.accuracy(thresh=1e-3):
                thread = threading.Thread(target=worker)
                thread.start()
                thread.join()
            self.assertNotEqual(result[0], 1e-3)

if __name__ == '__main__':
    unittest.main()
