import unittest
from collections import OrderedDict

import gpcv.num as gnp
from gpcv.core import RegressionDataset
from gpcv.evaluation import (
    KFold,
    LeaveOneGroupOut,
    LeaveOneOut,
    check_indexer,
    dataset_size_from_indexer,
    folds_from_indexer,
)
from gpcv.exceptions import InvalidArgument


def make_dataset(n=7):
    x = gnp.arange(n).astype(float)
    return RegressionDataset(x, 10.0 + x, {"name": "ramp"})


def covered_rows(folds):
    return sorted(int(i) for fold in folds for i in fold.test_indices)


class TestIndexer(unittest.TestCase):
    def test_check_indexer(self):
        check_indexer({"a": [0, 2], "b": [1]}, 3)
        with self.assertRaises(InvalidArgument):
            check_indexer({"a": [0, 1], "b": [1, 2]}, 3)
        with self.assertRaises(InvalidArgument):
            check_indexer({"a": [0, 1]}, 3)
        with self.assertRaises(InvalidArgument):
            check_indexer({"a": [0, 1, 2], "b": []}, 3)
        with self.assertRaises(InvalidArgument):
            check_indexer({}, 0)
        with self.assertRaises(InvalidArgument):
            check_indexer({"a": [0.7, 1.0], "b": [2]}, 3)
        with self.assertRaises(InvalidArgument):
            folds_from_indexer(make_dataset(3), {"a": [0.7], "b": [1, 2]})
        check_indexer({"a": [0.0, 2.0], "b": [1]}, 3)

    def test_dataset_size_from_indexer(self):
        self.assertEqual(dataset_size_from_indexer({"a": [0, 2], "b": [1]}), 3)


class TestStrategies(unittest.TestCase):
    def test_leave_one_out(self):
        ds = make_dataset()
        folds = folds_from_indexer(ds, LeaveOneOut().indexer(ds))
        self.assertEqual(len(folds), len(ds))
        for i, fold in enumerate(folds):
            self.assertEqual(fold.name, i)
            self.assertEqual(len(fold.test_dataset), 1)
            self.assertEqual(len(fold.train_dataset), len(ds) - 1)
            self.assertEqual(fold.test_dataset.metadata, ds.metadata)
        self.assertEqual(covered_rows(folds), list(range(len(ds))))

    def test_leave_one_group_out_with_keys(self):
        ds = make_dataset(6)
        indexer = LeaveOneGroupOut(["b", "a", "b", "c", "a", "b"]).indexer(ds)
        self.assertEqual(list(indexer), ["b", "a", "c"])
        self.assertEqual(list(indexer["b"]), [0, 2, 5])
        folds = folds_from_indexer(ds, indexer)
        self.assertEqual(covered_rows(folds), list(range(6)))
        self.assertTrue(gnp.allclose(folds[0].train_dataset.features, [1.0, 3.0, 4.0]))

    def test_leave_one_group_out_with_callable(self):
        ds = make_dataset(6)
        indexer = LeaveOneGroupOut(lambda x: int(x) % 2).indexer(ds)
        self.assertEqual(list(indexer), [0, 1])
        self.assertEqual(list(indexer[1]), [1, 3, 5])

    def test_leave_one_group_out_wrong_length(self):
        with self.assertRaises(InvalidArgument):
            LeaveOneGroupOut([0, 1]).indexer(make_dataset(3))

    def test_kfold(self):
        ds = make_dataset(11)
        indexer = KFold(3, seed=0).indexer(ds)
        sizes = sorted(len(idx) for idx in indexer.values())
        self.assertEqual(sizes, [3, 4, 4])
        check_indexer(indexer, 11)
        again = KFold(3, seed=0).indexer(ds)
        for key in indexer:
            self.assertTrue(gnp.array_equal(indexer[key], again[key]))
        with self.assertRaises(InvalidArgument):
            KFold(12).indexer(ds)
        with self.assertRaises(InvalidArgument):
            KFold(1)

    def test_folds_from_invalid_indexer(self):
        ds = make_dataset(4)
        with self.assertRaises(InvalidArgument):
            folds_from_indexer(ds, OrderedDict([("a", [0, 1]), ("b", [2])]))


if __name__ == "__main__":
    unittest.main()
