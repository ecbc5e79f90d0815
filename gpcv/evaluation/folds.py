# gpcv/evaluation/folds.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Partitions of a dataset into cross-validation folds.

A group indexer is an ordered dict mapping a group key to the array of row
indices held out together. The groups of a valid indexer are non-empty and
partition the rows {0, ..., N-1}: every row belongs to exactly one group.

Strategies build an indexer from a dataset:

- LeaveOneOut: one group per row, keyed by the row index
- LeaveOneGroupOut: one group per distinct key returned by a grouper
- KFold: n_splits shuffled groups whose sizes differ by at most one
"""
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

import gpcv.num as gnp
from gpcv.core.dataset import RegressionDataset
from gpcv.exceptions import InvalidArgument

GroupIndexer = Dict[Any, gnp.ndarray]


def dataset_size_from_indexer(indexer: GroupIndexer) -> int:
    return int(sum(len(idx) for idx in indexer.values()))


def _as_index_array(key, idx) -> gnp.ndarray:
    raw = gnp.asarray(idx)
    if raw.dtype.kind not in "iuf" or not gnp.array_equal(raw, gnp.asint(raw)):
        raise InvalidArgument(f"Group {key!r} must hold integer row indices")
    return gnp.asint(raw)


def check_indexer(indexer: GroupIndexer, n: Optional[int] = None) -> None:
    """Raise InvalidArgument unless `indexer` partitions {0, ..., n-1}."""
    if len(indexer) == 0:
        raise InvalidArgument("A group indexer needs at least one group")
    groups = []
    for key, idx in indexer.items():
        idx = _as_index_array(key, idx)
        if idx.ndim != 1 or idx.shape[0] == 0:
            raise InvalidArgument(f"Group {key!r} must be a non-empty 1D index array")
        groups.append(idx)
    all_indices = gnp.sort(gnp.concatenate(groups))
    if n is None:
        n = all_indices.shape[0]
    if all_indices.shape[0] != n or not gnp.array_equal(all_indices, gnp.arange(n)):
        raise InvalidArgument(
            f"The groups of the indexer do not partition the {n} rows of the dataset"
        )


def _as_indexer(indexer) -> GroupIndexer:
    return OrderedDict(
        (key, _as_index_array(key, idx).reshape(-1)) for key, idx in indexer.items()
    )


class LeaveOneOut:
    """One fold per row."""

    def indexer(self, dataset: RegressionDataset) -> GroupIndexer:
        return OrderedDict((i, gnp.asint([i])) for i in range(len(dataset)))

    def __repr__(self):
        return "LeaveOneOut()"


class LeaveOneGroupOut:
    """One fold per group of rows sharing a key.

    Parameters
    ----------
    grouper : callable or sequence
        Either a function mapping a feature to its group key, or a sequence
        of keys, one per row. Groups are ordered by first appearance.
    """

    def __init__(self, grouper: Union[Callable[[Any], Any], Sequence[Any]]):
        self.grouper = grouper

    def __repr__(self):
        return f"LeaveOneGroupOut({self.grouper!r})"

    def _keys(self, dataset):
        if callable(self.grouper):
            return [self.grouper(feature) for feature in dataset.features]
        keys = list(self.grouper)
        if len(keys) != len(dataset):
            raise InvalidArgument(
                f"Expected one group key per row ({len(dataset)}), got {len(keys)}"
            )
        return keys

    def indexer(self, dataset: RegressionDataset) -> GroupIndexer:
        groups: Dict[Any, List[int]] = OrderedDict()
        for i, key in enumerate(self._keys(dataset)):
            groups.setdefault(key, []).append(i)
        return OrderedDict((key, gnp.asint(rows)) for key, rows in groups.items())


class KFold:
    """Shuffled k-fold partition, folds keyed 0, ..., n_splits - 1.

    With seed=None every call to `indexer` draws a new partition from the
    global generator. The Tuner therefore requires a seed.
    """

    def __init__(self, n_splits: int = 5, seed: Optional[int] = None):
        if int(n_splits) != n_splits or n_splits < 2:
            raise InvalidArgument(f"n_splits must be an integer >= 2, got {n_splits}")
        self.n_splits = int(n_splits)
        self.seed = seed

    def __repr__(self):
        return f"KFold(n_splits={self.n_splits}, seed={self.seed})"

    def indexer(self, dataset: RegressionDataset) -> GroupIndexer:
        n = len(dataset)
        if self.n_splits > n:
            raise InvalidArgument(
                f"Cannot split {n} rows into {self.n_splits} non-empty folds"
            )
        if self.seed is not None:
            gnp.set_seed(self.seed)

        idx = gnp.permutation(n)
        base, r = divmod(n, self.n_splits)
        sizes = gnp.concatenate(
            [
                gnp.full((r,), base + 1, dtype=int),
                gnp.full((self.n_splits - r,), base, dtype=int),
            ]
        )
        bounds = gnp.cumsum(sizes, axis=0)[:-1]
        return OrderedDict(
            (k, gnp.sort(fold)) for k, fold in enumerate(gnp.split(idx, bounds))
        )


@dataclass(frozen=True)
class RegressionFold:
    """Held-out group `name`: the training rows and the test rows."""

    name: Any
    train_dataset: RegressionDataset
    test_dataset: RegressionDataset
    test_indices: gnp.ndarray


def folds_from_indexer(
    dataset: RegressionDataset, indexer: GroupIndexer
) -> List[RegressionFold]:
    """Build one fold per group, in indexer key order.

    Training rows keep their original relative order.
    """
    indexer = _as_indexer(indexer)
    n = len(dataset)
    check_indexer(indexer, n)
    folds = []
    for key, test_indices in indexer.items():
        mask = gnp.ones((n,), dtype=bool)
        mask[test_indices] = False
        train_indices = gnp.arange(n)[mask]
        folds.append(
            RegressionFold(
                key,
                dataset.subset(train_indices),
                dataset.subset(test_indices),
                gnp.readonly(test_indices),
            )
        )
    return folds
