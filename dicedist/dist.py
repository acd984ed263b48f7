"""
Aggregated distributions, the final form of any evaluated expression.

A Distribution maps an integer result to the number of ways to get it.
Distributions combine by convolution (+, -) or by mapping a function
over every key (mutate).
"""
import collections
import collections.abc

import numpy as np

from dicedist.util import ReprMixin


def _merge(pairs):
    """
    Aggregate (key, amount) pairs, summing amounts of equal keys.

    Returns:
        A new Distribution.
    """
    merged = collections.defaultdict(int)
    for key, amount in pairs:
        merged[key] += amount

    return Distribution(merged)


class Distribution(ReprMixin, collections.abc.Mapping):
    """
    Immutable mapping of result -> multiplicity.

    Attributes:
        counts: The underlying dict of int -> int.
    """
    _repr_keys = ['counts']

    def __init__(self, values=None):
        self.counts = {}
        for key, amount in (values or {}).items():
            if amount > 0:
                self.counts[int(key)] = amount

    @classmethod
    def constant(cls, value):
        """ A certain result, one way to get value. """
        return cls({value: 1})

    @classmethod
    def from_space(cls, space):
        """
        Collapse a PossibilitySpace by summing every outcome vector.
        """
        return _merge((sum(outcome), amount) for outcome, amount in space.items())

    def __getitem__(self, key):
        return self.counts[key]

    def __iter__(self):
        return iter(self.counts)

    def __len__(self):
        return len(self.counts)

    def __eq__(self, other):
        if isinstance(other, Distribution):
            return self.counts == other.counts
        if isinstance(other, collections.abc.Mapping):
            return self.counts == dict(other)

        return NotImplemented

    def __hash__(self):
        return hash(frozenset(self.counts.items()))

    def _convolve(self, other, func):
        if not isinstance(other, Distribution):
            return NotImplemented
        if not self.counts:
            return other

        return _merge((func(l_key, r_key), l_amount * r_amount)
                      for l_key, l_amount in self.counts.items()
                      for r_key, r_amount in other.counts.items())

    def __add__(self, other):
        """ Distribution of the sum of two independent results. """
        return self._convolve(other, lambda left, right: left + right)

    def __sub__(self, other):
        """ Distribution of the difference of two independent results. """
        return self._convolve(other, lambda left, right: left - right)

    def mutate(self, func):
        """
        Apply func to every result, merging results that collide.

        Args:
            func: A callable int -> int.
        """
        return _merge((func(key), amount) for key, amount in self.counts.items())

    def total(self):
        """ Total number of ways, the sum of all multiplicities. """
        return sum(self.counts.values())

    def min(self):
        return min(self.counts)

    def max(self):
        return max(self.counts)

    def to_dict(self):
        """ A plain dict sorted by result, for export. """
        return {key: self.counts[key] for key in sorted(self.counts)}

    def probabilities(self):
        """
        Returns:
            A dict of result -> probability in [0, 1], sorted by result.
        """
        total = self.total()
        return {key: amount / total for key, amount in self.to_dict().items()}

    def _arrays(self):
        probs = self.probabilities()
        return np.array(list(probs.keys()), dtype=float), np.array(list(probs.values()))

    def mean(self):
        """ Expected value of the result. """
        keys, weights = self._arrays()
        return float(np.average(keys, weights=weights))

    def var(self):
        """ Variance of the result. """
        keys, weights = self._arrays()
        mean = np.average(keys, weights=weights)
        return float(np.average((keys - mean) ** 2, weights=weights))

    def stdev(self):
        """ Standard deviation of the result. """
        return float(np.sqrt(self.var()))
