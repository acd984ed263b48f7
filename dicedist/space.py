"""
The possibility space of a pool of dice.

A space maps every distinguishable outcome vector (a sorted tuple of die
faces once combined) to the number of ways it can be rolled. Nothing is
summed here, that only happens when the space collapses into a
dicedist.dist.Distribution.
"""
import collections
import collections.abc

from dicedist.util import ReprMixin


def _merge(pairs):
    """
    Aggregate (outcome, amount) pairs, summing amounts of equal outcomes.

    Returns:
        A new PossibilitySpace.
    """
    merged = collections.defaultdict(int)
    for outcome, amount in pairs:
        merged[outcome] += amount

    return PossibilitySpace(merged)


class PossibilitySpace(ReprMixin, collections.abc.Mapping):
    """
    Immutable mapping of outcome vector -> multiplicity.

    Attributes:
        outcomes: The underlying dict, keys are tuples of ints.
    """
    _repr_keys = ['outcomes']

    def __init__(self, outcomes=None):
        self.outcomes = {}
        for outcome, amount in (outcomes or {}).items():
            if amount > 0:
                self.outcomes[tuple(outcome)] = amount

    @classmethod
    def empty(cls):
        """ The empty space, seed for folds. """
        return cls()

    @classmethod
    def die(cls, faces):
        """
        A single die with faces numbered [1, faces].
        """
        return cls({(face,): 1 for face in range(1, faces + 1)})

    def __getitem__(self, key):
        return self.outcomes[tuple(key)]

    def __iter__(self):
        return iter(self.outcomes)

    def __len__(self):
        return len(self.outcomes)

    def __eq__(self, other):
        if isinstance(other, PossibilitySpace):
            return self.outcomes == other.outcomes
        if isinstance(other, collections.abc.Mapping):
            return self.outcomes == {tuple(key): val for key, val in other.items()}

        return NotImplemented

    def __hash__(self):
        return hash(frozenset(self.outcomes.items()))

    def __add__(self, other):
        """
        Cartesian product of two independent pools.

        Every pair of outcomes is concatenated and sorted, amounts multiply.
        An empty left hand side returns other unchanged.
        """
        if not isinstance(other, PossibilitySpace):
            return NotImplemented
        if not self.outcomes:
            return other

        return _merge((tuple(sorted(left + right)), l_amount * r_amount)
                      for left, l_amount in self.outcomes.items()
                      for right, r_amount in other.outcomes.items())

    def total(self):
        """ Total mass, the number of ways to roll anything. """
        return sum(self.outcomes.values())

    def multiply(self, num):
        """
        Roll this same pool num times together.

        Returns:
            A new space, empty when num is 0.
        """
        acc = PossibilitySpace.empty()
        for _ in range(num):
            acc = acc + self

        return acc

    def keep_highest(self, num):
        """ Keep only the num highest faces of every outcome. """
        return _merge((tuple(sorted(outcome)[-num:]) if num else (), amount)
                      for outcome, amount in self.outcomes.items())

    def keep_lowest(self, num):
        """ Keep only the num lowest faces of every outcome. """
        return _merge((tuple(sorted(outcome)[:num]), amount)
                      for outcome, amount in self.outcomes.items())

    def count_successes(self, threshold):
        """
        Replace every outcome by the count of faces strictly above threshold.
        """
        return _merge(((sum(1 for face in outcome if face > threshold),), amount)
                      for outcome, amount in self.outcomes.items())


def die(faces):
    """ Shortcut for PossibilitySpace.die. """
    return PossibilitySpace.die(faces)
