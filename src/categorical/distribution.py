import logging
from collections.abc import Mapping
from random import Random

from pyrsistent import pvector

from categorical.aliasmethod import VoseAliasTable

log = logging.getLogger(__name__)

# Used whenever a caller does not supply their own source of randomness.
# Callers sharing it across threads are responsible for synchronising it.
default_random = Random()


class CategoricalDistribution(object):
    """Draws labelled values from a categorical distribution in constant
    time.

    Weights may be given as a sequence, optionally with a parallel sequence
    of labels (defaulting to the positions 0..n-1), or as a mapping from
    label to weight, in which case the mapping's iteration order fixes the
    label order. Weights need not sum to one and are normalized exactly.

        >>> CategoricalDistribution([2, 4]).probabilities()
        {0: 1/3, 1: 2/3}
        >>> CategoricalDistribution({'a': 1, 'b': 2, 'c': 3}).probabilities()
        {'a': 1/6, 'b': 1/3, 'c': 1/2}

    Raises InvalidWeight if any weight is negative or if a non-empty set of
    weights sums to zero.
    """

    def __init__(self, weights=(), labels=None):
        if isinstance(weights, Mapping):
            if labels is not None:
                raise ValueError(
                    "Cannot pass labels alongside a mapping of weights")
            labels = list(weights.keys())
            weights = list(weights.values())
        else:
            weights = list(weights)
            if labels is None:
                labels = range(len(weights))
            labels = list(labels)
            if len(labels) != len(weights):
                raise ValueError(
                    "Got %d labels for %d weights" % (
                        len(labels), len(weights)))
            if len(set(labels)) != len(labels):
                raise ValueError("Labels %r are not distinct" % (labels,))

        self.__labels = pvector(labels)
        self.__table = VoseAliasTable(weights)
        log.debug("Constructed distribution over %d labels", len(labels))

    @classmethod
    def from_weights(cls, weights, labels=None):
        if isinstance(weights, Mapping):
            raise TypeError(
                "Use from_mapping for a mapping of label to weight")
        return cls(weights, labels)

    @classmethod
    def from_mapping(cls, mapping):
        if not isinstance(mapping, Mapping):
            raise TypeError("Expected a mapping but got %r" % (mapping,))
        return cls(mapping)

    @property
    def labels(self):
        return self.__labels

    @property
    def table(self):
        return self.__table

    def sample(self, random=None):
        """Return a single label, or None if the distribution is empty."""
        if random is None:
            random = default_random
        i = self.__table.sample(random)
        if i is None:
            return None
        return self.__labels[i]

    def draw(self, random=None):
        """Repeatedly draw from the distribution and yield the results.

        The generator never finishes on its own unless the distribution is
        empty, so consumers are expected to stop it themselves.
        """
        if random is None:
            random = default_random
        if self.is_empty():
            return
        while True:
            yield self.__labels[self.__table.sample(random)]

    def probabilities(self):
        """Map every label to its exact probability as a sympy Rational.

        These are recomputed from the alias table on each call rather than
        stored alongside it.
        """
        return dict(zip(self.__labels, self.__table.probabilities()))

    def structural_equals(self, other):
        """A stricter and cheaper comparison than ==, which holds only if
        both distributions have identical labels and alias tables."""
        if self is other:
            return True
        return (
            isinstance(other, CategoricalDistribution) and
            self.__labels == other.__labels and
            self.__table == other.__table
        )

    def is_empty(self):
        return len(self.__labels) == 0

    def __len__(self):
        return len(self.__labels)

    def __eq__(self, other):
        if self is other:
            return True
        if not isinstance(other, CategoricalDistribution):
            return NotImplemented
        return self.probabilities() == other.probabilities()

    def __hash__(self):
        return hash(frozenset(self.probabilities().items()))

    def __str__(self):
        return str(self.probabilities())

    def __repr__(self):
        return 'CategoricalDistribution(%r)' % (self.probabilities(),)
