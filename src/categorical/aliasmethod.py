"""Vose's alias method over exact rationals.

A table is built once in O(n) from a sequence of non-negative weights and
then supports O(1) draws: pick a slot uniformly at random, then flip a
coin biased by that slot's threshold to decide between the slot itself and
its alias.

See http://www.keithschwarz.com/darts-dice-coins/ for details.
"""

import logging
import math
from fractions import Fraction
from numbers import Real

from pyrsistent import pvector
from sympy import Rational

log = logging.getLogger(__name__)


class InvalidWeight(ValueError):
    pass


def exact_weight(weight):
    """Convert a single weight to a sympy Rational, rejecting anything that
    cannot be a probability mass."""
    if not isinstance(weight, Real):
        raise TypeError("Weight %r is not a real number" % (weight,))
    if isinstance(weight, float) and not math.isfinite(weight):
        raise InvalidWeight("Weight %r is not finite" % (weight,))
    result = Rational(weight)
    if result < 0:
        raise InvalidWeight("Weight %r is negative" % (weight,))
    return result


class VoseAliasTable(object):
    """An immutable alias table for a weighted distribution over the
    indices 0..n-1.

    Slot i keeps its own index with probability thresholds[i] and otherwise
    defers to aliases[i]. A slot whose threshold is 1 never defers and has
    no alias.
    """

    def __init__(self, weights=()):
        weights = [exact_weight(w) for w in weights]
        n = len(weights)

        thresholds = [Rational(1)] * n
        aliases = [None] * n

        if n > 0:
            total = sum(weights)
            if total == 0:
                raise InvalidWeight(
                    "Weights %r sum to zero" % (weights,))

            ps = [w / total * n for w in weights]

            small = []
            large = []
            for i, p in enumerate(ps):
                if p < 1:
                    small.append(i)
                else:
                    large.append(i)

            steps = 0
            while small:
                l = small.pop()
                g = large.pop()
                assert ps[g] >= 1 > ps[l]
                thresholds[l] = ps[l]
                aliases[l] = g
                ps[g] -= 1 - ps[l]
                if ps[g] < 1:
                    small.append(g)
                else:
                    large.append(g)
                steps += 1

            log.debug(
                "Built alias table over %d outcomes in %d pairing steps",
                n, steps)

        self.__thresholds = pvector(thresholds)
        self.__aliases = pvector(aliases)
        # Fraction copies of the thresholds for the coin flip. Unlike sympy,
        # which rounds a Rational to the float's precision before comparing,
        # Fraction compares against floats exactly, and far faster.
        self.__coins = tuple(Fraction(int(p.p), int(p.q)) for p in thresholds)

    @property
    def thresholds(self):
        return self.__thresholds

    @property
    def aliases(self):
        return self.__aliases

    def __len__(self):
        return len(self.__thresholds)

    def sample(self, random):
        """Draw one index using random.randint and random.random exactly
        once each. Returns None for an empty table."""
        n = len(self.__thresholds)
        if n == 0:
            return None

        i = random.randint(0, n - 1)
        u = random.random()
        p = self.__coins[i]

        # A zero threshold must never keep its slot, even when u == 0.0.
        if p > 0 and u <= p:
            return i
        else:
            return self.__aliases[i]

    def probabilities(self):
        """Recover the normalized probability of every index from the table.

        This redistributes each slot's deferred mass onto its alias, so it
        costs O(n) on every call. The original weights are not retained.
        """
        n = len(self.__thresholds)
        mass = list(self.__thresholds)
        for p, a in zip(self.__thresholds, self.__aliases):
            if a is not None:
                mass[a] += 1 - p
        return [m / n for m in mass]

    def __eq__(self, other):
        if self is other:
            return True
        if not isinstance(other, VoseAliasTable):
            return NotImplemented
        return (
            self.__thresholds == other.__thresholds and
            self.__aliases == other.__aliases
        )

    def __hash__(self):
        return hash((self.__thresholds, self.__aliases))

    def __repr__(self):
        return 'VoseAliasTable(%r)' % (
            list(zip(
                range(len(self.__thresholds)),
                self.__thresholds, self.__aliases)),)
