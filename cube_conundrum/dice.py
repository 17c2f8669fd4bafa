from enum import Enum


class Color(Enum):
    # ordered in red, green, blue cubes
    RED = "red"
    GREEN = "green"
    BLUE = "blue"

    @classmethod
    def parse(cls, raw):
        """Parse a color name, ignoring case and surrounding whitespace."""
        name = raw.lower().strip()
        for color in cls:
            if color.value == name:
                return color
        raise ValueError("unknown color: %r" % raw)


class Bag:
    """An immutable count of cubes per color.

    A color missing from the bag counts as zero cubes. Bags are only built
    through BagBuilder and compare equal whenever they hold the same counts.
    """

    __slots__ = ("_dice",)

    def __init__(self, dice=None):
        self._dice = dict(dice or {})

    def count(self, color):
        return self._dice.get(color, 0)

    def can_contain(self, other):
        for color, needed in other:
            if needed > self.count(color):
                return False

        return True

    def power(self):
        result = 1
        for count in self._dice.values():
            result *= count
        return result

    def as_counts(self):
        return [self.count(color) for color in Color]

    def __iter__(self):
        return iter(self._dice.items())

    def __len__(self):
        return len(self._dice)

    def __contains__(self, color):
        return color in self._dice

    def __eq__(self, other):
        if not isinstance(other, Bag):
            return NotImplemented
        return self._dice == other._dice

    def __hash__(self):
        return hash(frozenset(self._dice.items()))

    def __repr__(self):
        dice = ", ".join(
            "%d %s" % (self._dice[color], color.value)
            for color in Color if color in self._dice
        )
        return "Bag(%s)" % dice


class BagBuilder:
    """Staging area for a Bag. Setting a color twice keeps the last count."""

    def __init__(self):
        self._dice = {}

    def with_dice(self, color, count):
        self._dice[color] = count
        return self

    def with_bag(self, other):
        for color, count in other:
            self.with_dice(color, count)
        return self

    def with_bag_keeping_max(self, other):
        for color, count in other:
            self.with_dice(color, max(count, self._dice.get(color, 0)))
        return self

    def build(self):
        return Bag(self._dice)


class Game:

    def __init__(self, sets):
        self.sets = tuple(sets)

    def fits_in(self, bag):
        return all(bag.can_contain(s) for s in self.sets)

    def minimal_requirements(self):
        # Smallest bag containing every draw: the max count seen per color.
        builder = BagBuilder()
        for s in self.sets:
            builder.with_bag_keeping_max(s)
        return builder.build()

    def __eq__(self, other):
        if not isinstance(other, Game):
            return NotImplemented
        return self.sets == other.sets

    def __hash__(self):
        return hash(self.sets)

    def __repr__(self):
        return "Game(%r)" % (list(self.sets),)
