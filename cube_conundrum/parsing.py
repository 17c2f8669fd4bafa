"""Parser for the games record format.

One game per line:

    Game <id>: <count> <color>, <count> <color>; <count> <color>, ...

Draws are separated by ``;`` and the dice of a draw by ``,``. Blank lines are
ignored. Parsing stops at the first malformed line and raises ParseError.
"""

import re
from enum import Enum

from cube_conundrum.dice import BagBuilder, Color, Game

U64_MAX = 2 ** 64 - 1

NUMBER_PATTERN = re.compile(r"\+?[0-9]+")


class ErrorKind(Enum):
    MISSING_PARTS = "missing parts"
    TOO_MANY_PARTS = "too many parts"
    BADLY_FORMATTED_TITLE = "badly formatted title"
    BADLY_FORMATTED_DIE = "badly formatted die"
    UNKNOWN_COLOR = "unknown color"


class ParseError(ValueError):

    def __init__(self, kind, line_number=None, line=None):
        self.kind = kind
        self.line_number = line_number
        self.line = line
        super().__init__(str(self))

    def __str__(self):
        if self.line_number is None:
            return self.kind.value
        return "line %d: %s: %r" % (self.line_number, self.kind.value, self.line)


class NumberedGame:

    def __init__(self, id, game):
        self.id = id
        self.game = game

    def is_possible_for(self, bag):
        return self.game.fits_in(bag)

    def get_requirements(self):
        return self.game.minimal_requirements()

    def __eq__(self, other):
        if not isinstance(other, NumberedGame):
            return NotImplemented
        return self.id == other.id and self.game == other.game

    def __repr__(self):
        return "NumberedGame(id=%d, game=%r)" % (self.id, self.game)


def parse_input(text):
    games = []
    for line_number, line in enumerate(text.split("\n"), start=1):
        line = line.strip()
        if not line:
            continue

        try:
            games.append(parse_line(line))
        except ParseError as e:
            raise ParseError(e.kind, line_number, line) from e

    return games


def parse_line(line):
    parts = line.strip().split(":")
    if len(parts) < 2:
        raise ParseError(ErrorKind.MISSING_PARTS)
    if len(parts) > 2:
        raise ParseError(ErrorKind.TOO_MANY_PARTS)

    title, sets = parts
    id = parse_title(title)
    game = parse_game(sets)

    return NumberedGame(id, game)


def parse_title(raw):
    raw = raw.strip()

    if not raw.startswith("Game "):
        raise ParseError(ErrorKind.BADLY_FORMATTED_TITLE)

    # Single spaces only, "Game  1" has an empty token and is rejected.
    parts = raw.split(" ")
    if len(parts) != 2:
        raise ParseError(ErrorKind.BADLY_FORMATTED_TITLE)

    return _parse_count(parts[1], ErrorKind.BADLY_FORMATTED_TITLE)


def parse_game(raw):
    sets = [parse_set(s.strip()) for s in raw.strip().split(";")]
    return Game(sets)


def parse_set(raw):
    bag = BagBuilder()

    for die in raw.split(","):
        bag.with_bag(parse_die(die.strip()))

    return bag.build()


def parse_die(raw):
    parts = raw.split()
    if len(parts) != 2:
        raise ParseError(ErrorKind.BADLY_FORMATTED_DIE)

    count, color = parts
    count = _parse_count(count, ErrorKind.BADLY_FORMATTED_DIE)

    try:
        color = Color.parse(color)
    except ValueError:
        raise ParseError(ErrorKind.UNKNOWN_COLOR) from None

    return BagBuilder().with_dice(color, count).build()


def _parse_count(raw, kind):
    if not NUMBER_PATTERN.fullmatch(raw):
        raise ParseError(kind)

    value = int(raw)
    if value > U64_MAX:
        raise ParseError(kind)
    return value
