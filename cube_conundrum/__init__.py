from cube_conundrum.dice import Bag, BagBuilder, Color, Game
from cube_conundrum.parsing import ErrorKind, NumberedGame, ParseError, parse_input

__all__ = [
    "Bag",
    "BagBuilder",
    "Color",
    "ErrorKind",
    "Game",
    "NumberedGame",
    "ParseError",
    "parse_input",
]
