import torch

import argparse
import logging

from cube_conundrum.dice import BagBuilder, Color
from cube_conundrum.parsing import ParseError, parse_input

logger = logging.getLogger(__name__)

INT64_MAX = torch.iinfo(torch.int64).max

# log2 of the largest power trusted from torch.prod, with headroom for float error.
POWER_BITS_LIMIT = 62


def non_negative_int(raw):
    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError("invalid int value: %r" % raw) from None
    if value < 0:
        raise argparse.ArgumentTypeError("must be non-negative: %r" % raw)
    return value


# Instantiate the parser
parser = argparse.ArgumentParser(description='Sum up cube game records.')

# Required positional argument
parser.add_argument('filename', type=str,
                    help='games record file.')
parser.add_argument('--part', type=int, choices=[1, 2],
                    help='only print the result of this part.')
parser.add_argument('--red', type=non_negative_int, default=12,
                    help='red cubes in the reference bag.')
parser.add_argument('--green', type=non_negative_int, default=13,
                    help='green cubes in the reference bag.')
parser.add_argument('--blue', type=non_negative_int, default=14,
                    help='blue cubes in the reference bag.')
parser.add_argument('-v', '--verbose', action='store_true',
                    help='enable debug logging.')

REFERENCE_BAG = (
    BagBuilder()
    .with_dice(Color.RED, 12)
    .with_dice(Color.GREEN, 13)
    .with_dice(Color.BLUE, 14)
    .build()
)


def pack_draws(games):
    """Pack every draw into a [games, longest_game, 3] tensor of counts.

    Games with fewer draws are padded with empty draws which always fit.
    """
    cube_counts = [[s.as_counts() for s in game.game.sets] for game in games]
    longest_game = max((len(sets) for sets in cube_counts), default=0)

    # add padding games which always succeed so all are the right length.
    cube_counts = [sets + [[0, 0, 0] for _ in range(longest_game - len(sets))] for sets in cube_counts]

    # reshape keeps the color dim when there is nothing to pack.
    return torch.tensor(cube_counts, dtype=torch.int64).reshape(len(games), longest_game, len(Color))


def pack_requirements(games):
    """Return the per game max count of each color and a mask of colors drawn at all."""
    cube_counts = pack_draws(games)

    if cube_counts.shape[1] == 0:
        min_cubes_per_game = torch.zeros((len(games), len(Color)), dtype=torch.int64)
    else:
        min_cubes_per_game, _ = torch.max(cube_counts, dim=-2)

    present = torch.tensor(
        [[any(color in s for s in game.game.sets) for color in Color] for game in games],
        dtype=torch.bool,
    ).reshape(len(games), len(Color))

    return min_cubes_per_game, present


def fits_in_tensors(games):
    """True when every id and cube count can be packed into int64 tensors."""
    return all(
        game.id <= INT64_MAX and all(count <= INT64_MAX for s in game.game.sets for _, count in s)
        for game in games
    )


def sum_of_possible_ids(games, bag=REFERENCE_BAG):
    if not fits_in_tensors(games) or sum(game.id for game in games) > INT64_MAX:
        logger.debug("Values exceed int64, checking games one by one")
        return sum(game.id for game in games if game.is_possible_for(bag))

    cube_counts = pack_draws(games)

    # Every packed draw is at most INT64_MAX, so clamping the bag changes no comparison.
    bag_counts = torch.tensor([min(count, INT64_MAX) for count in bag.as_counts()], dtype=torch.int64)

    # Now check which subgames violated the limits by first reducing the subgame dims, then game dim.
    is_valid = cube_counts <= bag_counts

    is_valid = torch.all(is_valid, dim=-1)
    is_valid = torch.all(is_valid, dim=-1)

    # Now multiply by game id.
    game_ids = torch.tensor([game.id for game in games], dtype=torch.int64)

    return int(torch.sum(is_valid * game_ids))


def minimum_powers(games):
    if not fits_in_tensors(games):
        logger.debug("Values exceed int64, computing powers one by one")
        return [game.get_requirements().power() for game in games]

    min_cubes_per_game, present = pack_requirements(games)

    # Colors never drawn are left out of the product rather than zeroing it.
    min_cubes_per_game = torch.where(present, min_cubes_per_game, torch.ones_like(min_cubes_per_game))

    powers = torch.prod(min_cubes_per_game, dim=-1).tolist()

    # Products that may have wrapped around int64 are redone with python ints.
    bits = torch.sum(torch.log2(min_cubes_per_game.clamp(min=1).to(torch.float64)), dim=-1)
    for i in torch.nonzero(bits >= POWER_BITS_LIMIT).flatten().tolist():
        powers[i] = games[i].get_requirements().power()

    return powers


def sum_of_minimum_powers(games):
    return sum(minimum_powers(games))


def main(args):
    if len(args.filename) == 0:
        parser.error("must supply a games record filename.")

    bag = (
        BagBuilder()
        .with_dice(Color.RED, args.red)
        .with_dice(Color.GREEN, args.green)
        .with_dice(Color.BLUE, args.blue)
        .build()
    )

    logger.debug("Reading games from %s", args.filename)
    with open(args.filename) as file:
        text = file.read()

    try:
        games = parse_input(text)
    except ParseError as e:
        parser.error("%s: %s" % (args.filename, e))

    logger.info("Parsed %d games", len(games))

    if args.part in (None, 1):
        logger.debug("Checking games against %r", bag)
        print("sum_of_idx:", sum_of_possible_ids(games, bag))

    # Part 2, powers of cubes.
    if args.part in (None, 2):
        print("sum_of_min_cubes_powers:", sum_of_minimum_powers(games))


def run():
    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    main(args)


if __name__ == "__main__":
    run()
