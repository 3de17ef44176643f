# main.py
import argparse
import logging

import pygame

from board import WHITE, BLACK
from bot import PlayerKind, make_player
from console import console_human, play_console
from game import MIN_SIZE, MAX_SIZE, DEFAULT_SIZE, run_series, side_seed
from ui import AppUI

log = logging.getLogger(__name__)

KIND_NAMES = [k.value for k in PlayerKind]


def parse_kind(text: str) -> PlayerKind:
    """Имя вида игрока или номер из меню 0..3 (чужой номер - человек)."""
    text = text.strip().lower()
    if text.lstrip("-").isdigit():
        return PlayerKind.from_index(int(text))
    try:
        return PlayerKind(text)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"expected one of {', '.join(KIND_NAMES)} or a number 0..3, got {text!r}") from None


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Nash (Hex) game with random, heuristic and rollout bots")
    parser.add_argument("--size", type=int, default=DEFAULT_SIZE,
                        help=f"Dimension of the board ({MIN_SIZE}..{MAX_SIZE})")
    parser.add_argument("--white", type=parse_kind, default=PlayerKind.HUMAN,
                        help="White player (left-right): human/random/heuristic/rollout or 0..3")
    parser.add_argument("--black", type=parse_kind, default=PlayerKind.HEURISTIC,
                        help="Black player (top-bottom): human/random/heuristic/rollout or 0..3")
    parser.add_argument("--console", action="store_true", help="Play in the terminal instead of a window")
    parser.add_argument("--games", type=int, default=0,
                        help="Run this many bot-vs-bot games and print the score")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the bots' random streams")
    parser.add_argument("--verbose", action="store_true", help="Log every move")
    args = parser.parse_args(argv)

    if not MIN_SIZE <= args.size <= MAX_SIZE:
        parser.error(f"--size must be between {MIN_SIZE} and {MAX_SIZE}")
    if args.games < 0:
        parser.error("--games must not be negative")
    if args.games and PlayerKind.HUMAN in (args.white, args.black):
        parser.error("--games needs two bots, not a human player")
    return args


def create_icon():
    """Иконка: буква N на тёмном фоне"""
    size = 64
    icon = pygame.Surface((size, size), pygame.SRCALPHA)
    icon.fill((30, 30, 35, 255))

    font = pygame.font.SysFont("Arial", size - 20, bold=True)
    text_surface = font.render("N", True, (255, 255, 255))
    text_rect = text_surface.get_rect()
    text_rect.center = (size // 2, size // 2)
    icon.blit(text_surface, text_rect)
    return icon


def run_window(args):
    pygame.init()
    screen = pygame.display.set_mode((800, 600))
    pygame.display.set_caption("Nash")
    pygame.display.set_icon(create_icon())

    kinds = {WHITE: args.white, BLACK: args.black}
    AppUI(screen, size=args.size, kinds=kinds, seed=args.seed).run()


def run_console(args):
    players = {}
    for side, kind in ((WHITE, args.white), (BLACK, args.black)):
        if kind is PlayerKind.HUMAN:
            players[side] = console_human()
        else:
            players[side] = make_player(kind, seed=side_seed(args.seed, side))
    try:
        play_console(players, args.size)
    except (EOFError, KeyboardInterrupt):
        log.info("input closed, game abandoned")
        print()
        print("Game abandoned.")


def run_compare(args):
    white = make_player(args.white, seed=side_seed(args.seed, WHITE))
    black = make_player(args.black, seed=side_seed(args.seed, BLACK))
    res = run_series(white, black, size=args.size, games=args.games)
    print(f"Results after {res.games} games:")
    print(f"Player 1 (White, {args.white.value}) wins: {res.white_wins}")
    print(f"Player 2 (Black, {args.black.value}) wins: {res.black_wins}")
    if res.undecided:
        print(f"No winner: {res.undecided}")


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    log.debug("options: %s", vars(args))

    if args.games:
        run_compare(args)
    elif args.console:
        run_console(args)
    else:
        run_window(args)


if __name__ == "__main__":
    main()
