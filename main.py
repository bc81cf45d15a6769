#!/usr/bin/env python3
"""
Minefield - terminal front end.

Usage:
    python main.py play [--preset {easy,medium,hard}] [--seed N]
    python main.py play --width W --height H --mines M
    python main.py presets
"""
import argparse
import logging
import random

from src.minefield import (
    PRESETS,
    ConfigurationError,
    FieldConfig,
    GameState,
    PreconditionViolation,
    Session,
)

HELP_TEXT = "Commands: c X Y (clear), f X Y (flag), n (new game), q (quit)"


def render(session: Session) -> str:
    """Render the field as text, one row per line."""
    field = session.field
    obs = field.get_observation()
    header = "   " + " ".join(f"{x % 10}" for x in range(field.width))
    lines = [header]

    for y in range(field.height):
        row_str = f"{y:>2} "
        for x in range(field.width):
            val = obs[y, x]
            if val == -1:
                row_str += "."
            elif val == -2:
                row_str += "F"
            elif val == 9:
                row_str += "*"
            elif val == 0:
                row_str += " "
            else:
                row_str += str(val)
            row_str += " "
        lines.append(row_str.rstrip())

    return "\n".join(lines)


def render_mines(session: Session) -> str:
    """Render the field with every mine shown, for after a loss."""
    lines = render(session).split("\n")
    for x, y in session.all_mine_coordinates():
        row = list(lines[y + 1])
        row[3 + 2 * x] = "*"
        lines[y + 1] = "".join(row)
    return "\n".join(lines)


def status_line(session: Session) -> str:
    return (
        f"Flags left: {session.flags_left} | "
        f"Time: {session.elapsed_seconds()}s"
    )


def parse_move(line: str):
    """Split a command line into (command, x, y); x and y may be None."""
    parts = line.split()
    if not parts:
        return None, None, None
    command = parts[0].lower()
    if len(parts) != 3:
        return command, None, None
    try:
        return command, int(parts[1]), int(parts[2])
    except ValueError:
        return command, None, None


def play(args: argparse.Namespace) -> None:
    """Run an interactive game in the terminal."""
    if args.width or args.height or args.mines:
        try:
            config = FieldConfig(args.width, args.height, args.mines)
        except ConfigurationError as error:
            print(f"Invalid field: {error}")
            return
    else:
        config = PRESETS[args.preset]

    rng = random.Random(args.seed) if args.seed is not None else None
    session = Session(safe_start=not args.no_safe_start, rng=rng)
    session.on_game_end.append(
        lambda won: print("\n*** WIN! ***" if won else "\n*** LOST (hit mine) ***")
    )
    session.new_game(config)

    print(HELP_TEXT)
    while True:
        print()
        if session.state == GameState.LOST:
            print(render_mines(session))
        else:
            print(render(session))
        print(status_line(session))

        if session.state != GameState.IN_PROGRESS:
            print("Press n for a new game or q to quit.")

        try:
            line = input("> ")
        except EOFError:
            break

        command, x, y = parse_move(line)
        if command == "q":
            break
        if command == "n":
            session.restart()
            continue
        if command not in ("c", "f") or x is None:
            print(HELP_TEXT)
            continue

        try:
            if command == "c":
                session.clear_cell(x, y)
            else:
                session.toggle_flag_cell(x, y)
        except (PreconditionViolation, ConfigurationError) as error:
            print(f"Invalid move: {error}")


def presets(args: argparse.Namespace) -> None:
    """List the preset fields."""
    print(f"{'Preset':<10} {'Width':>6} {'Height':>7} {'Mines':>6}")
    print("-" * 32)
    for name, config in PRESETS.items():
        print(
            f"{name:<10} {config.width:>6} {config.height:>7} "
            f"{config.mine_count:>6}"
        )


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="Minefield - play minesweeper in the terminal"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Show engine debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a game")
    play_parser.add_argument(
        "--preset",
        choices=sorted(PRESETS),
        default="easy",
        help="Preset field size",
    )
    play_parser.add_argument("--width", type=int, default=0, help="Columns")
    play_parser.add_argument("--height", type=int, default=0, help="Rows")
    play_parser.add_argument("--mines", type=int, default=0, help="Mine count")
    play_parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for mine placement"
    )
    play_parser.add_argument(
        "--no-safe-start",
        action="store_true",
        help="Place mines before the first clear",
    )

    # Presets command
    subparsers.add_parser("presets", help="List preset fields")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if args.command == "play":
        play(args)
    elif args.command == "presets":
        presets(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
