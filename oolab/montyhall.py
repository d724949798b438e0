"""The Monty Hall game: a host opens empty doors and the player may switch."""

from __future__ import annotations

import argparse
import random
import sys
from typing import Optional, Sequence, TextIO

__all__ = [
    "DEFAULT_DOORS",
    "DEFAULT_GAMES",
    "Doors",
    "Host",
    "Player",
    "Game",
    "simulate",
    "main",
]

DEFAULT_DOORS = 3
DEFAULT_GAMES = 10000
MAIN_DOORS = 52


class Doors:
    """A row of doors, one hiding a car, each of which may be open or selected.

    Messages describing each action go to ``out``; with ``out`` left as None
    the doors stay silent.
    """

    def __init__(
        self,
        num_doors: int = DEFAULT_DOORS,
        rng: Optional[random.Random] = None,
        out: Optional[TextIO] = None,
    ):
        if num_doors < 2:
            raise ValueError(f"a game needs at least two doors, got {num_doors}")
        self.num_doors = num_doors
        self.rng = rng if rng is not None else random.Random()
        self.out = out
        self.has_car = [False] * num_doors
        self.is_open = [False] * num_doors
        self.is_selected = [False] * num_doors

    def _say(self, message: str) -> None:
        if self.out is not None:
            print(message, file=self.out)

    def _check(self, index: int) -> None:
        if not 0 <= index < self.num_doors:
            raise IndexError(f"door {index} out of range")

    def reset(self) -> None:
        """Close and deselect every door, then hide a car behind a random one."""
        self.has_car = [False] * self.num_doors
        self.is_open = [False] * self.num_doors
        self.is_selected = [False] * self.num_doors
        self.add_random_car()

    def add_random_car(self) -> int:
        """Hide a car behind a random door and return its index."""
        index = self.rng.randrange(self.num_doors)
        self.has_car[index] = True
        self._say(f"Adding car behind door {index}")
        return index

    def open_door(self, index: int) -> None:
        """Open door ``index``."""
        self._check(index)
        self._say(f"Opening door {index}")
        self.is_open[index] = True

    def select_door(self, index: int) -> None:
        """Mark door ``index`` as selected."""
        self._check(index)
        self._say(f"Selecting door {index}")
        self.is_selected[index] = True

    def change_selection(self) -> int:
        """Move the selection to the last door that is neither open nor selected.

        Returns the newly selected index; raises RuntimeError if there is none.
        """
        current = 0
        candidate: Optional[int] = None
        for index, (selected, opened) in enumerate(zip(self.is_selected, self.is_open)):
            if selected:
                current = index
            elif not opened:
                candidate = index
        if candidate is None:
            raise RuntimeError("no closed, unselected door to change to")
        self.is_selected[current] = False
        self.is_selected[candidate] = True
        return candidate

    def selected_index(self) -> int:
        """Return the index of the first selected door; raise LookupError if none is."""
        try:
            return self.is_selected.index(True)
        except ValueError:
            raise LookupError("no door is selected") from None


class _Person:
    def __init__(self, doors: Optional[Doors] = None):
        self._doors = doors

    @property
    def doors(self) -> Doors:
        """The doors this person acts on."""
        if self._doors is None:
            raise RuntimeError(f"{type(self).__name__} has no doors to act on")
        return self._doors

    @doors.setter
    def doors(self, doors: Doors) -> None:
        self._doors = doors


class Host(_Person):
    """Knows where the car is and opens every empty door but one."""

    def open_empty(self) -> int:
        """Open doors that are neither selected nor hiding the car, leaving two closed.

        Returns the number opened; raises RuntimeError if it cannot open enough.
        """
        doors = self.doors
        target = doors.num_doors - 2
        opened = 0
        for index in range(doors.num_doors):
            if opened >= target:
                break
            if not doors.is_selected[index] and not doors.has_car[index]:
                doors.open_door(index)
                opened += 1
        if opened != target:
            raise RuntimeError(f"host opened {opened} doors, expected {target}")
        return opened


class Player(_Person):
    """Picks a random door first, then switches or not according to ``switch``."""

    def __init__(
        self,
        doors: Optional[Doors] = None,
        rng: Optional[random.Random] = None,
        switch: bool = True,
    ):
        super().__init__(doors)
        self.rng = rng if rng is not None else random.Random()
        self.switch = switch

    def choose_first_door(self) -> int:
        """Select a random door and return its index."""
        doors = self.doors
        index = self.rng.randrange(doors.num_doors)
        doors.select_door(index)
        return index

    def choose_to_change(self) -> bool:
        """Whether the player switches doors after the host has opened some."""
        return self.switch


class Game:
    """One player and one host playing repeated rounds on a shared set of doors.

    Commentary goes to ``out``; with ``out`` left as None the game is silent.
    """

    def __init__(
        self,
        player: Player,
        num_doors: int = DEFAULT_DOORS,
        rng: Optional[random.Random] = None,
        out: Optional[TextIO] = None,
    ):
        self.out = out
        self.doors = Doors(num_doors, rng, out)
        self.player = player
        self.player.doors = self.doors
        self.host = Host(self.doors)

    def _say(self, message: str) -> None:
        if self.out is not None:
            print(message, file=self.out)

    def run(self) -> bool:
        """Play one round and return whether the player wins the car."""
        self.doors.reset()
        self.player.choose_first_door()
        self.host.open_empty()

        change = self.player.choose_to_change()
        if change:
            self._say("Player chooses to change doors")
            self.doors.change_selection()
        else:
            self._say("Player chooses not to change doors")

        final = self.doors.selected_index()
        self._say(f"Player's final selection: {final}")

        won = self.doors.has_car[final]
        self._say("Player wins!" if won else "Player loses")
        return won


def simulate(
    games: int = DEFAULT_GAMES,
    num_doors: int = DEFAULT_DOORS,
    rng: Optional[random.Random] = None,
) -> float:
    """Play ``games`` silent rounds with a switching player and return the win rate."""
    if games < 1:
        raise ValueError(f"number of games must be positive, got {games}")
    generator = rng if rng is not None else random.Random()
    game = Game(Player(rng=generator), num_doors, generator)
    wins = sum(game.run() for _ in range(games))
    return wins / games


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Play many rounds and print the player's win rate."""
    parser = argparse.ArgumentParser(description="Simulate the Monty Hall game.")
    parser.add_argument("--games", type=int, default=DEFAULT_GAMES, help="rounds to play")
    parser.add_argument("--doors", type=int, default=MAIN_DOORS, help="number of doors")
    parser.add_argument("--seed", type=int, help="seed for the random generator")
    parser.add_argument("--stay", action="store_true", help="never change doors")
    parser.add_argument("--quiet", action="store_true", help="print only the win rate")
    args = parser.parse_args(argv)
    if args.games < 1:
        parser.error("--games must be positive")
    if args.doors < 2:
        parser.error("--doors must be at least 2")

    rng = random.Random(args.seed)
    game = Game(
        Player(rng=rng, switch=not args.stay),
        args.doors,
        rng,
        out=None if args.quiet else sys.stdout,
    )
    wins = sum(game.run() for _ in range(args.games))
    print(f"Win rate: {wins / args.games:g}")
    return 0


if __name__ == "__main__":
    sys.exit(main())