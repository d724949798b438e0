"""Object lifetimes and polymorphic greeters: planets of countries and speakers."""

from __future__ import annotations

import argparse
import sys
from abc import ABC, abstractmethod
from typing import Iterable, Optional, Sequence, TextIO

__all__ = [
    "DEFAULT_COUNTRIES",
    "NUM_SPEAKERS",
    "GREETING_ROUNDS",
    "Country",
    "Planet",
    "Speaker",
    "EnglishSpeaker",
    "LatinSpeaker",
    "FrenchSpeaker",
    "TalkativeEnglishSpeaker",
    "make_speaker",
    "main",
]

DEFAULT_COUNTRIES = (("Bobnavia", True), ("Narnia", False), ("TronWorld", True))
NUM_SPEAKERS = 6
GREETING_ROUNDS = 3


def _stream(out: Optional[TextIO]) -> TextIO:
    return sys.stdout if out is None else out


class Country:
    """A named country that announces its creation and its disposal."""

    def __init__(self, name: str, on_equator: bool, out: Optional[TextIO] = None):
        self.name = name
        self.on_equator = on_equator
        self.out = out
        self.closed = False
        print(f"Country CTor: {name}", file=_stream(out))

    def close(self) -> None:
        """Dispose of the country once, announcing it; later calls do nothing."""
        if self.closed:
            return
        self.closed = True
        print(f"Country DTor: {self.name}", file=_stream(self.out))


class Planet:
    """A planet that owns its countries; closing it disposes of them too.

    Without ``countries`` the planet is populated with the default three.
    """

    def __init__(
        self,
        name: str,
        countries: Optional[Iterable[Country]] = None,
        out: Optional[TextIO] = None,
    ):
        self.name = name
        self.out = out
        self._closed = False
        print(f"Planet CTor: {name}", file=_stream(out))
        if countries is None:
            self.countries = [
                Country(country, on_equator, out) for country, on_equator in DEFAULT_COUNTRIES
            ]
        else:
            self.countries = list(countries)

    def equatorials(self) -> list[Country]:
        """Return the countries that lie on the equator, in order."""
        return [country for country in self.countries if country.on_equator]

    def report_equatorials(self, out: Optional[TextIO] = None) -> None:
        """Print the equatorial countries."""
        stream = _stream(self.out if out is None else out)
        print("Listing equatorial countries", file=stream)
        for country in self.equatorials():
            print(f"{country.name} is on equator", file=stream)

    def close(self) -> None:
        """Announce disposal of the planet, then dispose of each country once."""
        if self._closed:
            return
        self._closed = True
        print(f"Planet DTor: {self.name}", file=_stream(self.out))
        for country in self.countries:
            country.close()

    def __enter__(self) -> "Planet":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class Speaker(ABC):
    """Greets the user and counts how many greetings it has given."""

    def __init__(self) -> None:
        self.greet_count = 0

    @abstractmethod
    def greet(self, out: Optional[TextIO] = None) -> None:
        """Greet the user."""

    def report(self, out: Optional[TextIO] = None) -> None:
        """Print how many greetings have been counted."""
        print(f"run count: {self.greet_count}", file=_stream(out))

    def close(self, out: Optional[TextIO] = None) -> None:
        """Announce disposal of the speaker."""
        print("DTor", file=_stream(out))


class _PlainSpeaker(Speaker):
    greeting = ""

    def greet(self, out: Optional[TextIO] = None) -> None:
        print(self.greeting, file=_stream(out))
        self.greet_count += 1


class EnglishSpeaker(_PlainSpeaker):
    """Greets in English."""

    greeting = "Hello, World"


class LatinSpeaker(_PlainSpeaker):
    """Greets in Latin."""

    greeting = "Ave, Munde"


class FrenchSpeaker(_PlainSpeaker):
    """Greets in French."""

    greeting = "Salut, Monde"


class TalkativeEnglishSpeaker(EnglishSpeaker):
    """Greets in English and then adds a question, counting one greeting."""

    def greet(self, out: Optional[TextIO] = None) -> None:
        super().greet(out)
        print("How ya goin'?", file=_stream(out))

    def close(self, out: Optional[TextIO] = None) -> None:
        print("Talkative DTor", file=_stream(out))
        super().close(out)


_SPEAKER_TYPES = {
    0: TalkativeEnglishSpeaker,
    1: EnglishSpeaker,
    2: FrenchSpeaker,
    3: LatinSpeaker,
}


def make_speaker(kind: int) -> Speaker:
    """Create a speaker: 0 talkative English, 1 English, 2 French, 3 Latin."""
    try:
        speaker_type = _SPEAKER_TYPES[kind]
    except (KeyError, TypeError):
        raise ValueError(f"invalid speaker type {kind!r}") from None
    return speaker_type()


def _run_planet() -> None:
    with Planet("PlanetBob") as planet:
        planet.report_equatorials()


def _read_kinds() -> list[int]:
    print("Speaker type list?  (list 6 numbers in range 0..3)> ", end="", flush=True)
    tokens = sys.stdin.read().split()[:NUM_SPEAKERS]
    if len(tokens) < NUM_SPEAKERS:
        raise ValueError(f"expected {NUM_SPEAKERS} speaker types, got {len(tokens)}")
    try:
        return [int(token) for token in tokens]
    except ValueError:
        raise ValueError(f"speaker types must be integers, got {tokens!r}") from None


def _run_speakers(kinds: Sequence[int]) -> None:
    speakers = [make_speaker(kind) for kind in kinds]
    for _ in range(GREETING_ROUNDS):
        for speaker in speakers:
            speaker.greet()
    for speaker in speakers:
        speaker.report()
    for speaker in speakers:
        speaker.close()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the planet demonstration or the speaker demonstration."""
    parser = argparse.ArgumentParser(description="Demonstrate object lifetimes and polymorphism.")
    commands = parser.add_subparsers(dest="command")
    commands.add_parser("planet", help="list a planet's equatorial countries")
    speakers = commands.add_parser("speakers", help="have six speakers greet the user")
    speakers.add_argument(
        "kinds",
        nargs="*",
        type=int,
        help="six speaker types in 0..3; read from standard input when omitted",
    )
    args = parser.parse_args(argv)

    if args.command == "speakers":
        if args.kinds and len(args.kinds) != NUM_SPEAKERS:
            speakers.error(f"expected {NUM_SPEAKERS} speaker types, got {len(args.kinds)}")
        try:
            kinds = args.kinds if args.kinds else _read_kinds()
            _run_speakers(kinds)
        except ValueError as error:
            print(f"Error: {error}", file=sys.stderr)
            return 1
    else:
        _run_planet()
    return 0


if __name__ == "__main__":
    sys.exit(main())