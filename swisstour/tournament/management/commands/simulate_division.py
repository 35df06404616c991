"""
Management command to simulate a complete Swiss division.

This command creates a division with generated players, plays the
requested number of rounds with random scores and prints the final
standings with their tiebreaks.
"""

import random
from django.core.management.base import BaseCommand, CommandError

from swisstour.tournament.divisions import DivisionService, scoring_from_settings
from swisstour.tournament.repository import DjangoDivisionRepository

# Weighted so that decisive results dominate, as in real play
SIMULATED_SCORES = ["2-0", "2-0", "0-2", "0-2", "1-0", "0-1", "1-1", "0-0"]


class Command(BaseCommand):
    help = "Simulate a Swiss division with random results and print the standings"

    def add_arguments(self, parser):
        parser.add_argument(
            "--players",
            type=int,
            default=8,
            help="Number of players (default: 8)",
        )
        parser.add_argument(
            "--rounds",
            type=int,
            default=4,
            help="Number of rounds to play (default: 4)",
        )
        parser.add_argument(
            "--seed",
            type=int,
            help="Random seed for reproducible pairings and results",
        )
        parser.add_argument(
            "--name",
            default="Simulated Division",
            help="Division name",
        )

    def handle(self, *args, **options):
        player_count = options["players"]
        rounds = options["rounds"]
        if player_count < 2:
            raise CommandError("A division needs at least 2 players")
        if rounds < 1:
            raise CommandError("Play at least 1 round")

        rng = random.Random(options.get("seed"))
        service = DivisionService(
            DjangoDivisionRepository(), scoring=scoring_from_settings(), rng=rng
        )

        division = service.create_division(options["name"])
        for n in range(1, player_count + 1):
            service.add_player(division.id, f"Player {n}")
        division = service.start(division.id)
        self.stdout.write(f"Created {division.name} ({division.id})")

        for _ in range(rounds):
            for match in division.matches:
                service.record_result(division.id, match.id, rng.choice(SIMULATED_SCORES))
            division = service.next_round(division.id)
            self.stdout.write(f"Round {division.round - 1} complete")

        service.end(division.id)

        self.stdout.write("")
        self.stdout.write(
            f"{'#':>3}  {'Player':<16}{'Pts':>5}{'W-L':>7}{'OMW%':>8}{'GW%':>8}{'OGW%':>8}"
        )
        for standing in service.standings(division.id):
            tb = standing.tiebreakers
            self.stdout.write(
                f"{standing.rank:>3}  {tb.player_name:<16}{tb.score:>5}"
                f"{f'{tb.match_wins}-{tb.match_losses}':>7}"
                f"{tb.opponent_match_win_percentage:>8.3f}"
                f"{tb.game_win_percentage:>8.3f}"
                f"{tb.opponent_game_win_percentage:>8.3f}"
            )
        self.stdout.write(self.style.SUCCESS(f"✓ Simulated {rounds} rounds"))
