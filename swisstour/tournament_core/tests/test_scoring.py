"""
Unit tests for score parsing and the point table.
No database, no Django models - just pure function tests.
"""

import unittest

from swisstour.tournament_core.scoring import (
    STANDARD_SCORING,
    ScoringSystem,
    apply_results,
    parse_score,
    split_score,
)
from swisstour.tournament_core.structure import Match, Player


A = Player("a", "Alice")
B = Player("b", "Bob")
C = Player("c", "Carol")
D = Player("d", "Dave")


def confirmed(match_id, players, score):
    return parse_score(score, players, match_id)


class ParseScoreTests(unittest.TestCase):
    """Test the single parser used for live and historical result entry."""

    def test_two_zero_first_player_wins(self):
        result = parse_score("2-0", [A, B])
        self.assertEqual(result.winner_id, "a")
        self.assertEqual(result.loser_id, "b")
        self.assertTrue(result.is_two_zero)
        self.assertEqual(result.score, "2-0")

    def test_higher_second_component_wins(self):
        result = parse_score("0-2", [A, B])
        self.assertEqual(result.winner_id, "b")
        self.assertEqual(result.loser_id, "a")
        self.assertTrue(result.is_two_zero)

    def test_one_zero_is_not_two_zero(self):
        result = parse_score("1-0", [A, B])
        self.assertEqual(result.winner_id, "a")
        self.assertFalse(result.is_two_zero)

    def test_any_component_of_two_counts_as_two_zero(self):
        """A 2-1 win has a component equal to 2, so it scores as a 2-0."""
        result = parse_score("2-1", [A, B])
        self.assertEqual(result.winner_id, "a")
        self.assertTrue(result.is_two_zero)

    def test_tie_has_no_winner(self):
        result = parse_score("1-1", [A, B])
        self.assertEqual(result.winner_id, "")
        self.assertEqual(result.loser_id, "")
        self.assertFalse(result.is_two_zero)
        self.assertTrue(result.is_tie)

    def test_malformed_scores_are_unconfirmed(self):
        for score in ["x-y", "", None, "1", "1-", "-1", "1-0-1", "1:0", "a-1", "-1-0"]:
            with self.subTest(score=score):
                self.assertIsNone(parse_score(score, [A, B]))

    def test_whitespace_is_tolerated(self):
        result = parse_score(" 1 - 0 ", [A, B])
        self.assertEqual(result.winner_id, "a")

    def test_stored_score_is_normalised(self):
        for score in [" 1-1", "1 - 1", "01-01", " 1 - 1 "]:
            with self.subTest(score=score):
                self.assertEqual(parse_score(score, [A, B]).score, "1-1")
        self.assertEqual(parse_score(" 02 - 0", [A, B]).score, "2-0")

    def test_match_id_is_carried(self):
        self.assertEqual(parse_score("1-0", [A, B], "m1").match_id, "m1")

    def test_needs_two_players(self):
        self.assertIsNone(parse_score("1-0", [A]))

    def test_split_score(self):
        self.assertEqual(split_score("3-1"), (3, 1))
        self.assertIsNone(split_score("three-one"))


class ApplyResultsTests(unittest.TestCase):
    """Test the point table applied to one round."""

    def setUp(self):
        self.players = [A, B, C, D]
        self.m1 = Match("m1", (A, B))
        self.m2 = Match("m2", (C, D))
        self.matches = [self.m1, self.m2]

    def scores(self, players):
        return {p.id: p.score for p in players}

    def test_two_zero_win_is_worth_seven(self):
        results = {"m1": confirmed("m1", self.m1.players, "2-0")}
        updated = apply_results(self.players, results, self.matches)
        self.assertEqual(self.scores(updated), {"a": 7, "b": 0, "c": 0, "d": 0})

    def test_one_zero_win_is_worth_three(self):
        results = {"m1": confirmed("m1", self.m1.players, "0-1")}
        updated = apply_results(self.players, results, self.matches)
        self.assertEqual(self.scores(updated), {"a": 0, "b": 3, "c": 0, "d": 0})

    def test_one_one_tie_gives_both_three(self):
        results = {"m2": confirmed("m2", self.m2.players, "1-1")}
        updated = apply_results(self.players, results, self.matches)
        self.assertEqual(self.scores(updated), {"a": 0, "b": 0, "c": 3, "d": 3})

    def test_zero_zero_tie_gives_nothing(self):
        results = {"m2": confirmed("m2", self.m2.players, "0-0")}
        updated = apply_results(self.players, results, self.matches)
        self.assertEqual(self.scores(updated), {"a": 0, "b": 0, "c": 0, "d": 0})

    def test_padded_one_one_tie_gives_both_three(self):
        for score in [" 1-1", "1 - 1", "01-01"]:
            with self.subTest(score=score):
                results = {"m2": confirmed("m2", self.m2.players, score)}
                updated = apply_results(self.players, results, self.matches)
                self.assertEqual([self.scores(updated)[pid] for pid in "cd"], [3, 3])

    def test_tie_points_compare_components(self):
        self.assertEqual(STANDARD_SCORING.tie_points(" 1 - 1 "), 3)
        self.assertEqual(STANDARD_SCORING.tie_points("01-01"), 3)
        self.assertEqual(STANDARD_SCORING.tie_points("1-1-1"), 0)

    def test_other_ties_give_nothing(self):
        results = {"m2": confirmed("m2", self.m2.players, "2-2")}
        updated = apply_results(self.players, results, self.matches)
        self.assertEqual(self.scores(updated)["c"], 0)

    def test_bye_is_worth_six(self):
        updated = apply_results(self.players, {}, self.matches, bye_players=[D])
        self.assertEqual(self.scores(updated), {"a": 0, "b": 0, "c": 0, "d": 6})

    def test_unconfirmed_matches_contribute_nothing(self):
        results = {"m1": confirmed("m1", self.m1.players, "1-0")}
        updated = apply_results(self.players, results, self.matches)
        self.assertEqual(self.scores(updated)["c"], 0)
        self.assertEqual(self.scores(updated)["d"], 0)

    def test_points_add_to_existing_scores(self):
        players = [A.with_score(10), B.with_score(4), C, D]
        results = {"m1": confirmed("m1", self.m1.players, "2-0")}
        updated = apply_results(players, results, self.matches)
        self.assertEqual(self.scores(updated)["a"], 17)
        self.assertEqual(self.scores(updated)["b"], 4)

    def test_inputs_are_not_mutated(self):
        players = list(self.players)
        results = {"m1": confirmed("m1", self.m1.players, "2-0")}
        updated = apply_results(players, results, self.matches, bye_players=[C])
        self.assertIsNot(updated, players)
        self.assertEqual([p.score for p in players], [0, 0, 0, 0])
        self.assertEqual([p.id for p in updated], ["a", "b", "c", "d"])

    def test_tie_for_unknown_match_is_skipped(self):
        results = {"gone": confirmed("gone", (C, D), "1-1")}
        updated = apply_results(self.players, results, self.matches)
        self.assertEqual(self.scores(updated), {"a": 0, "b": 0, "c": 0, "d": 0})

    def test_decisive_result_for_unknown_match_still_scores_winner(self):
        results = {"gone": confirmed("gone", (C, D), "1-0")}
        updated = apply_results(self.players, results, self.matches)
        self.assertEqual(self.scores(updated)["c"], 3)

    def test_custom_scoring_system(self):
        scoring = ScoringSystem(win_points=2, two_zero_win_points=4, bye_points=1)
        results = {"m1": confirmed("m1", self.m1.players, "2-0")}
        updated = apply_results(self.players, results, self.matches, [C], scoring)
        self.assertEqual(self.scores(updated), {"a": 4, "b": 0, "c": 1, "d": 0})

    def test_standard_scoring_values(self):
        self.assertEqual(STANDARD_SCORING.win_points, 3)
        self.assertEqual(STANDARD_SCORING.two_zero_win_points, 7)
        self.assertEqual(STANDARD_SCORING.bye_points, 6)
        self.assertEqual(STANDARD_SCORING.tie_points("1-1"), 3)
        self.assertEqual(STANDARD_SCORING.tie_points("0-0"), 0)


if __name__ == "__main__":
    unittest.main()
