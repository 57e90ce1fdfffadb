"""
Unit Tests for Playoff Manager

Tests bracket generation, re-seeding between rounds, the bracket state
machine and its sequencing errors.
"""

from dataclasses import replace

import pytest

from mocks.game_simulator import AwayTeamWinsSimulator, HomeTeamWinsSimulator, play_current_round
from playoff_system.bracket_models import BracketState, PlayoffBracket, PlayoffMatchup, PlayoffRound
from playoff_system.playoff_exceptions import (
    InvalidBracketException,
    InvalidRoundException,
    InvalidSeedingException,
    PlayoffStateException,
)
from playoff_system.playoff_manager import PlayoffManager, advance_playoff_round, generate_playoff_bracket
from shared.league_models import Conference


def pairs(games):
    return [(game.home_team_id, game.away_team_id) for game in games]


def play_through(manager, schedule, simulator, rounds):
    """Advance the bracket by the given number of rounds"""
    for _ in range(rounds):
        schedule = manager.advance_playoff_round(schedule, play_current_round(schedule, simulator))
    return schedule


class TestBracketGeneration:
    """Wild card round from standings"""

    @pytest.fixture
    def manager(self, league):
        return PlayoffManager(league)

    @pytest.fixture
    def bracket(self, manager, default_standings):
        return manager.generate_playoff_bracket(default_standings, 2025)

    def test_initial_state(self, bracket):
        assert bracket.state is BracketState.WILD_CARD
        assert bracket.current_round is PlayoffRound.WILD_CARD
        assert len(bracket.wild_card_round) == 6
        assert bracket.divisional_round == ()
        assert bracket.super_bowl is None

    def test_wild_card_matchups(self, bracket):
        afc = [g for g in bracket.wild_card_round if g.conference is Conference.AFC]
        nfc = [g for g in bracket.wild_card_round if g.conference is Conference.NFC]

        assert pairs(afc) == [(5, 10), (9, 6), (13, 2)]
        assert pairs(nfc) == [(21, 26), (25, 22), (29, 18)]
        assert [(g.home_seed, g.away_seed) for g in afc] == [(2, 7), (3, 6), (4, 5)]

    def test_top_seeds_have_bye(self, bracket):
        wild_card_teams = {team_id for game in bracket.wild_card_round for team_id in game.teams}

        assert 1 not in wild_card_teams
        assert 17 not in wild_card_teams
        assert len(wild_card_teams) == 12

    def test_game_ids(self, bracket):
        assert [g.game_id for g in bracket.wild_card_round] == [
            f"playoff_2025_wild_card_{n}" for n in range(1, 7)
        ]

    def test_seed_queries(self, manager, bracket):
        assert manager.get_team_playoff_seed(bracket, 13) == 4
        assert manager.get_team_playoff_seed(bracket, 3) is None
        assert bracket.conference_of(18) is Conference.NFC
        assert bracket.playoff_team_ids == [1, 2, 5, 6, 9, 10, 13, 17, 18, 21, 22, 25, 26, 29]

    def test_seed_lookup_rebuilt_on_copy(self, bracket):
        afc_only = replace(bracket, nfc_seeds={})

        assert afc_only.playoff_team_ids == [1, 2, 5, 6, 9, 10, 13]
        assert afc_only.seed_of(18) is None
        assert bracket.seed_of(18) == 5

    def test_matchup_string(self, bracket):
        assert bracket.wild_card_round[0].matchup_string == "(7) Team 10 @ (2) Team 5"

    def test_module_function(self, league, default_standings, bracket):
        assert generate_playoff_bracket(default_standings, 2025, league) == bracket
        assert generate_playoff_bracket(default_standings, 2025, league.teams) == bracket

    def test_seeding_needs_league(self, default_standings):
        with pytest.raises(InvalidSeedingException):
            PlayoffManager().generate_playoff_bracket(default_standings, 2025)

    def test_advancing_without_league(self, bracket):
        schedule = PlayoffManager().advance_playoff_round(
            bracket, play_current_round(bracket, HomeTeamWinsSimulator())
        )

        assert schedule.state is BracketState.DIVISIONAL


class TestRoundAdvancement:
    """Re-seeding and state transitions"""

    @pytest.fixture
    def manager(self, league):
        return PlayoffManager(league)

    @pytest.fixture
    def bracket(self, manager, default_standings):
        return manager.generate_playoff_bracket(default_standings, 2025)

    def test_divisional_reseeding_chalk(self, manager, bracket):
        """Top seeds win: #1 hosts #4, #2 hosts #3."""
        schedule = play_through(manager, bracket, HomeTeamWinsSimulator(), 1)

        assert schedule.state is BracketState.DIVISIONAL
        afc = [g for g in schedule.divisional_round if g.conference is Conference.AFC]
        assert pairs(afc) == [(1, 13), (5, 9)]
        assert [(g.home_seed, g.away_seed) for g in afc] == [(1, 4), (2, 3)]

    def test_divisional_reseeding_upsets(self, manager, bracket):
        """Road teams win: #1 hosts the 7 seed, #5 hosts #6."""
        schedule = play_through(manager, bracket, AwayTeamWinsSimulator(), 1)

        afc = [g for g in schedule.divisional_round if g.conference is Conference.AFC]
        assert pairs(afc) == [(1, 10), (2, 6)]
        assert [(g.home_seed, g.away_seed) for g in afc] == [(1, 7), (5, 6)]

    def test_conference_round_higher_seed_hosts(self, manager, bracket):
        schedule = play_through(manager, bracket, AwayTeamWinsSimulator(), 2)

        assert schedule.state is BracketState.CONFERENCE
        assert pairs(schedule.conference_championships) == [(6, 10), (22, 26)]

    def test_full_bracket_home_wins(self, manager, bracket):
        schedule = play_through(manager, bracket, HomeTeamWinsSimulator(), 4)

        assert schedule.state is BracketState.COMPLETE
        assert schedule.is_complete
        assert manager.are_playoffs_complete(schedule)
        assert manager.get_current_round(schedule) is None
        assert schedule.afc_champion == 1
        assert schedule.nfc_champion == 17
        assert schedule.super_bowl_champion == 1
        assert schedule.super_bowl_runner_up == 17

    def test_full_bracket_upsets(self, manager, bracket):
        schedule = play_through(manager, bracket, AwayTeamWinsSimulator(), 4)

        assert schedule.afc_champion == 10
        assert schedule.nfc_champion == 26
        assert schedule.super_bowl_champion == 26
        assert manager.get_team_elimination_round(schedule, 17) is PlayoffRound.DIVISIONAL
        assert manager.get_team_elimination_round(schedule, 10) is PlayoffRound.SUPER_BOWL

    def test_super_bowl_neutral_site(self, manager, bracket):
        schedule = play_through(manager, bracket, HomeTeamWinsSimulator(), 3)

        game = schedule.super_bowl
        assert schedule.state is BracketState.SUPER_BOWL
        assert game.conference is None
        assert game.conference_label == "neutral"
        assert game.game_id == "playoff_2025_super_bowl_1"
        # 2025: AFC champion is the designated home side
        assert (game.home_team_id, game.away_team_id) == (1, 17)

    def test_super_bowl_home_alternates(self, manager, default_standings):
        bracket = manager.generate_playoff_bracket(default_standings, 2026)

        schedule = play_through(manager, bracket, HomeTeamWinsSimulator(), 3)

        assert (schedule.super_bowl.home_team_id, schedule.super_bowl.away_team_id) == (17, 1)

    def test_each_round_validates(self, manager, bracket):
        schedule = bracket
        for playoff_round in (PlayoffRound.WILD_CARD, PlayoffRound.DIVISIONAL,
                              PlayoffRound.CONFERENCE, PlayoffRound.SUPER_BOWL):
            assert PlayoffBracket(playoff_round, 2025, schedule.get_round(playoff_round)).validate()
            schedule = play_through(manager, schedule, HomeTeamWinsSimulator(), 1)
            assert schedule.is_round_complete(playoff_round)

    def test_teams_alive_and_eliminated(self, manager, bracket):
        schedule = play_through(manager, bracket, HomeTeamWinsSimulator(), 1)

        assert manager.get_teams_alive(schedule) == [1, 5, 9, 13, 17, 21, 25, 29]
        assert manager.get_team_elimination_round(schedule, 2) is PlayoffRound.WILD_CARD
        assert manager.get_team_elimination_round(schedule, 1) is None
        assert manager.get_team_elimination_round(schedule, 3) is None

    def test_advance_does_not_mutate_input(self, manager, bracket):
        advance_playoff_round(bracket, play_current_round(bracket, HomeTeamWinsSimulator()))

        assert bracket.state is BracketState.WILD_CARD
        assert not any(game.is_complete for game in bracket.wild_card_round)

    def test_to_dict(self, manager, bracket):
        data = play_through(manager, bracket, HomeTeamWinsSimulator(), 4).to_dict()

        assert data['state'] == 'complete'
        assert data['super_bowl_champion'] == 1
        assert len(data['rounds']['divisional']) == 4
        assert data['rounds']['super_bowl'][0]['conference'] == 'neutral'


class TestSequencing:
    """Out-of-order and malformed results"""

    @pytest.fixture
    def manager(self, league):
        return PlayoffManager(league)

    @pytest.fixture
    def bracket(self, manager, default_standings):
        return manager.generate_playoff_bracket(default_standings, 2025)

    @pytest.fixture
    def wild_card_results(self, bracket):
        return play_current_round(bracket, HomeTeamWinsSimulator())

    def test_empty_results(self, manager, bracket):
        with pytest.raises(InvalidRoundException):
            manager.advance_playoff_round(bracket, [])

    def test_mixed_rounds(self, manager, bracket, wild_card_results):
        schedule = manager.advance_playoff_round(bracket, wild_card_results)
        divisional = play_current_round(schedule, HomeTeamWinsSimulator())

        with pytest.raises(InvalidRoundException):
            manager.advance_playoff_round(schedule, [wild_card_results[0], divisional[0]])

    def test_future_round(self, manager, bracket):
        early = PlayoffMatchup(
            game_id="playoff_2025_divisional_1",
            round=PlayoffRound.DIVISIONAL,
            conference=Conference.AFC,
            home_team_id=1,
            away_team_id=13,
            home_seed=1,
            away_seed=4
        ).with_result(24, 17)

        with pytest.raises(PlayoffStateException) as exc_info:
            manager.advance_playoff_round(bracket, [early])

        assert exc_info.value.context_dict["current_round"] == "wild_card"
        assert exc_info.value.context_dict["requested_round"] == "divisional"

    def test_incomplete_round(self, manager, bracket, wild_card_results):
        with pytest.raises(PlayoffStateException):
            manager.advance_playoff_round(bracket, wild_card_results[:5])

    def test_unplayed_result(self, manager, bracket, wild_card_results):
        results = list(wild_card_results)
        results[0] = bracket.wild_card_round[0]

        with pytest.raises(PlayoffStateException):
            manager.advance_playoff_round(bracket, results)

    def test_unknown_game(self, manager, bracket, wild_card_results):
        results = list(wild_card_results)
        results[0] = replace(results[0], game_id="playoff_2025_wild_card_9")

        with pytest.raises(PlayoffStateException):
            manager.advance_playoff_round(bracket, results)

    def test_wrong_teams(self, manager, bracket, wild_card_results):
        results = list(wild_card_results)
        results[0] = replace(results[0], away_team_id=3)

        with pytest.raises(PlayoffStateException):
            manager.advance_playoff_round(bracket, results)

    def test_result_seeds_not_taken(self, manager, bracket, wild_card_results):
        """Seeds come from the generated matchup, so re-seeding is unaffected."""
        results = list(wild_card_results)
        results[0] = replace(results[0], home_seed=7, away_seed=2)

        schedule = manager.advance_playoff_round(bracket, results)
        afc = [g for g in schedule.divisional_round if g.conference is Conference.AFC]

        assert (schedule.wild_card_round[0].home_seed, schedule.wild_card_round[0].away_seed) == (2, 7)
        assert pairs(afc) == [(1, 13), (5, 9)]

    def test_winner_must_match_score(self, manager, bracket, wild_card_results):
        results = list(wild_card_results)
        results[0] = replace(results[0], winner_id=results[0].away_team_id)

        with pytest.raises(PlayoffStateException):
            manager.advance_playoff_round(bracket, results)

    def test_tie_rejected(self, bracket):
        with pytest.raises(PlayoffStateException):
            bracket.wild_card_round[0].with_result(20, 20)

    def test_refeed_same_results_is_noop(self, manager, bracket, wild_card_results):
        schedule = manager.advance_playoff_round(bracket, wild_card_results)

        assert manager.advance_playoff_round(schedule, wild_card_results) is schedule

    def test_refeed_different_results(self, manager, bracket, wild_card_results):
        schedule = manager.advance_playoff_round(bracket, wild_card_results)
        upsets = play_current_round(bracket, AwayTeamWinsSimulator())

        with pytest.raises(PlayoffStateException):
            manager.advance_playoff_round(schedule, upsets)

    def test_refeed_after_completion(self, manager, bracket):
        schedule = play_through(manager, bracket, HomeTeamWinsSimulator(), 3)
        final = play_current_round(schedule, HomeTeamWinsSimulator())
        complete = manager.advance_playoff_round(schedule, final)

        assert manager.advance_playoff_round(complete, final) is complete


class TestPlayoffBracket:
    """Round structure checks"""

    @pytest.fixture
    def wild_card_games(self, league, default_standings):
        return PlayoffManager(league).generate_playoff_bracket(default_standings, 2025).wild_card_round

    def test_conference_split(self, wild_card_games):
        bracket = PlayoffBracket(PlayoffRound.WILD_CARD, 2025, wild_card_games)

        assert len(bracket.get_afc_games()) == 3
        assert len(bracket.get_nfc_games()) == 3
        assert bracket.get_super_bowl_game() is None

    def test_wrong_game_count(self, wild_card_games):
        with pytest.raises(InvalidBracketException) as exc_info:
            PlayoffBracket(PlayoffRound.WILD_CARD, 2025, wild_card_games[:5]).validate()

        assert exc_info.value.context_dict["actual_games"] == 5

    def test_wrong_round(self, wild_card_games):
        with pytest.raises(InvalidBracketException):
            PlayoffBracket(PlayoffRound.DIVISIONAL, 2025, wild_card_games[:4]).validate()

    def test_team_on_both_sides(self, wild_card_games):
        games = list(wild_card_games)
        games[0] = replace(games[0], away_team_id=games[0].home_team_id)

        with pytest.raises(InvalidBracketException):
            PlayoffBracket(PlayoffRound.WILD_CARD, 2025, tuple(games)).validate()

    def test_uneven_conference_split(self, wild_card_games):
        games = list(wild_card_games)
        games[3] = replace(games[3], conference=Conference.AFC)

        with pytest.raises(InvalidBracketException):
            PlayoffBracket(PlayoffRound.WILD_CARD, 2025, tuple(games)).validate()

    def test_duplicate_team(self, wild_card_games):
        games = list(wild_card_games)
        games[1] = replace(games[1], away_team_id=games[0].away_team_id)

        with pytest.raises(InvalidBracketException):
            PlayoffBracket(PlayoffRound.WILD_CARD, 2025, tuple(games)).validate()
