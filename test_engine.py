"""
Turn engine state machine.

Covers movement, the pending budget check, targeting, turn hand-over and
the occupancy invariant under long random input sequences.
"""

import unittest

from inputs import RandomInputSource
from tactics import (
    Character,
    InputEvent,
    MoveDir,
    Phase,
    Scenario,
    TerrainKind,
    TurnEngine,
    create_arena_scenario,
    open_layout,
)
from tactics.core import in_bounds
from tactics.scenario import create_open_scenario

UP, DOWN, LEFT, RIGHT = InputEvent.UP, InputEvent.DOWN, InputEvent.LEFT, InputEvent.RIGHT
CONFIRM, OTHER = InputEvent.CONFIRM, InputEvent.UNRECOGNIZED


class EngineTestCase(unittest.TestCase):
    def start(self, scenario: Scenario) -> TurnEngine:
        self.engine = TurnEngine()
        self.state = self.engine.reset(scenario)
        return self.engine

    def feed(self, *events):
        return [self.engine.handle_input(e) for e in events]

    def assertOccupancySound(self) -> None:
        self.assertEqual(self.state.occupancy_violations(), [])
        for character in self.state.characters:
            self.assertEqual(self.state.map.tile_at(character.pos).occupant, character.id)


class TestInitialState(EngineTestCase):
    def test_reset(self) -> None:
        self.start(create_arena_scenario())
        self.assertEqual(self.engine.phase, Phase.MOVE)
        self.assertEqual(self.engine.turn, 0)
        self.assertEqual(self.engine.active_character.id, 0)
        self.assertEqual(self.engine.active_character.movement_points, 3)

    def test_start_tiles_are_occupied(self) -> None:
        self.start(create_arena_scenario())
        self.assertEqual(self.state.map.tile_at((1, 1)).occupant, 0)
        self.assertEqual(self.state.map.tile_at((13, 13)).occupant, 1)
        self.assertOccupancySound()

    def test_input_before_reset(self) -> None:
        with self.assertRaises(RuntimeError):
            TurnEngine().handle_input(UP)

    def test_incomplete_scenario_is_rejected(self) -> None:
        scenario = Scenario(layout=open_layout(), characters=[Character(id=0, pos=(1, 1))])
        with self.assertRaises(ValueError):
            TurnEngine().reset(scenario)

    def test_caller_scenario_is_not_mutated(self) -> None:
        scenario = create_open_scenario()
        self.start(scenario)
        self.feed(DOWN, RIGHT)
        self.assertEqual(scenario.characters[0].pos, (1, 1))
        self.assertEqual(self.engine.scenario.characters[0].pos, (1, 1))

    def test_reset_accepts_scenario_dict(self) -> None:
        self.start(create_open_scenario().to_dict())
        self.assertEqual(self.state.active_character.pos, (1, 1))


class TestMovePhase(EngineTestCase):
    def test_down_down_right_scenario(self) -> None:
        self.start(create_open_scenario(start_a=(1, 1)))
        results = self.feed(DOWN, DOWN, RIGHT)

        a = self.state.characters[0]
        self.assertTrue(all(r.moved for r in results))
        self.assertEqual(a.pos, (2, 3))
        self.assertEqual(a.facing, MoveDir.RIGHT)
        self.assertEqual(a.movement_points, 0)
        # Budget is spent but the switch waits for the next event.
        self.assertEqual(self.state.phase, Phase.MOVE)
        self.assertOccupancySound()

        (result,) = self.feed(OTHER)
        self.assertTrue(result.forced_attack)
        self.assertEqual(self.state.phase, Phase.ATTACK)
        self.assertEqual(a.selector, (2, 3))
        self.assertEqual(a.movement_points, a.mobility)

    def test_event_that_forces_attack_is_handled_as_targeting(self) -> None:
        self.start(create_open_scenario(start_a=(1, 1)))
        self.feed(DOWN, DOWN, RIGHT)
        (result,) = self.feed(DOWN)
        self.assertTrue(result.forced_attack)
        self.assertFalse(result.moved)
        self.assertTrue(result.selector_moved)
        self.assertEqual(self.state.characters[0].pos, (2, 3))
        self.assertEqual(self.state.characters[0].selector, (2, 4))

    def test_confirm_on_empty_budget_ends_the_turn(self) -> None:
        self.start(create_open_scenario(start_a=(1, 1)))
        self.feed(DOWN, DOWN, DOWN)
        (result,) = self.feed(CONFIRM)
        self.assertTrue(result.forced_attack)
        self.assertTrue(result.turn_ended)
        self.assertEqual(self.state.turn, 1)
        self.assertEqual(self.state.phase, Phase.MOVE)
        self.assertEqual(self.engine.active_character.id, 1)

    def test_up_at_top_row_is_rejected_but_faces_up(self) -> None:
        self.start(create_open_scenario(start_a=(3, 0)))
        (result,) = self.feed(UP)
        a = self.state.characters[0]
        self.assertFalse(result.moved)
        self.assertEqual(result.rejection, "OUT_OF_BOUNDS")
        self.assertEqual(a.pos, (3, 0))
        self.assertEqual(a.facing, MoveDir.UP)
        self.assertEqual(a.movement_points, 3)
        self.assertEqual(self.state.phase, Phase.MOVE)
        self.assertOccupancySound()

    def test_every_edge_rejects(self) -> None:
        cases = [((0, 5), LEFT), ((15, 5), RIGHT), ((5, 15), DOWN), ((5, 0), UP)]
        for start, event in cases:
            with self.subTest(start=start, event=event):
                self.start(create_open_scenario(start_a=start, start_b=(8, 8)))
                (result,) = self.feed(event)
                self.assertEqual(result.rejection, "OUT_OF_BOUNDS")
                self.assertEqual(self.state.characters[0].pos, start)

    def test_walls_block(self) -> None:
        self.start(create_arena_scenario())
        layout_before = self.state.map.to_layout()
        for event in (UP, LEFT):
            (result,) = self.feed(event)
            self.assertEqual(result.rejection, "WALL")
        a = self.state.characters[0]
        self.assertEqual(a.pos, (1, 1))
        self.assertEqual(a.facing, MoveDir.LEFT)
        self.assertEqual(a.movement_points, 3)
        self.assertEqual(self.state.map.to_layout(), layout_before)
        self.assertOccupancySound()

    def test_other_character_blocks(self) -> None:
        self.start(create_open_scenario(start_a=(1, 1), start_b=(1, 2)))
        (result,) = self.feed(DOWN)
        self.assertEqual(result.rejection, "OCCUPIED")
        self.assertEqual(self.state.characters[0].pos, (1, 1))
        self.assertEqual(self.state.map.tile_at((1, 2)).occupant, 1)

    def test_traps_do_not_block(self) -> None:
        layout = open_layout()
        layout[2] = layout[2][:1] + TerrainKind.TRAP.code + layout[2][2:]
        self.start(Scenario(
            layout=layout,
            characters=[Character(id=0, pos=(1, 1)), Character(id=1, pos=(9, 9))],
        ))
        (result,) = self.feed(DOWN)
        self.assertTrue(result.moved)
        self.assertEqual(self.state.characters[0].pos, (1, 2))

    def test_unrecognized_is_a_no_op(self) -> None:
        self.start(create_open_scenario())
        before = self.state.to_dict()
        (result,) = self.feed(OTHER)
        self.assertFalse(result.moved)
        self.assertEqual(self.state.to_dict(), before)

    def test_confirm_switches_to_attack(self) -> None:
        self.start(create_open_scenario())
        self.feed(RIGHT)
        (result,) = self.feed(CONFIRM)
        a = self.state.characters[0]
        self.assertFalse(result.forced_attack)
        self.assertEqual(result.phase_after, Phase.ATTACK)
        self.assertEqual(a.selector, (2, 1))
        self.assertEqual(a.movement_points, a.mobility)
        self.assertEqual(a.selector_steps, a.mobility)


class TestAttackPhase(EngineTestCase):
    def test_selector_moves_freely_and_off_grid(self) -> None:
        self.start(create_arena_scenario())
        self.feed(CONFIRM, UP, UP, LEFT, LEFT)
        a = self.state.characters[0]
        self.assertEqual(a.selector, (-1, -1))
        self.assertEqual(a.pos, (1, 1))
        self.assertEqual(a.movement_points, 3)
        self.assertEqual(self.state.phase, Phase.ATTACK)

    def test_selector_ignores_walls_and_characters(self) -> None:
        self.start(create_open_scenario(start_a=(1, 1), start_b=(1, 3)))
        self.feed(CONFIRM, DOWN, DOWN)
        self.assertEqual(self.state.characters[0].selector, (1, 3))

    def test_unrecognized_in_attack(self) -> None:
        self.start(create_open_scenario())
        self.feed(CONFIRM)
        (result,) = self.feed(OTHER)
        self.assertFalse(result.selector_moved)
        self.assertEqual(self.state.phase, Phase.ATTACK)


class TestTurnCycling(EngineTestCase):
    def test_confirm_in_attack_ends_turn(self) -> None:
        self.start(create_open_scenario())
        self.feed(CONFIRM)
        (result,) = self.feed(CONFIRM)
        self.assertTrue(result.turn_ended)
        self.assertEqual(self.state.turn, 1)
        self.assertEqual(self.state.phase, Phase.MOVE)
        self.assertEqual(self.state.active_index, 1)

    def test_roster_wraps(self) -> None:
        self.start(create_open_scenario())
        self.feed(CONFIRM, CONFIRM, CONFIRM, CONFIRM)
        self.assertEqual(self.state.turn, 2)
        self.assertEqual(self.state.active_index, 0)

    def test_second_character_moves_on_its_turn(self) -> None:
        self.start(create_open_scenario(start_b=(13, 13)))
        self.feed(CONFIRM, CONFIRM, UP)
        self.assertEqual(self.state.characters[1].pos, (13, 12))
        self.assertEqual(self.state.characters[0].pos, (1, 1))
        self.assertOccupancySound()

    def test_budget_is_full_again_next_turn(self) -> None:
        self.start(create_open_scenario())
        self.feed(DOWN, DOWN, DOWN, OTHER, CONFIRM)  # A spends everything
        self.feed(CONFIRM, CONFIRM)                # B passes
        a = self.engine.active_character
        self.assertEqual(a.id, 0)
        self.assertEqual(a.movement_points, 3)
        self.assertEqual(self.state.phase, Phase.MOVE)
        (result,) = self.feed(DOWN)
        self.assertTrue(result.moved)

    def test_turn_counter_is_monotonic(self) -> None:
        self.start(create_open_scenario())
        turns = [r.turn for r in self.feed(RIGHT, CONFIRM, UP, CONFIRM, LEFT, OTHER, CONFIRM)]
        self.assertEqual(turns, sorted(turns))
        self.assertEqual(turns[-1], 1)


class TestInvariantsUnderRandomInput(EngineTestCase):
    def test_occupancy_holds_for_long_random_runs(self) -> None:
        for seed in (1, 7, 42):
            with self.subTest(seed=seed):
                self.start(create_arena_scenario())
                source = RandomInputSource(seed=seed, limit=1500)
                turn = 0
                while (event := source.next_event(self.state)) is not None:
                    self.engine.handle_input(event)
                    self.assertOccupancySound()
                    self.assertGreaterEqual(self.state.turn, turn)
                    turn = self.state.turn
                    for character in self.state.characters:
                        self.assertTrue(in_bounds(character.pos))
                        tile = self.state.map.tile_at(character.pos)
                        self.assertNotEqual(tile.terrain, TerrainKind.WALL)
                        self.assertGreaterEqual(character.movement_points, 0)
                self.assertGreater(self.state.turn, 0)


if __name__ == "__main__":
    unittest.main()
