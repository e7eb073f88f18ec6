import random

import pytest

from ecotetris.game import Game
from ecotetris.pieces import BOARD_HEIGHT, BOARD_WIDTH, TrashType, piece_cells

PAPER = TrashType.PAPER
PLASTIC = TrashType.PLASTIC


def _current_cells(game):
    return {
        (x, y)
        for x in range(BOARD_WIDTH)
        for y in range(BOARD_HEIGHT)
        if game.is_current(x, y)
    }


def _occupied_cells(game):
    return {
        (x, y)
        for x in range(BOARD_WIDTH)
        for y in range(BOARD_HEIGHT)
        if game.is_occupied(x, y)
    }


def _place(game, shape, rotation, x, y, types):
    game.set_current_piece(shape, rotation, x, y, types)
    game.set_current(x, y)


def _fill_row(game, y, columns, trash_type):
    for x in columns:
        game.set_cell(x, y, True, trash_type, trash_type.color())


def _game_with_uniform_row():
    game = Game(random.Random(1))
    _fill_row(game, 0, range(2, BOARD_WIDTH), PAPER)
    _place(game, 6, 0, 1, 1, [PAPER] * 4)
    game.move_down()
    return game


def test_new_game_is_empty():
    game = Game(random.Random(0))
    assert _occupied_cells(game) == set()
    assert game.score == 0
    assert game.level == 1
    assert game.hold_shape is None
    assert game.can_hold is True
    assert game.game_over is False


def test_restart_spawns_piece_at_top():
    game = Game(random.Random(3))
    game.restart()
    assert game.current_y == 17
    assert 2 <= game.current_x <= 6
    assert len(_current_cells(game)) == 4
    assert _current_cells(game) == set(
        piece_cells(game.current_shape, game.current_rotation, game.current_x, game.current_y)
    )


def test_same_seed_gives_same_pieces():
    a = Game(random.Random(42))
    b = Game(random.Random(42))
    a.restart()
    b.restart()
    assert (a.current_shape, a.current_rotation, a.current_x) == (
        b.current_shape,
        b.current_rotation,
        b.current_x,
    )
    assert a.next_shape == b.next_shape
    assert a.next_types == b.next_types


def test_restart_resets_progress():
    game = Game(random.Random(5))
    game.score = 500
    game.level = 4
    game.set_cell(0, 0, True, PAPER, PAPER.color())
    game.create_recycle_effect(1, 1, PAPER)
    game.restart()
    assert game.score == 0
    assert game.level == 1
    assert _occupied_cells(game) == set()
    assert game.particles == []


def test_check_collision_with_walls():
    game = Game(random.Random(0))
    game.set_current_piece(0, 0, 5, 5, [PAPER] * 4)
    assert game.check_collision(0, 5, 0) is True
    assert game.check_collision(2, 5, 0) is False
    assert game.check_collision(2, -1, 0) is True


def test_check_collision_with_occupied_cell():
    game = Game(random.Random(0))
    game.set_current_piece(0, 0, 5, 5, [PAPER] * 4)
    game.set_cell(6, 5, True, PAPER, PAPER.color())
    assert game.check_collision(5, 5, 0) is True


def test_translate_moves_piece():
    game = Game(random.Random(0))
    _place(game, 5, 0, 5, 10, [PAPER] * 4)
    game.translate(1)
    assert game.current_x == 6
    assert _current_cells(game) == set(piece_cells(5, 0, 6, 10))


def test_translate_blocked_by_wall():
    game = Game(random.Random(0))
    _place(game, 0, 0, 2, 10, [PAPER] * 4)
    game.translate(-1)
    assert game.current_x == 2
    assert _current_cells(game) == set(piece_cells(0, 0, 2, 10))


def test_rotate_goes_backwards_through_rotations():
    game = Game(random.Random(0))
    _place(game, 5, 0, 5, 10, [PAPER] * 4)
    game.rotate()
    assert game.current_rotation == 3
    assert _current_cells(game) == set(piece_cells(5, 3, 5, 10))


def test_rotate_blocked_by_wall():
    game = Game(random.Random(0))
    _place(game, 0, 1, 0, 10, [PAPER] * 4)
    game.rotate()
    assert game.current_rotation == 1


def test_move_down_freezes_at_bottom():
    game = Game(random.Random(0))
    types = [PAPER, PLASTIC, TrashType.METAL, TrashType.GLASS]
    _place(game, 6, 0, 1, 1, types)
    game.move_down()
    for (x, y), trash_type in zip(piece_cells(6, 0, 1, 1), types):
        assert game.is_occupied(x, y)
        assert game.trash_type_at(x, y) is trash_type
    assert game.current_y == 17


def test_move_down_falls_one_row_when_free():
    game = Game(random.Random(0))
    _place(game, 6, 0, 4, 10, [PAPER] * 4)
    game.move_down()
    assert game.current_y == 9
    assert _current_cells(game) == set(piece_cells(6, 0, 4, 9))


def test_uniform_line_scores_and_animates():
    game = _game_with_uniform_row()
    assert game.line_clearing is True
    assert game.line_being_cleared == 0
    assert game.line_trash_type is PAPER
    assert game.score == 150
    assert game.lines_cleared == 1
    assert game.recycled_count(PAPER) == 1
    assert game.combo_count == 0
    assert len(game.particles) == 30


def test_line_animation_removes_row():
    game = _game_with_uniform_row()
    for _ in range(10):
        game.move_down()
    assert game.line_clearing is False
    assert game.line_being_cleared is None
    assert {(x, y) for x, y in _occupied_cells(game) if y == 0} == {(0, 0), (1, 0)}
    assert not any(game.is_occupied(x, 1) for x in range(BOARD_WIDTH))


def test_mixed_line_removed_without_score():
    game = Game(random.Random(2))
    _fill_row(game, 0, range(2, BOARD_WIDTH), PLASTIC)
    _place(game, 6, 0, 1, 1, [PAPER] * 4)
    game.move_down()
    assert game.score == 0
    assert game.line_clearing is False
    assert game.lines_cleared == 0
    assert {(x, y) for x, y in _occupied_cells(game) if y == 0} == {(0, 0), (1, 0)}
    assert game.trash_type_at(0, 0) is PAPER


def test_two_uniform_lines_make_a_combo():
    single = _game_with_uniform_row()
    game = Game(random.Random(1))
    _fill_row(game, 0, range(2, BOARD_WIDTH), PAPER)
    _fill_row(game, 1, range(2, BOARD_WIDTH), PAPER)
    _place(game, 6, 0, 1, 1, [PAPER] * 4)
    game.move_down()
    assert game.combo_count == 1
    assert game.lines_cleared == 2
    assert game.recycled_count(PAPER) == 2
    assert game.score > 2 * single.score


def test_level_rises_every_ten_lines():
    game = Game(random.Random(1))
    game.lines_cleared = 9
    _fill_row(game, 0, range(2, BOARD_WIDTH), PAPER)
    _place(game, 6, 0, 1, 1, [PAPER] * 4)
    game.move_down()
    assert game.lines_cleared == 10
    assert game.level == 2


def test_difficulty_multiplier():
    game = Game(random.Random(0))
    assert game.difficulty_multiplier() == pytest.approx(1.0)
    game.level = 3
    assert game.difficulty_multiplier() == pytest.approx(0.9)
    game.level = 30
    assert game.difficulty_multiplier() == pytest.approx(0.1)


def test_first_hold_takes_next_piece():
    game = Game(random.Random(7))
    _place(game, 3, 0, 5, 10, [PAPER] * 4)
    upcoming = game.next_shape
    game.hold_piece()
    assert game.hold_shape == 3
    assert game.current_shape == upcoming
    assert game.can_hold is False


def test_second_hold_is_ignored():
    game = Game(random.Random(7))
    game.restart()
    game.hold_piece()
    before = (game.current_shape, game.hold_shape, game.current_x)
    game.hold_piece()
    assert (game.current_shape, game.hold_shape, game.current_x) == before


def test_hold_swaps_with_stored_piece():
    game = Game(random.Random(0))
    types_a = [PAPER] * 4
    types_b = [PLASTIC] * 4
    _place(game, 0, 1, 3, 5, types_a)
    game.set_hold_piece(2, types_b, True)
    game.hold_piece()
    assert game.current_shape == 2
    assert game.current_types == types_b
    assert (game.current_x, game.current_y, game.current_rotation) == (5, 17, 0)
    assert game.hold_shape == 0
    assert game.hold_types == types_a
    assert game.can_hold is False
    assert _current_cells(game) == set(piece_cells(2, 0, 5, 17))


def test_drop_on_occupied_cell_ends_game():
    game = Game(random.Random(0))
    game.set_cell(5, 10, True, PAPER, PAPER.color())
    game.set_current_piece(0, 0, 5, 10, [PAPER] * 4)
    game.drop_trashes()
    assert game.game_over is True


def test_drop_freezes_piece_in_place():
    game = Game(random.Random(0))
    game.set_current_piece(0, 0, 5, 10, [PLASTIC] * 4)
    game.drop_trashes()
    assert game.game_over is False
    assert set(piece_cells(0, 0, 5, 10)) <= _occupied_cells(game)


def test_spawn_on_full_board_ends_game():
    game = Game(random.Random(0))
    for y in range(15, BOARD_HEIGHT):
        _fill_row(game, y, range(BOARD_WIDTH), PAPER)
    game.spawn_trashes()
    assert game.game_over is True


def test_trash_type_outside_board_is_none():
    game = Game(random.Random(0))
    assert game.trash_type_at(-1, 0) is TrashType.NONE
    assert game.trash_type_at(0, BOARD_HEIGHT) is TrashType.NONE


def test_set_cell_round_trip_and_out_of_range():
    game = Game(random.Random(0))
    game.set_cell(3, 4, True, TrashType.GLASS, (0.1, 0.2, 0.3))
    game.set_cell(BOARD_WIDTH, 4, True, TrashType.GLASS, (0.1, 0.2, 0.3))
    assert game.is_occupied(3, 4)
    assert game.trash_type_at(3, 4) is TrashType.GLASS
    assert game.board[3][4].color == (0.1, 0.2, 0.3)
    assert _occupied_cells(game) == {(3, 4)}


def test_recycled_count_round_trip():
    game = Game(random.Random(0))
    game.set_recycled_count(TrashType.ORGANIC, 12)
    assert game.recycled_count(TrashType.ORGANIC) == 12
    assert game.recycled_count(TrashType.METAL) == 0


def test_recycled_count_rejects_none():
    game = Game(random.Random(0))
    with pytest.raises(ValueError):
        game.recycled_count(TrashType.NONE)
    with pytest.raises(ValueError):
        game.set_recycled_count(TrashType.NONE, 1)


def test_piece_setters_need_four_types():
    game = Game(random.Random(0))
    with pytest.raises(ValueError):
        game.set_current_piece(0, 0, 5, 5, [PAPER] * 3)
    with pytest.raises(ValueError):
        game.set_next_piece(0, [PAPER] * 5)


def test_set_next_piece_round_trip():
    game = Game(random.Random(0))
    game.set_next_piece(4, [TrashType.METAL] * 4)
    game.spawn_trashes()
    assert game.current_shape == 4
    assert game.current_types == [TrashType.METAL] * 4


def test_recycle_effect_particles():
    game = Game(random.Random(0))
    game.create_recycle_effect(3, 4, TrashType.GLASS)
    assert len(game.particles) == 3
    for p in game.particles:
        assert (p.x, p.y, p.life) == (3.5, 4.5, 1.0)
        assert 0.1 <= p.size < 0.3
        assert -1.0 <= p.vx < 1.0
        assert p.trash_type is TrashType.GLASS


def test_particles_fade_and_vanish():
    game = Game(random.Random(0))
    game.create_recycle_effect(3, 4, PAPER)
    start = [(p.x + p.vx * 0.016, p.y + p.vy * 0.016) for p in game.particles]
    game.update()
    assert all(p.life == pytest.approx(0.984) for p in game.particles)
    assert [(p.x, p.y) for p in game.particles] == pytest.approx(start)
    for _ in range(100):
        game.update()
    assert game.particles == []