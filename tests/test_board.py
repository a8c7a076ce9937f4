"""
Tests for the board layout, positions and property lookup.
"""

from dataclasses import replace

import pytest

from monopoly_sim.board import Board, BoardPosition, create_standard_board
from monopoly_sim.exceptions import ValidationError
from monopoly_sim.properties import ColorGroup, Railroad, StreetProperty, Utility, with_owner
from monopoly_sim.spaces import SpaceType


def count_spaces(board, space_type):
    return sum(1 for s in board.spaces if s.space_type == space_type)


def test_standard_board_layout():
    """The classic board has 40 spaces: 22 streets, 4 railroads, 2 utilities."""
    board = create_standard_board()

    assert len(board.spaces) == 40
    assert len([p for p in board.properties() if isinstance(p, StreetProperty)]) == 22
    assert [r.position for r in board.railroads()] == [5, 15, 25, 35]
    assert [u.position for u in board.utilities()] == [12, 28]
    assert count_spaces(board, SpaceType.CHANCE) == 3
    assert count_spaces(board, SpaceType.COMMUNITY_CHEST) == 3
    assert board.get_space(30).space_type == SpaceType.GO_TO_JAIL
    assert board.get_space(4).amount == 200


def test_get_space_out_of_range():
    board = create_standard_board()

    with pytest.raises(ValidationError):
        board.get_space(40)
    with pytest.raises(ValidationError):
        board.get_space(-1)


def test_malformed_board_is_rejected():
    """A board must have exactly 40 spaces."""
    board = create_standard_board()

    with pytest.raises(ValidationError):
        Board(board.spaces[:39], board.properties())


def test_board_rejects_missing_property():
    board = create_standard_board()
    properties = [p for p in board.properties() if p.position != 39]

    with pytest.raises(ValidationError):
        Board(board.spaces, properties)


def test_color_group_sizes():
    """Brown and dark blue have two streets; every other group has three."""
    board = create_standard_board()

    assert [p.position for p in board.get_properties_by_color_group(ColorGroup.BROWN)] == [1, 3]
    assert [p.position for p in board.get_properties_by_color_group(ColorGroup.DARK_BLUE)] == [37, 39]
    for group in ColorGroup:
        assert len(board.get_properties_by_color_group(group)) == group.size


def test_get_property_at():
    board = create_standard_board()

    assert board.get_property_at(0) is None
    assert isinstance(board.get_property_at(5), Railroad)
    assert isinstance(board.get_property_at(12), Utility)
    assert board.get_property_at(39).name == "Boardwalk"


def test_update_property_replaces_state():
    board = create_standard_board()
    owned = with_owner(board.get_property_at(1), "Alice")

    board.update_property(owned)

    assert board.get_property_at(1).owner == "Alice"
    assert board.properties_owned_by("Alice") == [owned]


def test_update_property_at_non_property_position():
    board = create_standard_board()
    bogus = replace(board.get_property_at(1), position=2)

    with pytest.raises(ValidationError):
        board.update_property(bogus)


def test_copy_is_independent():
    """Per-game copies never leak ownership back into the template."""
    template = create_standard_board()
    copy = template.copy()

    copy.update_property(with_owner(copy.get_property_at(39), "Alice"))

    assert copy.get_property_at(39).owner == "Alice"
    assert template.get_property_at(39).owner is None


def test_advance_wraps_and_reports_go():
    """Position 35 + 7 lands on 2 and passes GO."""
    result = BoardPosition(35).advance(7)

    assert result.new_position == BoardPosition(2)
    assert result.passed_go


def test_advance_landing_on_go_counts_as_passing():
    result = BoardPosition(30).advance(10)

    assert result.new_position.value == 0
    assert result.passed_go


def test_advance_without_wrapping():
    result = BoardPosition(5).advance(7)

    assert result.new_position.value == 12
    assert not result.passed_go


@pytest.mark.parametrize("start", range(0, 40, 3))
def test_advance_matches_modulo(start):
    for steps in range(2, 13):
        result = BoardPosition(start).advance(steps)
        assert result.new_position.value == (start + steps) % 40
        assert result.passed_go == (start + steps >= 40)


def test_position_out_of_range():
    with pytest.raises(ValidationError):
        BoardPosition(40)
    with pytest.raises(ValidationError):
        BoardPosition(-1)
