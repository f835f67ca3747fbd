import logging

from chessrules.board import Board, create_initial_board
from chessrules.constants import BLACK, WHITE
from chessrules.move import Position
from chessrules.movegen import (
    generate_legal_moves,
    in_check,
    legal_destinations,
    pseudo_legal_destinations,
)


def board_with(pieces: dict[str, str]) -> Board:
    """Build a board from ``{"e4": "WR", ...}``."""
    labels = [[""] * 8 for _ in range(8)]
    for square, label in pieces.items():
        position = Position.from_square(square)
        labels[position.row][position.col] = label
    return Board.from_labels(labels)


def squares(positions: set[Position]) -> set[str]:
    return {position.square() for position in positions}


def test_start_position_has_20_legal_moves() -> None:
    assert len(generate_legal_moves(create_initial_board(), WHITE)) == 20
    assert len(generate_legal_moves(create_initial_board(), BLACK)) == 20


def test_pawn_single_and_double_push() -> None:
    board = create_initial_board()
    assert squares(pseudo_legal_destinations(board, Position.from_square("e2"))) == {"e3", "e4"}
    assert squares(pseudo_legal_destinations(board, Position.from_square("d7"))) == {"d6", "d5"}


def test_pawn_blocked_directly_ahead_cannot_advance() -> None:
    board = board_with({"e2": "WP", "e3": "BN", "a1": "WK", "h8": "BK"})
    assert pseudo_legal_destinations(board, Position.from_square("e2")) == set()


def test_pawn_double_push_needs_both_squares_empty() -> None:
    board = board_with({"e2": "WP", "e4": "BN", "a1": "WK", "h8": "BK"})
    assert squares(pseudo_legal_destinations(board, Position.from_square("e2"))) == {"e3"}


def test_pawn_double_push_only_from_start_rank() -> None:
    board = board_with({"e3": "WP", "a1": "WK", "h8": "BK"})
    assert squares(pseudo_legal_destinations(board, Position.from_square("e3"))) == {"e4"}


def test_pawn_captures_only_opposing_pieces_diagonally() -> None:
    board = board_with({"e4": "WP", "d5": "BP", "f5": "WN", "a1": "WK", "h8": "BK"})
    assert squares(pseudo_legal_destinations(board, Position.from_square("e4"))) == {"e5", "d5"}


def test_pawn_on_last_rank_has_no_forward_move() -> None:
    board = board_with({"e8": "WP", "a1": "WK", "h6": "BK"})
    assert pseudo_legal_destinations(board, Position.from_square("e8")) == set()


def test_knight_jumps_over_full_rank() -> None:
    board = create_initial_board()
    assert squares(legal_destinations(board, Position.from_square("g1"))) == {"f3", "h3"}
    assert squares(legal_destinations(board, Position.from_square("b8"))) == {"a6", "c6"}


def test_knight_occupancy_uses_its_own_color() -> None:
    # White to move is irrelevant: the black knight may capture white, not black.
    board = board_with({"d4": "BN", "e6": "WP", "c6": "BP", "a1": "WK", "h8": "BK"})
    destinations = squares(pseudo_legal_destinations(board, Position.from_square("d4")))
    assert "e6" in destinations
    assert "c6" not in destinations
    assert len(destinations) == 7


def test_king_adjacent_moves_on_empty_board() -> None:
    board = board_with({"d4": "WK", "h8": "BK"})
    assert squares(pseudo_legal_destinations(board, Position.from_square("d4"))) == {
        "c3", "c4", "c5", "d3", "d5", "e3", "e4", "e5",
    }


def test_rook_ray_stops_at_first_piece() -> None:
    board = board_with({"d4": "WR", "d6": "BP", "d7": "BR", "f4": "WP", "a1": "WK", "h8": "BK"})
    destinations = squares(pseudo_legal_destinations(board, Position.from_square("d4")))

    assert "d6" in destinations
    assert "d7" not in destinations
    assert "f4" not in destinations
    assert "e4" in destinations
    assert "g4" not in destinations
    assert destinations == {"d5", "d6", "d3", "d2", "d1", "c4", "b4", "a4", "e4"}


def test_bishop_never_captures_own_color() -> None:
    board = board_with({"c1": "WB", "b2": "WP", "d2": "WP", "e1": "WK", "e8": "BK"})
    assert pseudo_legal_destinations(board, Position.from_square("c1")) == set()


def test_queen_is_rook_plus_bishop() -> None:
    board = board_with({"d4": "WQ", "h1": "WK", "h7": "BK"})
    destinations = pseudo_legal_destinations(board, Position.from_square("d4"))
    assert len(destinations) == 27


def test_empty_square_has_no_moves() -> None:
    board = create_initial_board()
    assert pseudo_legal_destinations(board, Position.from_square("e4")) == set()
    assert legal_destinations(board, Position.from_square("e4")) == set()
    assert legal_destinations(board, Position(9, 9)) == set()


def test_in_check_detection() -> None:
    board = board_with({"e1": "WK", "e8": "BR", "a8": "BK"})
    assert in_check(board, WHITE)
    assert not in_check(board, BLACK)


def test_pawn_attacks_diagonally_not_forward() -> None:
    assert in_check(board_with({"e1": "WK", "d2": "BP", "h8": "BK"}), WHITE)
    assert not in_check(board_with({"e1": "WK", "e2": "BP", "h8": "BK"}), WHITE)


def test_pinned_piece_cannot_leave_the_line() -> None:
    board = board_with({"e1": "WK", "e2": "WB", "e8": "BR", "a8": "BK"})
    assert legal_destinations(board, Position.from_square("e2")) == set()


def test_moves_that_ignore_check_are_filtered_out() -> None:
    board = board_with({"e1": "WK", "e2": "BR", "a1": "WR", "e8": "BK"})
    moves = {(m.from_pos.square(), m.to_pos.square()) for m in generate_legal_moves(board, WHITE)}

    assert ("a1", "a2") not in moves
    assert ("e1", "e2") in moves
    assert ("e1", "d1") in moves


def test_king_cannot_step_into_attack() -> None:
    board = board_with({"e1": "WK", "d8": "BR", "a8": "BK"})
    destinations = squares(legal_destinations(board, Position.from_square("e1")))
    assert "d1" not in destinations
    assert "d2" not in destinations
    assert destinations == {"e2", "f1", "f2"}


def test_legality_check_leaves_board_unchanged() -> None:
    board = create_initial_board()
    snapshot = board.copy()
    generate_legal_moves(board, WHITE)
    assert board == snapshot


def test_missing_king_is_not_in_check_and_logged(caplog) -> None:
    board = board_with({"e8": "BR", "a8": "BK"})
    with caplog.at_level(logging.WARNING, logger="chessrules.movegen"):
        assert not in_check(board, WHITE)
    assert "King not found for White" in caplog.text


def test_missing_king_warns_once_per_query(caplog) -> None:
    board = board_with({"e2": "WP", "b1": "WN", "d1": "WQ", "a8": "BK"})
    with caplog.at_level(logging.WARNING, logger="chessrules.movegen"):
        assert generate_legal_moves(board, WHITE)
    assert len([record for record in caplog.records if record.levelno == logging.WARNING]) == 1

    caplog.clear()
    with caplog.at_level(logging.WARNING, logger="chessrules.movegen"):
        assert legal_destinations(board, Position.from_square("d1"))
    assert len([record for record in caplog.records if record.levelno == logging.WARNING]) == 1
