from enum import Enum

Coord = tuple[int, int]  # (col, row), row 0 is the top row


class Side(str, Enum):
    ATTACKER = "attacker"
    DEFENDER = "defender"

    @property
    def opponent(self) -> "Side":
        return Side.DEFENDER if self is Side.ATTACKER else Side.ATTACKER


class PieceKind(str, Enum):
    KING = "king"
    SOLDIER = "soldier"


class FieldKind(int, Enum):
    """Structural digits of a scenario grid. Digits 5-9 are decorative only."""

    PLAIN = 0
    THRONE = 1
    DEFENDER_CAMP = 2
    ATTACKER_CAMP = 3
    ESCAPE = 4


class KingCaptureRule(str, Enum):
    """
    How the king-surrounded win is decided:
    - STRICT: all four orthogonal squares hold attackers (an edge king is safe)
    - EXTENDED: every orthogonal square is an attacker, an empty escape square,
      the empty throne or the board edge
    """

    STRICT = "strict"
    EXTENDED = "extended"


class GameStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    WON = "won"


class WinReason(str, Enum):
    KING_ESCAPED = "king_escaped"
    KING_SURROUNDED = "king_surrounded"
    OPPONENT_CLOCK_EXPIRED = "opponent_clock_expired"


class MoveError(str, Enum):
    NO_PIECE_AT_SOURCE = "no_piece_at_source"
    WRONG_SIDE_TO_MOVE = "wrong_side_to_move"
    ILLEGAL_DESTINATION = "illegal_destination"
    GAME_ALREADY_ENDED = "game_already_ended"


class ScenarioErrorKind(str, Enum):
    EMPTY_STRUCTURE = "empty_structure"
    INCONSISTENT_ROW_LENGTH = "inconsistent_row_length"
    INVALID_CHARACTER = "invalid_character"
    BOARD_TOO_SMALL = "board_too_small"
    MULTIPLE_THRONES = "multiple_thrones"
    THRONE_ON_ESCAPE = "throne_on_escape"
    NOT_ENOUGH_TOKENS = "not_enough_tokens"
    INVALID_SIDE = "invalid_side"
    INVALID_KIND = "invalid_kind"
    INVALID_COORDINATE = "invalid_coordinate"
    OUT_OF_BOUNDS = "out_of_bounds"
    DUPLICATE_POSITION = "duplicate_position"
    SOLDIER_ON_SPECIAL_SQUARE = "soldier_on_special_square"
    MISSING_KING = "missing_king"
    MULTIPLE_KINGS = "multiple_kings"
    KING_NOT_DEFENDER = "king_not_defender"
    KING_ON_ESCAPE = "king_on_escape"


class ActionKind(str, Enum):
    MOVE = "move"


class ActionLogResult(str, Enum):
    APPLIED = "applied"
    ILLEGAL = "illegal"
    ERROR = "error"
