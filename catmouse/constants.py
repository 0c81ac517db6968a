DEFAULT_ROOM_ID = "LOBBY"
HOST_SEAT = 0

UNSEATED_NAME = "player"
HOST_NAME = "Host"

# Axis-aligned wall segments (x1, y1, x2, y2) in normalized map coordinates.
WALL_SEGMENTS: tuple[tuple[float, float, float, float], ...] = (
    (0.12, 0.14, 0.12, 0.34),
    (0.34, 0.18, 0.34, 0.38),
    (0.56, 0.12, 0.56, 0.30),
    (0.78, 0.52, 0.78, 0.72),
    (0.90, 0.20, 0.90, 0.44),
    (0.04, 0.58, 0.24, 0.58),
    (0.30, 0.70, 0.50, 0.70),
    (0.58, 0.62, 0.74, 0.62),
    (0.16, 0.46, 0.28, 0.46),
)


def seat_name(seat_index: int) -> str:
    """Positional display name; seats are shown 1-based."""
    return f"Player {seat_index + 1}"


__all__ = [
    "DEFAULT_ROOM_ID",
    "HOST_SEAT",
    "UNSEATED_NAME",
    "HOST_NAME",
    "WALL_SEGMENTS",
    "seat_name",
]
