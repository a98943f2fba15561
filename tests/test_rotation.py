from chromaroll.game.game_core import Color, Direction, DIRECTIONS, INITIAL_CUBE_FACES, Position
from chromaroll.game.rotation import orientation_key, roll, rotate


def test_roll_right_brings_right_face_down():
    o = rotate(INITIAL_CUBE_FACES, Direction.RIGHT)
    assert o.bottom == Color.YELLOW
    assert o.top == Color.GREEN
    assert o.left == Color.PINK
    assert o.right == Color.WHITE
    assert o.front == Color.RED
    assert o.back == Color.BLUE


def test_roll_up_brings_front_face_down():
    o = rotate(INITIAL_CUBE_FACES, Direction.UP)
    assert (o.top, o.front, o.bottom, o.back) == (Color.BLUE, Color.WHITE, Color.RED, Color.PINK)
    assert (o.left, o.right) == (Color.GREEN, Color.YELLOW)


def test_roll_down_brings_back_face_down():
    o = rotate(INITIAL_CUBE_FACES, Direction.DOWN)
    assert (o.top, o.front, o.bottom, o.back) == (Color.RED, Color.PINK, Color.BLUE, Color.WHITE)


def test_roll_left_brings_left_face_down():
    o = rotate(INITIAL_CUBE_FACES, Direction.LEFT)
    assert (o.top, o.right, o.bottom, o.left) == (Color.YELLOW, Color.PINK, Color.GREEN, Color.WHITE)
    assert (o.front, o.back) == (Color.RED, Color.BLUE)


def test_rotate_does_not_modify_argument():
    before = INITIAL_CUBE_FACES.to_dict()
    rotate(INITIAL_CUBE_FACES, Direction.UP)
    assert INITIAL_CUBE_FACES.to_dict() == before


def test_opposite_roll_is_inverse():
    for d in DIRECTIONS:
        assert rotate(rotate(INITIAL_CUBE_FACES, d), d.opposite) == INITIAL_CUBE_FACES


def test_four_rolls_same_direction_is_identity():
    for d in DIRECTIONS:
        o = INITIAL_CUBE_FACES
        for _ in range(4):
            o = rotate(o, d)
        assert o == INITIAL_CUBE_FACES


def test_colors_are_a_permutation():
    o = INITIAL_CUBE_FACES
    for d in [Direction.UP, Direction.RIGHT, Direction.RIGHT, Direction.DOWN, Direction.LEFT]:
        o = rotate(o, d)
        assert sorted(c.value for c in o.colors()) == sorted(c.value for c in INITIAL_CUBE_FACES.colors())


def test_reachable_orientations_have_unique_keys():
    seen = {INITIAL_CUBE_FACES}
    frontier = [INITIAL_CUBE_FACES]
    while frontier:
        current = frontier.pop()
        for d in DIRECTIONS:
            nxt = rotate(current, d)
            if nxt not in seen:
                seen.add(nxt)
                frontier.append(nxt)
    assert len(seen) == 24
    assert len({orientation_key(o) for o in seen}) == 24


def test_roll_moves_position():
    pos, o = roll(Position(2, 2), INITIAL_CUBE_FACES, Direction.UP)
    assert pos == Position(2, 3)
    assert o.bottom == Color.RED
    assert roll(Position(2, 2), INITIAL_CUBE_FACES, Direction.LEFT)[0] == Position(1, 2)
