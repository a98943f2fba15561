from chromaroll.game.scoring import efficiency


def test_no_moves_scores_zero():
    assert efficiency(0) == 0
    assert efficiency(-3) == 0


def test_floor_of_cells_over_moves():
    assert efficiency(25) == 100
    assert efficiency(30) == 83
    assert efficiency(24) == 104
    assert efficiency(1) == 2500


def test_custom_cell_count():
    assert efficiency(7, cell_count=4) == 57
    assert efficiency(1, cell_count=4) == 400
