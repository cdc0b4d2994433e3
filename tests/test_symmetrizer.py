import pytest
from wmapsym.grid import Cell, Grid, parse, serialize
from wmapsym.rotation import Rotation, rotate
from wmapsym.symmetrizer import Quadrant, Symmetrizer, owner, symmetrize
from wmapsym.wmap import WesnothMap
from wmapsym.errors import (
    AmbiguousStartError,
    DimensionMismatchError,
    DuplicatePlayerMarkerError,
    RotationError,
)


def terrains(g):
    return [[cell.terrain for cell in row] for row in g.cells]

def numbered(n, start=None):
    rows = [[Cell(f"T{r}_{c}") for c in range(n)] for r in range(n)]
    if start is not None:
        r, c = start
        rows[r][c] = rows[r][c].with_player(1)
    return Grid(rows)

def assert_symmetric(g):
    turned = rotate(g, 1)
    assert terrains(turned) == terrains(g)
    for r in range(g.height):
        for c in range(g.width):
            p = turned.at(r, c).player
            if p is None:
                assert g.at(r, c).player is None
            else:
                assert g.at(r, c).player == p % 4 + 1


def test_two_by_two_example():
    out = symmetrize(parse("1 Gg,Ww\nHh,Mm\n"), 0)
    assert serialize(out) == "1 Gg,2 Gg\n4 Gg,3 Gg\n"

def test_odd_map_uses_pinwheel_seams():
    out = symmetrize(parse("Aa,Bb,Cc\nDd,Ee,Ff\nGg,Hh,Ii\n"))
    assert serialize(out) == "Aa,Dd,Aa\nDd,Ee,Dd\nAa,Dd,Aa\n"

def test_odd_map_starts_in_corners():
    out = symmetrize(parse("1 Aa,Bb,Cc\nDd,Ee,Ff\nGg,Hh,Ii\n"))
    assert serialize(out) == "1 Aa,Dd,2 Aa\nDd,Ee,Dd\n4 Aa,Dd,3 Aa\n"

def test_start_on_seam_is_still_replicated():
    out = symmetrize(parse("Aa,1 Bb,Cc\nDd,Ee,Ff\nGg,Hh,Ii\n"))
    assert serialize(out) == "Aa,1 Dd,Aa\n4 Dd,Ee,2 Dd\nAa,3 Dd,Aa\n"
    assert_symmetric(out)

@pytest.mark.parametrize("n", [1, 2, 3, 4, 5, 6, 7, 8])
@pytest.mark.parametrize("turns", [0, 1, 2, 3])
def test_output_is_symmetric_and_same_size(n, turns):
    out = symmetrize(numbered(n), turns)
    assert out.shape == (n, n)
    assert_symmetric(out)
    assert out.starts() == {}

@pytest.mark.parametrize("n", [4, 5, 6, 9])
@pytest.mark.parametrize("turns", [0, 1, 2, 3])
def test_one_start_per_player(n, turns):
    out = symmetrize(numbered(n, start=(0, 1)), turns)
    starts = out.starts()
    assert sorted(starts) == [1, 2, 3, 4]
    assert len(set(starts.values())) == 4
    assert_symmetric(out)

def test_start_positions_follow_quadrants():
    out = symmetrize(numbered(6, start=(1, 0)))
    assert out.starts() == {1: (1, 0), 2: (0, 4), 3: (4, 5), 4: (5, 1)}

def test_sample_is_derotated():
    g = numbered(4)
    out = symmetrize(g, Rotation.R90)
    assert out.block(0, 0, 2, 2) == rotate(g.block(0, 0, 2, 2), 1)
    assert_symmetric(out)

def test_top_left_quadrant_kept_on_even_maps():
    g = numbered(6, start=(2, 1))
    out = symmetrize(g)
    assert out.block(0, 0, 3, 3) == g.block(0, 0, 3, 3)

def test_source_markers_outside_sample_are_dropped():
    g = parse("Aa,Bb,Cc,2 Dd\nEe,Ff,Gg,Hh\nIi,Jj,3 Kk,Ll\nMm,Nn,Oo,Pp\n")
    assert symmetrize(g).starts() == {}

def test_source_marker_value_is_relabelled():
    g = parse("Aa,Bb,Cc,Dd\nEe,4 Ff,Gg,Hh\nIi,Jj,Kk,Ll\nMm,Nn,Oo,Pp\n")
    assert symmetrize(g).at(1, 1) == Cell("Ff", 1)

def test_input_not_mutated():
    g = numbered(5, start=(0, 1))
    ref = g.copy()
    symmetrize(g, 3)
    assert g == ref

def test_quadrant_owners_partition_odd_map():
    n = 5
    counts = {q: 0 for q in Quadrant}
    for r in range(n):
        for c in range(n):
            counts[owner(r, c, n)] += 1
    assert counts == {Quadrant.TL: 7, Quadrant.TR: 6, Quadrant.BR: 6, Quadrant.BL: 6}
    assert owner(2, 2, n) == Quadrant.TL

def test_non_square_map():
    with pytest.raises(DimensionMismatchError):
        symmetrize(parse("Gg,Gg,Gg\nGg,Gg,Gg\n"))

def test_two_starts_in_sample():
    g = parse("1 Gg,Gg,Gg,Gg\nGg,2 Gg,Gg,Gg\nGg,Gg,Gg,Gg\nGg,Gg,Gg,Gg\n")
    with pytest.raises(AmbiguousStartError):
        symmetrize(g)

def test_start_on_center_cell():
    with pytest.raises(DimensionMismatchError):
        symmetrize(parse("Aa,Bb,Cc\nDd,1 Ee,Ff\nGg,Hh,Ii\n"))

def test_single_cell_without_start():
    g = parse("Gg\n")
    assert symmetrize(g, 2) == g

def test_single_cell_with_start():
    with pytest.raises(DimensionMismatchError):
        symmetrize(parse("1 Gg\n"))

def test_symmetrizer_wraps_maps():
    wmap = WesnothMap.from_text("1 Gg,Ww\nHh,Mm\n", source="tiny.map")
    s = Symmetrizer(wmap, 360)
    out = s.symmetrized_map()
    assert s.rotation == Rotation.R0
    assert out.source == "tiny.map"
    assert out.to_text() == "1 Gg,2 Gg\n4 Gg,3 Gg\n"
    assert s.symmetrized_map() is out
    assert wmap.to_text() == "1 Gg,Ww\nHh,Mm\n"

def test_symmetrizer_rejects_bad_rotation():
    wmap = WesnothMap.from_text("Gg\n")
    with pytest.raises(RotationError):
        Symmetrizer(wmap, 30)

def test_derotation_can_move_start_onto_center():
    g = parse("1 Aa,Bb,Cc\nDd,Ee,Ff\nGg,Hh,Ii\n")
    with pytest.raises(DimensionMismatchError):
        symmetrize(g, Rotation.R180)

def test_starts_follow_derotated_sample_on_odd_map():
    out = symmetrize(numbered(5, start=(0, 1)), Rotation.R90)
    assert out.starts() == {1: (1, 2), 2: (2, 3), 3: (3, 2), 4: (2, 1)}
    assert_symmetric(out)

def test_grid_with_repeated_player_is_rejected_before_symmetrizing():
    rows = [[Cell("Gg") for _ in range(4)] for _ in range(4)]
    rows[0][0] = Cell("Gg", 1)
    rows[1][1] = Cell("Gg", 1)
    with pytest.raises(DuplicatePlayerMarkerError):
        symmetrize(Grid(rows))
