import pytest

from stack_cases import CANDIDATE_CASES, FRAME_CASES, REVERSED_PATH
from stackscan.stackparse import parse_line, select_candidate


@pytest.mark.parametrize(
    "raw,path,coordinate",
    [case[1:] for case in CANDIDATE_CASES],
    ids=[case[0] for case in CANDIDATE_CASES],
)
def test_select_candidate(raw, path, coordinate):
    candidate = select_candidate(raw)
    got = (candidate.path, candidate.coordinate) if candidate else (None, None)
    assert got == (path, coordinate)


@pytest.mark.xfail(strict=True, reason="reversed path text is not detected")
def test_reversed_path_is_rejected():
    candidate = select_candidate(REVERSED_PATH)
    got = (candidate.path, candidate.coordinate) if candidate else (None, None)
    assert got == (None, None)


@pytest.mark.parametrize("raw,method,path,line,column", FRAME_CASES)
def test_parse_line(raw, method, path, line, column):
    frame = parse_line(raw)
    assert frame is not None
    assert (frame.method, frame.path, frame.line, frame.column) == (method, path, line, column)


@pytest.mark.parametrize(
    "raw",
    [case[1] for case in CANDIDATE_CASES if case[3] is not None]
    + [case[0] for case in FRAME_CASES],
)
def test_full_path_reparses_to_same_location(raw):
    frame = parse_line(raw)
    again = parse_line(frame.full_path)
    assert (again.path, again.line, again.column) == (frame.path, frame.line, frame.column)
