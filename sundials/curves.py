"""
Turning sampled points (with gaps) into fixed-length renderable curves.

A renderer wants the same number of points in a curve every time it is
redrawn, while some samples may not exist (sun below the horizon, plate in
shade). Sequences are treated as cyclic: the sample after the last one is the
first one.
"""
from typing import List, Optional, Sequence, TypeVar

X = TypeVar("X")


def non_null_sequence(arr: Sequence[Optional[X]]) -> List[X]:
    """
    The longest run of present samples, starting after the first gap and
    wrapping past the end if needed.
    e.g. [A, B, None, C] -> [C, A, B]
    """
    if all(x is None for x in arr):
        return []

    try:
        first_gap = next(i for i, x in enumerate(arr) if x is None)
    except StopIteration:
        return list(arr)

    seq: List[X] = []
    for j in range(first_gap, first_gap + len(arr)):
        el = arr[j % len(arr)]
        if el is None:
            if seq:
                break
        else:
            seq.append(el)
    return seq


def pad_with_repeated_last(arr: Sequence[X], length: int) -> List[X]:
    out = list(arr)
    out.extend([out[-1]] * (length - len(out)))
    return out


def extract_close_and_pad(arr: Sequence[Optional[X]], length: int, placeholder: X,
                          dont_close: bool = False) -> List[X]:
    """
    Exactly `length` points from `arr`.

    `length` should be one more than the number of samples so a curve with
    no gaps can be closed by repeating its first point. An all-absent curve
    becomes `placeholder` repeated, which draws as nothing. Shorter runs are
    padded with their last point.
    e.g. ([A, B], 4) -> [A, B, A, A]; ([A, None, B], 4) -> [B, A, A, A]
    """
    line = non_null_sequence(arr)

    if not line:
        line = [placeholder]
    elif (len(line) == length - 1 or len(line) == len(arr)) and not dont_close:
        # the whole cycle is present
        line.append(line[0])

    return pad_with_repeated_last(line, length)[:length]
