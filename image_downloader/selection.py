"""
Interactive URL-file selection

Asks, file by file, whether a discovered URL-list file should be left out of
the batch. Answers (case-insensitive, first letter counts):

- ``y``: remove this file
- ``s``: keep this file and every remaining one, stop asking
- anything else: keep this file
"""

import sys
from dataclasses import dataclass
from functools import reduce
from pathlib import Path
from typing import Callable, Iterable, List, Optional, TextIO

PROMPT_TEMPLATE = "Remove file {name}?: [y,n,s]"


@dataclass(frozen=True)
class SelectionState:
    """Accumulator threaded through the prompt loop."""
    selected: tuple = ()
    skip_rest: bool = False


def _read_answer(input_func: Callable[[], Optional[str]]) -> str:
    answer = input_func()
    if answer is None:
        raise EOFError("Received null input!")
    return answer


def select_url_files(
    files: Iterable[Path],
    input_func: Optional[Callable[[], Optional[str]]] = None,
    output: Optional[TextIO] = None,
) -> List[Path]:
    """
    Fold the prompt over ``files`` and return the files kept for the batch.

    Args:
        files: Discovered URL-list files, in prompt order
        input_func: Returns one line of input, ``None`` or ``EOFError`` on EOF;
            defaults to reading ``sys.stdin``
        output: Stream the prompt is written to, defaults to ``sys.stdout``

    Raises:
        EOFError: input ended before every question was answered
    """
    out = output or sys.stdout
    read = input_func or _stdin_line

    def step(state: SelectionState, file: Path) -> SelectionState:
        if state.skip_rest:
            return SelectionState(state.selected + (file,), True)

        out.write(PROMPT_TEMPLATE.format(name=file.name))
        out.flush()
        answer = _read_answer(read).lower()

        if answer.startswith("y"):
            return state
        return SelectionState(state.selected + (file,), answer.startswith("s"))

    return list(reduce(step, files, SelectionState()).selected)


def _stdin_line() -> Optional[str]:
    line = sys.stdin.readline()
    if not line:
        return None
    return line.rstrip("\r\n")
