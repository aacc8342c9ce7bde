"""Run searches off the calling thread, one request stream at a time."""

import sys
import threading
import traceback
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from time import time
from typing import Literal, TextIO

from letterboxed.board import Board
from letterboxed.dictionary import Dictionary, DictionaryHandle
from letterboxed.errors import DuplicateSearchError
from letterboxed.solver.cancellation import CancellationToken
from letterboxed.solver.config import config as solver_config
from letterboxed.solver.solution import Solution
from letterboxed.solver.solver import BatchSink, Solver


@dataclass(frozen=True)
class SolveRequest:
    """Parameters of one search.  Two requests are duplicates iff they compare equal."""

    sides: tuple[str, ...]
    max_solutions: int
    max_words: int

    def __post_init__(self) -> None:
        if self.max_solutions < 0:
            raise ValueError(f"max_solutions must be non-negative, got {self.max_solutions}")
        if self.max_words < 1:
            raise ValueError(f"max_words must be at least 1, got {self.max_words}")

    @classmethod
    def create(
        cls,
        sides: tuple[str, ...] | list[str],
        max_solutions: int | None = None,
        max_words: int | None = None,
    ) -> "SolveRequest":
        return cls(
            sides=tuple(sides),
            max_solutions=solver_config.max_solutions if max_solutions is None else max_solutions,
            max_words=solver_config.max_words if max_words is None else max_words,
        )


@dataclass
class SearchResult:
    """Outcome of a dispatched search."""

    request: SolveRequest
    status: Literal["complete", "cancelled", "error"]
    delivered: int
    """Number of solutions handed to the caller's batch sink."""
    duration: float
    """Wall-clock seconds spent in the search."""
    err_msg: str | None = None


@dataclass
class _InFlight:
    request: SolveRequest
    token: CancellationToken
    future: "Future[SearchResult]"


class SearchDispatcher:
    """Serialize searches for a single request stream.

    Submitting a request cancels any in-flight search with different parameters; submitting
    a request identical to the in-flight one is rejected.  Searches run one at a time on a
    single worker thread; a superseded search stops at its next candidate word before the
    next one starts.  Batches from a cancelled search are dropped.
    """

    def __init__(
        self,
        dictionary: Dictionary | DictionaryHandle,
        *,
        batch_size: int | None = None,
        out: TextIO | None = None,
    ) -> None:
        self._dictionary = dictionary
        self.batch_size = solver_config.batch_size if batch_size is None else batch_size
        self._out = out
        self._lock = threading.Lock()
        self._in_flight: _InFlight | None = None
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="letterboxed")

    def __enter__(self) -> "SearchDispatcher":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()

    @property
    def out(self) -> TextIO:
        return self._out or sys.stderr

    def submit(self, request: SolveRequest, on_batch: BatchSink) -> "Future[SearchResult]":
        """Start a search for `request`, streaming batches of solutions to `on_batch`.

        The board and dictionary are resolved here, so their errors reach the caller directly.

        Raises:
            BoardError: If the request's sides do not form a valid board.
            DictionaryNotInitializedError: If a shared dictionary handle is not initialized.
            DuplicateSearchError: If an identical search is still in flight.
        """
        board = Board(request.sides)
        dictionary = (
            self._dictionary.get()
            if isinstance(self._dictionary, DictionaryHandle)
            else self._dictionary
        )

        with self._lock:
            current = self._in_flight
            if current is not None and not current.future.done():
                if current.request == request and not current.token.cancelled:
                    raise DuplicateSearchError(
                        f"An identical search is already running: {request}"
                    )
                print(
                    f"Cancelling search for {','.join(current.request.sides)}",
                    file=self.out,
                    flush=True,
                )
                current.token.cancel()

            token = CancellationToken()
            future = self._executor.submit(self._run, request, board, dictionary, token, on_batch)
            self._in_flight = _InFlight(request, token, future)
        return future

    def cancel(self) -> bool:
        """Cancel the in-flight search, if any.  Returns whether there was one to cancel."""
        with self._lock:
            current = self._in_flight
            if current is None or current.future.done() or current.token.cancelled:
                return False
            current.token.cancel()
            return True

    def shutdown(self, *, wait: bool = True) -> None:
        """Cancel any in-flight search and stop the worker thread."""
        self.cancel()
        self._executor.shutdown(wait=wait, cancel_futures=True)

    def _run(
        self,
        request: SolveRequest,
        board: Board,
        dictionary: Dictionary,
        token: CancellationToken,
        on_batch: BatchSink,
    ) -> SearchResult:
        start_time = time()
        forwarded = 0

        def forward(batch: list[Solution]) -> None:
            nonlocal forwarded
            # Drop batches once this search has been superseded
            if not token.cancelled:
                on_batch(batch)
                forwarded += len(batch)

        if token.cancelled:
            return SearchResult(request, "cancelled", 0, 0.0)

        print(f"Starting search for {board}", file=self.out, flush=True)
        try:
            solver = Solver(
                board,
                dictionary,
                request.max_solutions,
                max_words=request.max_words,
            )
            solver.solve_streaming(forward, token, batch_size=self.batch_size)
        except Exception as e:
            return SearchResult(
                request,
                "error",
                forwarded,
                time() - start_time,
                err_msg=f"Search encountered an error: {str(e)}\n{traceback.format_exc()}",
            )

        duration = time() - start_time
        status: Literal["complete", "cancelled"] = "cancelled" if token.cancelled else "complete"
        print(
            f"Search for {board} {status}: {forwarded:,} solutions in {duration:.3f}s",
            file=self.out,
            flush=True,
        )
        return SearchResult(request, status, forwarded, duration)
