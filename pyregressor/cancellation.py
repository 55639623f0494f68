"""
Cooperative cancellation.

Long computations (matrix inversion, gradient descent) poll a
``CancellationToken`` at coarse loop boundaries. An in-flight outer
iteration always runs to completion before cancellation is observed.
"""

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Any, Callable, Optional

from .exceptions import CancelledError, DeadlineExceededError

logger = logging.getLogger(__name__)


class CancellationToken:
    """
    Cancellation flag with an optional deadline.

    Parameters
    ----------
    deadline : float, optional
        Absolute ``time.monotonic()`` value after which the token reports
        itself as expired.
    parent : CancellationToken, optional
        Token whose cancellation and deadline this token also observes.
        Cancelling the child never cancels the parent.

    Examples
    --------
    >>> token = CancellationToken.with_timeout(5.0)
    >>> model.fit(X, y, token=token)    # doctest: +SKIP
    """

    def __init__(self, deadline: Optional[float] = None, parent: Optional["CancellationToken"] = None):
        self._event = threading.Event()
        self.deadline = deadline
        self.parent = parent

    @classmethod
    def with_timeout(cls, seconds: float) -> "CancellationToken":
        """Create a token that expires ``seconds`` from now."""
        if seconds < 0:
            raise ValueError(f"timeout must be non-negative, got {seconds}")
        return cls(deadline=time.monotonic() + seconds)

    def cancel(self) -> None:
        """Request cancellation."""
        self._event.set()

    @property
    def cancelled(self) -> bool:
        if self.parent is not None and self.parent.cancelled:
            return True
        return self._event.is_set() or self.expired

    @property
    def expired(self) -> bool:
        return self.deadline is not None and time.monotonic() >= self.deadline

    def raise_if_cancelled(self) -> None:
        """
        Raise if cancellation was requested or the deadline passed.

        Raises
        ------
        CancelledError
            If ``cancel()`` was called.
        DeadlineExceededError
            If the deadline passed.
        """
        if self.parent is not None:
            self.parent.raise_if_cancelled()
        if self._event.is_set():
            raise CancelledError("computation cancelled")
        if self.expired:
            raise DeadlineExceededError("computation deadline exceeded")

    def __repr__(self):
        return f"CancellationToken(cancelled={self.cancelled}, deadline={self.deadline})"


def check(token: Optional[CancellationToken]) -> None:
    """Checkpoint helper: no-op when ``token`` is None."""
    if token is not None:
        token.raise_if_cancelled()


def run_with_timeout(
    fn: Callable[..., Any],
    timeout: Optional[float],
    *args,
    token: Optional[CancellationToken] = None,
    **kwargs,
) -> Any:
    """
    Run ``fn(*args, token=token, **kwargs)`` on a worker thread.

    The worker gets a call-local child of ``token``. If the call does not
    finish within ``timeout`` seconds the child is cancelled and the worker
    is joined before ``DeadlineExceededError`` is raised, so no computation
    outlives the call. The caller's token is never cancelled here and can
    be reused.

    Parameters
    ----------
    fn : callable
        Computation accepting a ``token`` keyword argument.
    timeout : float or None
        Seconds to wait. ``None`` runs ``fn`` synchronously in the caller.
    token : CancellationToken, optional
        Caller's token; cancelling it also cancels the worker.

    Returns
    -------
    Whatever ``fn`` returns.
    """
    if timeout is None:
        return fn(*args, token=token, **kwargs)

    local = CancellationToken(parent=token)

    with ThreadPoolExecutor(max_workers=1, thread_name_prefix="pyregressor") as pool:
        future = pool.submit(fn, *args, token=local, **kwargs)
        done, _ = wait([future], timeout=timeout)
        if future in done:
            return future.result()

        logger.debug("Deadline of %.3fs exceeded, cancelling worker", timeout)
        local.cancel()
        try:
            # join: the worker observes the token at its next checkpoint
            future.result()
        except CancelledError:
            pass
        raise DeadlineExceededError(f"computation did not finish within {timeout}s")
