"""Hook sequencing - runs an ordered list of handlers under one mode.

The bus builds the invocation list; the sequencer decides how each
handler's return value is treated:

- sync: call in order, never await
- async: call in order, awaiting every awaitable before the next call
- auto: call synchronously until a handler returns an awaitable, then
  continue asynchronously
- asIs: call in order and hand the last result back untouched

Every handler receives the same positional arguments. The result is the
last handler's return value (or a coroutine resolving to it).
"""

import asyncio
import inspect
from collections.abc import Mapping, Sequence
from typing import Any, Awaitable, Callable

from pydantic import BaseModel, ConfigDict, field_validator

from hooter.core.exceptions import InvalidModeError
from hooter.core.logging import get_logger
from hooter.core.modes import MODES, Mode

logger = get_logger(__name__)

Handler = Callable[..., Any]


class SequencerConfig(BaseModel):
    """Sequencer configuration.

    Attributes:
        mode: Mode used when the sequencer itself is called.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    mode: str = Mode.AUTO

    @field_validator("mode")
    @classmethod
    def validate_mode(cls, v: str) -> str:
        if v not in MODES:
            raise ValueError(f"mode must be one of: {', '.join(MODES)}")
        return v


class Sequencer:
    """Runs handler lists in one of the four modes.

    Example:
        sequencer = Sequencer()
        sequencer.sync([log, store], ("user.created",))
        await sequencer.async_([fetch, save], (42,))
    """

    def __init__(self, config: SequencerConfig | Mapping[str, Any] | None = None) -> None:
        if config is None:
            config = SequencerConfig()
        elif isinstance(config, Mapping):
            config = SequencerConfig.model_validate(dict(config))
        elif not isinstance(config, SequencerConfig):
            raise TypeError("Sequencer config must be a SequencerConfig or a mapping")

        self.config = config
        self._detached: set[asyncio.Future] = set()

    def __call__(self, handlers: Sequence[Handler], args: Sequence[Any] = ()) -> Any:
        return self.run(self.config.mode, handlers, args)

    def run(self, mode: str, handlers: Sequence[Handler], args: Sequence[Any] = ()) -> Any:
        """Run handlers with the discipline for mode."""
        if mode == Mode.AUTO:
            return self.auto(handlers, args)
        if mode == Mode.AS_IS:
            return self.as_is(handlers, args)
        if mode == Mode.SYNC:
            return self.sync(handlers, args)
        if mode == Mode.ASYNC:
            return self.async_(handlers, args)
        raise InvalidModeError(mode)

    def sync(self, handlers: Sequence[Handler], args: Sequence[Any] = ()) -> Any:
        """Call handlers in order without awaiting anything.

        An awaitable returned by a handler is detached from the chain and
        counts as None.
        """
        result = None
        for handler in handlers:
            result = handler(*args)
            if inspect.isawaitable(result):
                self._detach(result)
                result = None
        return result

    def as_is(self, handlers: Sequence[Handler], args: Sequence[Any] = ()) -> Any:
        """Call handlers in order and return the last result uncoerced."""
        result = None
        last = len(handlers) - 1
        for index, handler in enumerate(handlers):
            result = handler(*args)
            if index < last and inspect.isawaitable(result):
                self._detach(result)
        return result

    def async_(self, handlers: Sequence[Handler], args: Sequence[Any] = ()) -> Awaitable[Any]:
        """Return a coroutine awaiting each handler before the next runs."""
        return self._run_async(list(handlers), tuple(args))

    def auto(self, handlers: Sequence[Handler], args: Sequence[Any] = ()) -> Any:
        """Run synchronously until a handler returns an awaitable."""
        handlers = list(handlers)
        result = None
        for index, handler in enumerate(handlers):
            result = handler(*args)
            if inspect.isawaitable(result):
                return self._resume_async(result, handlers[index + 1:], tuple(args))
        return result

    async def _run_async(
        self,
        handlers: list[Handler],
        args: tuple,
        result: Any = None,
    ) -> Any:
        for handler in handlers:
            result = handler(*args)
            if inspect.isawaitable(result):
                result = await result
        return result

    async def _resume_async(
        self,
        pending: Awaitable[Any],
        handlers: list[Handler],
        args: tuple,
    ) -> Any:
        result = await pending
        return await self._run_async(handlers, args, result)

    def _detach(self, awaitable: Awaitable[Any]) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning(
                "Discarding awaitable returned by a hook, no running event loop",
                awaitable=type(awaitable).__name__,
            )
            if inspect.iscoroutine(awaitable):
                awaitable.close()
            return

        future = asyncio.ensure_future(awaitable, loop=loop)
        # Hold a reference until done so the task is not garbage collected
        self._detached.add(future)
        future.add_done_callback(self._detached.discard)
