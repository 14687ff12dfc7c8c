"""Hook decorator API for registering hooks on a bus.

Enables the ``@bus.hooks.on("user.*")`` syntax. The decorated function is
registered in the requested phase and returned unchanged, with its handle
attached as ``fn.hook_id`` so it can be passed to ``bus.unhook()`` later.
"""

from typing import TYPE_CHECKING, Any, Callable, TypeVar

from hooter.core.hooks.matching import GLOBSTAR

if TYPE_CHECKING:
    from hooter.core.bus.hooter import Hooter

F = TypeVar("F", bound=Callable[..., Any])


class HookDecorator:
    """Provides decorator syntax for hook registration.

    Example:
        @bus.hooks.before("order.*")
        def validate(event, order):
            ...

        @bus.hooks.after()
        def audit(event, *args):
            ...

        bus.unhook(validate.hook_id)
    """

    def __init__(self, bus: "Hooter") -> None:
        self._bus = bus

    @property
    def bus(self) -> "Hooter":
        return self._bus

    def before(self, pattern: str = GLOBSTAR) -> Callable[[F], F]:
        """Register the decorated function as a before-phase hook."""
        return self._create_decorator(self._bus.hook_start, pattern)

    def on(self, pattern: str = GLOBSTAR) -> Callable[[F], F]:
        """Register the decorated function as a main-phase hook."""
        return self._create_decorator(self._bus.hook, pattern)

    def after(self, pattern: str = GLOBSTAR) -> Callable[[F], F]:
        """Register the decorated function as an after-phase hook."""
        return self._create_decorator(self._bus.hook_end, pattern)

    def _create_decorator(
        self,
        register: Callable[[str, Callable[..., Any]], str],
        pattern: str,
    ) -> Callable[[F], F]:
        if not isinstance(pattern, str):
            raise TypeError("An event type must be a string")

        def decorator(func: F) -> F:
            hook_id = register(pattern, func)
            # Attach the handle so callers can unhook the function later
            func.hook_id = hook_id  # type: ignore[attr-defined]
            return func

        return decorator
