"""
Per-call judgment settings.

Validators are shared and immutable, so settings that vary between calls
(currently only strict object shapes) live in a context variable instead.
Each thread and asyncio task sees its own value.
"""

from contextlib import contextmanager
from contextvars import ContextVar

# Read by ObjectV when its own `strict` is None
_reject_unknown_keys: ContextVar[bool] = ContextVar("sibyl_strict", default=False)


def is_strict() -> bool:
    """True inside `judgment_context(strict=True)`."""
    return _reject_unknown_keys.get()


@contextmanager
def judgment_context(*, strict: bool = False):
    """
    Judge with object validators rejecting unrecognized keys.

    Args:
        strict: If True, object validators that did not pin their own mode
               report one "unrecognized_key" issue per input key that is not
               part of their schema, instead of dropping it.

    Example:
        user = Obj({"name": Str()})

        user.judge({"name": "Akane", "role": "inspector"})  # {"name": "Akane"}

        with judgment_context(strict=True):
            user.try_judge({"name": "Akane", "role": "inspector"})
            # Err: Unrecognized key: 'role' at path "role"
    """
    token = _reject_unknown_keys.set(strict)
    try:
        yield
    finally:
        _reject_unknown_keys.reset(token)
