"""
app/campaign/callables.py

Callback references for campaign builder components.

Registration only checks that a callback *looks* like something callable.
Resolution (importing the target) and invocation happen later, when a
campaign event fires, through ``invoke_callback`` with a single typed
``CallbackContext`` argument.

Accepted reference shapes:
    - any Python callable
    - "package.module.function"
    - "package.module:function" or "package.module:Class.method"
    - "package.module.Class::method"
    - (target, "method") where target is an object or a dotted class path
"""
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional
import importlib
import logging

from app.campaign.errors import InvalidCallableError

logger = logging.getLogger(__name__)

_NON_TARGET_TYPES = (bool, int, float, complex, bytes)


def _is_dotted_path(value: str) -> bool:
    return bool(value) and all(part.isidentifier() for part in value.split("."))


def is_callable_reference(value: Any) -> bool:
    """
    Shape check for a callback reference.

    Does not import anything; a well-formed path to a missing module still
    passes. Use ``resolve_callable`` to check that it exists.
    """
    if callable(value):
        return True

    if isinstance(value, str):
        if "::" in value:
            owner, _, method = value.partition("::")
            return _is_dotted_path(owner) and method.isidentifier()
        if ":" in value:
            module, _, attribute = value.partition(":")
            return _is_dotted_path(module) and _is_dotted_path(attribute)
        return _is_dotted_path(value)

    if isinstance(value, (tuple, list)) and len(value) == 2:
        target, method = value
        if not isinstance(method, str) or not method.isidentifier():
            return False
        if isinstance(target, str):
            return _is_dotted_path(target)
        return target is not None and not isinstance(target, _NON_TARGET_TYPES)

    return False


def _import_object(path: str) -> Any:
    """Import the longest importable module prefix of ``path`` and walk the rest."""
    parts = path.split(".")
    for index in range(len(parts), 0, -1):
        module_name = ".".join(parts[:index])
        try:
            obj = importlib.import_module(module_name)
        except ImportError:
            continue
        for attribute in parts[index:]:
            obj = getattr(obj, attribute)
        return obj
    raise ImportError(f"No module found for '{path}'")


def _walk(obj: Any, dotted: str) -> Any:
    for attribute in dotted.split("."):
        obj = getattr(obj, attribute)
    return obj


def resolve_callable(reference: Any) -> Callable:
    """
    Turn a callback reference into the actual callable.

    Raises:
        InvalidCallableError: The reference is malformed, cannot be imported,
            or does not point at something callable.
    """
    if not is_callable_reference(reference):
        raise InvalidCallableError(reference)

    if callable(reference):
        return reference

    try:
        if isinstance(reference, str):
            if "::" in reference:
                owner, _, method = reference.partition("::")
                target = getattr(_import_object(owner), method)
            elif ":" in reference:
                module, _, attribute = reference.partition(":")
                target = _walk(importlib.import_module(module), attribute)
            else:
                target = _import_object(reference)
        else:
            owner, method = reference
            if isinstance(owner, str):
                owner = _import_object(owner)
            target = getattr(owner, method)
    except (ImportError, AttributeError) as e:
        raise InvalidCallableError(reference, str(e)) from e

    if not callable(target):
        raise InvalidCallableError(reference, "target is not callable")
    return target


@dataclass
class CallbackContext:
    """
    The only argument a campaign component callback receives.

    Attributes:
        event: Configured campaign event (type, properties, campaign id...)
        lead: The contact the event fired for, if any
        passthrough: Whatever the triggering bundle passed along
    """

    event: Dict[str, Any] = field(default_factory=dict)
    lead: Optional[Dict[str, Any]] = None
    passthrough: Any = None

    @property
    def properties(self) -> Dict[str, Any]:
        return self.event.get("properties") or {}


def invoke_callback(reference: Any, context: CallbackContext) -> bool:
    """
    Resolve ``reference`` and call it with ``context``.

    Callbacks have the signature ``callback(context: CallbackContext) -> bool``;
    the return value says whether the campaign should continue down this path.
    """
    func = resolve_callable(reference)
    result = func(context)
    logger.debug(f"Callback {getattr(func, '__qualname__', func)!s} returned {result!r}")
    return bool(result)


__all__ = [
    "is_callable_reference",
    "resolve_callable",
    "CallbackContext",
    "invoke_callback",
]
