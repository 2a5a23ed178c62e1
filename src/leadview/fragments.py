"""Fragment registry.

A fragment is a named unit of modal content: an optional predicate that
decides eligibility for a (lead, payload) pair and a render function that
produces markup. The registry only maps names to fragments. Render order
always comes from the layout the caller is building.

The registry is an ordinary instance handed to the modal builder. It is
filled at construction by installer callables and then by draining an
extension queue, in that order, so queued extensions may override
built-in fragments.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .extensions import ExtensionQueue
    from .payload import NormalizedPayload
    from .records import Lead

logger = logging.getLogger(__name__)

RenderFn = Callable[["Lead", "NormalizedPayload"], str]
PredicateFn = Callable[["Lead", "NormalizedPayload"], Any]


@dataclass(frozen=True)
class Fragment:
    """A named, conditionally eligible unit of rendered content."""

    name: str
    render: RenderFn
    predicate: Optional[PredicateFn] = None
    description: str = ""

    def is_eligible(self, lead: "Lead", payload: "NormalizedPayload") -> bool:
        """Predicate-less fragments are always eligible."""
        if self.predicate is None:
            return True
        return bool(self.predicate(lead, payload))


class FragmentRegistry:
    """Name -> Fragment store."""

    def __init__(
        self,
        installers: Iterable[Callable[["FragmentRegistry"], None]] = (),
        extensions: Optional["ExtensionQueue"] = None,
    ):
        self._fragments: Dict[str, Fragment] = {}

        for install in installers:
            install(self)

        if extensions is not None:
            applied = extensions.drain(self)
            if applied:
                logger.info("Applied %d queued fragment extension(s)", applied)

    def register(self, name: str, fragment) -> Fragment:
        """Register ``fragment`` under ``name``; an existing entry is replaced.

        ``fragment`` may be a Fragment or a bare render callable.
        """
        if not isinstance(fragment, Fragment):
            if not callable(fragment):
                raise TypeError(f"Fragment {name!r} must be a Fragment or a callable")
            fragment = Fragment(name=name, render=fragment)
        elif fragment.name != name:
            fragment = Fragment(
                name=name,
                render=fragment.render,
                predicate=fragment.predicate,
                description=fragment.description,
            )

        if name in self._fragments:
            logger.debug("Replacing fragment: %s", name)
        else:
            logger.debug("Registered fragment: %s", name)
        self._fragments[name] = fragment
        return fragment

    def fragment(self, name: str, when: Optional[PredicateFn] = None, description: str = ""):
        """Decorator form of ``register`` for render functions."""
        def decorator(render: RenderFn) -> RenderFn:
            self.register(name, Fragment(name, render, when, description or (render.__doc__ or "").strip()))
            return render
        return decorator

    def get(self, name: str) -> Optional[Fragment]:
        """Get a fragment by name. Returns ``None`` if not registered."""
        return self._fragments.get(name)

    def names(self) -> List[str]:
        return sorted(self._fragments)

    def __contains__(self, name: object) -> bool:
        return name in self._fragments

    def __len__(self) -> int:
        return len(self._fragments)

    def __repr__(self) -> str:
        return f"FragmentRegistry({len(self._fragments)} fragments)"
