"""Keep the reading location steady while the host re-lays out after a resize.

A resize makes the rendering host re-paginate and fire ``relocated`` for
whatever page the new layout lands on. ``LocationStabilizer`` ignores that
transient location, asks the host to display the last location the reader
actually had, and swallows the echo of that request.

State machine::

    STABLE       --relocated(c)-->  STABLE        (remember c)
    any          --resized------->  JUST_RESIZED
    JUST_RESIZED --relocated(c)-->  CORRECTING    (display last stable location)
    CORRECTING   --relocated(c)-->  STABLE        (c is the echo, dropped)

Events must be delivered in the order they are observed, from one thread.
"""

from __future__ import annotations

from collections.abc import Callable

STABLE = "stable"
JUST_RESIZED = "just_resized"
CORRECTING = "correcting"


class LocationStabilizer:
    """Event-driven resize/relocation guard owning the last stable location."""

    def __init__(self, display: Callable[[str], object], last_stable_location: str | None = None) -> None:
        """Bind the host's display callback; ``display`` is fire-and-forget."""
        self._display = display
        self._state = STABLE
        self._last_stable_location = last_stable_location

    @property
    def state(self) -> str:
        return self._state

    @property
    def last_stable_location(self) -> str | None:
        return self._last_stable_location

    def resized(self) -> None:
        """Handle a host resize event. Always (re)enters ``JUST_RESIZED``."""
        self._state = JUST_RESIZED

    def relocated(self, location: str) -> None:
        """Handle a host relocation event carrying the current location string."""
        if self._state == STABLE:
            self._last_stable_location = location
            return

        if self._state == JUST_RESIZED:
            if self._last_stable_location is None:
                # nothing to restore, so no echo will follow
                self._last_stable_location = location
                self._state = STABLE
                return
            self._state = CORRECTING
            self._display(self._last_stable_location)
            return

        # CORRECTING: the echo of our own display request
        self._state = STABLE


__all__ = ["STABLE", "JUST_RESIZED", "CORRECTING", "LocationStabilizer"]
