"""
Scroll-synchronised table-of-contents tracker.

The tracker is a small state machine (IDLE -> TRACKING -> UNMOUNTED) that
keeps two pieces of state in step with the reader's viewport:

- which heading is "active" (highlighted in the TOC panel), and
- the panel's maximum height, clipped so it never overlaps the page footer.

All geometry comes from a ViewportProvider, so the same logic runs against
a real rendering surface or against synthetic geometry in tests. Bursts of
scroll, resize and intersection notifications are coalesced: at most one
recomputation runs per frame and intermediate events are dropped.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable

from ..config import TocConfig
from ..utils.logging import get_logger
from .headings import extract_headings
from .types import Heading, TocState


logger = get_logger("toc")

SCROLL = "scroll"
RESIZE = "resize"


@dataclass(frozen=True)
class Rect:
    """Bounding box relative to the viewport top."""
    top: float
    height: float = 0.0

    @property
    def bottom(self) -> float:
        return self.top + self.height


@dataclass(frozen=True)
class IntersectionEntry:
    element_id: str
    is_intersecting: bool


class ViewportProvider(ABC):
    """Capabilities the tracker needs from a rendering surface."""

    @property
    @abstractmethod
    def scroll_y(self) -> float:
        """Current vertical scroll offset of the document."""

    @property
    @abstractmethod
    def viewport_height(self) -> float:
        """Height of the visible viewport."""

    @abstractmethod
    def element_rect(self, element_id: str) -> Rect | None:
        """Viewport-relative box of the element with this id, if present."""

    @abstractmethod
    def banner_rect(self) -> Rect | None:
        """Box of the fixed top banner, if present."""

    @abstractmethod
    def navbar_rect(self) -> Rect | None:
        """Box of the fixed navigation bar, if present."""

    @abstractmethod
    def footer_rect(self) -> Rect | None:
        """Box of the trailing page footer, if present."""

    @abstractmethod
    def add_listener(self, event: str, callback: Callable[[], None]) -> None:
        """Subscribe to "scroll" or "resize" notifications."""

    @abstractmethod
    def remove_listener(self, event: str, callback: Callable[[], None]) -> None:
        """Undo add_listener."""

    @abstractmethod
    def observe(
        self,
        element_ids: Iterable[str],
        callback: Callable[[list[IntersectionEntry]], None],
    ) -> None:
        """Deliver intersection changes for the given elements."""

    @abstractmethod
    def unobserve(self, element_ids: Iterable[str]) -> None:
        """Stop intersection notifications for the given elements."""

    @abstractmethod
    def request_frame(self, callback: Callable[[], None]) -> int:
        """Run callback before the next frame; returns a cancel handle."""

    @abstractmethod
    def cancel_frame(self, handle: int) -> None:
        """Cancel a callback scheduled with request_frame."""

    @abstractmethod
    def scroll_to(self, top: float, smooth: bool = True) -> None:
        """Scroll the document to an absolute offset."""

    @abstractmethod
    def push_history(self, fragment: str) -> None:
        """Push a location fragment (e.g. "#rate-limits") onto history."""


class TocPhase(str, Enum):
    IDLE = "idle"
    TRACKING = "tracking"
    UNMOUNTED = "unmounted"


class TocTracker:
    """Tracks the active heading and panel height for one article view."""

    def __init__(self, viewport: ViewportProvider, cfg: TocConfig | None = None):
        self.viewport = viewport
        self.cfg = cfg or TocConfig()
        self.state = TocState()
        self.phase = TocPhase.IDLE
        self.max_height: float | None = None
        self._intersecting: dict[str, bool] = {}
        self._pending = False
        self._frame_handle: int | None = None
        self._history_handles: set[int] = set()

    @property
    def headings(self) -> list[Heading]:
        return self.state.headings

    @property
    def active_id(self) -> str:
        return self.state.active_id

    def mount(self, html: str) -> TocState:
        """Extract headings from rendered markup and start tracking.

        Without headings the tracker stays IDLE and subscribes to nothing.
        """
        if self.phase is not TocPhase.IDLE:
            raise RuntimeError(f"cannot mount a tracker in phase {self.phase.value}")

        headings = extract_headings(html)
        self.state = TocState(headings=headings)
        if not headings:
            logger.debug("No headings, TOC stays idle")
            return self.state

        ids = [heading.id for heading in headings]
        self._intersecting = {heading_id: False for heading_id in ids}
        self.viewport.observe(ids, self._on_intersection)
        self.viewport.add_listener(SCROLL, self._on_event)
        self.viewport.add_listener(RESIZE, self._on_event)
        self.phase = TocPhase.TRACKING

        self.update_height()
        self.update_active()
        return self.state

    def unmount(self) -> None:
        """Detach every observer, listener and scheduled frame."""
        if self.phase is TocPhase.TRACKING:
            self.viewport.unobserve([heading.id for heading in self.headings])
            self.viewport.remove_listener(SCROLL, self._on_event)
            self.viewport.remove_listener(RESIZE, self._on_event)
            if self._frame_handle is not None:
                self.viewport.cancel_frame(self._frame_handle)
            for handle in self._history_handles:
                self.viewport.cancel_frame(handle)
        self._frame_handle = None
        self._history_handles.clear()
        self._pending = False
        self.phase = TocPhase.UNMOUNTED

    def scroll_offset(self) -> float:
        """Distance from the viewport top below which content counts as visible."""
        banner = self.viewport.banner_rect()
        navbar = self.viewport.navbar_rect()
        banner_height = banner.height if banner else self.cfg.default_banner_height
        navbar_height = navbar.height if navbar else self.cfg.default_navbar_height
        return banner_height + navbar_height + self.cfg.padding

    def update_active(self) -> str:
        """Recompute the active heading id.

        First pass: intersecting headings whose viewport top lies within
        [offset - window_above, offset + window_below], closest to the
        scroll threshold. Second pass, when the first finds nothing: any
        heading whose absolute top is at most threshold + fallback_slack,
        again closest to the threshold. If neither pass finds a heading the
        active id is left unchanged.
        """
        offset = self.scroll_offset()
        scroll_y = self.viewport.scroll_y
        threshold = scroll_y + offset

        positions = []
        for heading in self.headings:
            rect = self.viewport.element_rect(heading.id)
            if rect is None:
                continue
            absolute_top = scroll_y + rect.top
            positions.append((heading.id, rect.top, absolute_top, abs(absolute_top - threshold)))

        best_id = ""
        best_distance = float("inf")
        for heading_id, viewport_top, _absolute_top, distance in positions:
            if not self._intersecting.get(heading_id):
                continue
            if offset - self.cfg.window_above <= viewport_top <= offset + self.cfg.window_below:
                if distance < best_distance:
                    best_id, best_distance = heading_id, distance

        if not best_id:
            for heading_id, _viewport_top, absolute_top, distance in positions:
                if absolute_top <= threshold + self.cfg.fallback_slack and distance < best_distance:
                    best_id, best_distance = heading_id, distance

        if best_id:
            self.state.active_id = best_id
        return self.state.active_id

    def update_height(self) -> float:
        """Clip the panel height against the footer position."""
        cfg = self.cfg
        default_height = self.viewport.viewport_height - cfg.default_height_margin
        footer = self.viewport.footer_rect()
        if footer is None:
            self.max_height = default_height
            return self.max_height

        footer_top = footer.top
        if cfg.sticky_top < footer_top < self.viewport.viewport_height:
            available = footer_top - cfg.sticky_top - cfg.footer_gap
            self.max_height = max(cfg.min_height, available)
        elif footer_top <= cfg.sticky_top:
            self.max_height = cfg.min_height
        else:
            self.max_height = default_height
        return self.max_height

    def activate(self, heading_id: str) -> bool:
        """Handle a click on a TOC link.

        Scrolls smoothly to the heading, leaving room for the fixed header,
        then pushes the fragment onto history on the following frame.

        Returns:
            True if the click was handled (default navigation cancelled)
        """
        if self.phase is not TocPhase.TRACKING:
            return False
        if heading_id not in {heading.id for heading in self.headings}:
            return False
        rect = self.viewport.element_rect(heading_id)
        if rect is None:
            return False

        element_top = rect.top + self.viewport.scroll_y
        self.viewport.scroll_to(max(0.0, element_top - self.scroll_offset()), smooth=True)

        handle_box: list[int] = []

        def push() -> None:
            if handle_box:
                self._history_handles.discard(handle_box[0])
            if self.phase is TocPhase.TRACKING:
                self.viewport.push_history(f"#{heading_id}")

        handle = self.viewport.request_frame(push)
        handle_box.append(handle)
        self._history_handles.add(handle)
        return True

    def _on_event(self) -> None:
        self._schedule()

    def _on_intersection(self, entries: list[IntersectionEntry]) -> None:
        if self.phase is not TocPhase.TRACKING:
            return
        for entry in entries:
            if entry.element_id in self._intersecting:
                self._intersecting[entry.element_id] = entry.is_intersecting
        self._schedule()

    def _schedule(self) -> None:
        if self.phase is not TocPhase.TRACKING or self._pending:
            return
        self._pending = True
        self._frame_handle = self.viewport.request_frame(self._on_frame)

    def _on_frame(self) -> None:
        self._frame_handle = None
        self._pending = False
        if self.phase is not TocPhase.TRACKING:
            return
        self.update_active()
        self.update_height()
