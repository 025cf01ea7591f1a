"""Render payload handed from the session to the frame renderer.

Widgets form a small closed set of frozen variants; the renderer dispatches
on the variant type and never calls back into navigation state.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ListWidget:
    """Selectable list pane (parent and current directories)."""

    title: str
    labels: tuple[str, ...] = ()
    kinds: tuple[str, ...] = ()
    highlighted: int | None = None
    message: str = ""


@dataclass(frozen=True)
class TextWidget:
    """Read-only text pane (preview)."""

    title: str
    text: str = ""


@dataclass(frozen=True)
class ContainerWidget:
    """Horizontal row of panes separated by dividers."""

    children: tuple["Widget", ...] = ()


Widget = ListWidget | TextWidget | ContainerWidget


@dataclass(frozen=True)
class CommandBox:
    visible: bool = False
    content: str = ""


@dataclass(frozen=True)
class RenderPayload:
    """Everything needed to draw one frame."""

    tabs: tuple[tuple[str, bool], ...]
    parent: ListWidget | None
    current: ListWidget
    preview: TextWidget
    status: str = ""
    status_is_error: bool = False
    command_box: CommandBox = field(default_factory=CommandBox)

    def panes(self) -> ContainerWidget:
        parent = self.parent if self.parent is not None else ListWidget(title="")
        return ContainerWidget(children=(parent, self.current, self.preview))


__all__ = [
    "ListWidget",
    "TextWidget",
    "ContainerWidget",
    "Widget",
    "CommandBox",
    "RenderPayload",
]
