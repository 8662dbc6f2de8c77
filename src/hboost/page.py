"""In-process model of the host page the donation widget is embedded into.

Containers hold HTML fragments keyed by element id, mirroring the handful
of DOM operations the client needs: lookup by id, clear, append, replace.
"""

from __future__ import annotations

import html
from dataclasses import dataclass, field

from hboost.constants import IFRAME_HEIGHT, IFRAME_REFERRER_POLICY, IFRAME_WIDTH


@dataclass(frozen=True)
class IFrame:
    src: str
    width: str = IFRAME_WIDTH
    height: str = IFRAME_HEIGHT
    referrer_policy: str = IFRAME_REFERRER_POLICY

    def to_html(self) -> str:
        return (
            f'<iframe src="{html.escape(self.src, quote=True)}" '
            f'width="{self.width}" height="{self.height}" '
            f'style="border: none;" '
            f'referrerpolicy="{self.referrer_policy}"></iframe>'
        )


@dataclass
class WidgetContainer:
    element_id: str
    children: list[str] = field(default_factory=list)

    @property
    def inner_html(self) -> str:
        return "".join(self.children)

    def clear(self) -> None:
        self.children.clear()

    def append(self, fragment: str) -> None:
        self.children.append(fragment)

    def replace(self, fragment: str) -> None:
        self.children[:] = [fragment]


class DonationPage:
    """Registry of widget containers on a page."""

    def __init__(self, container_ids: list[str] | None = None) -> None:
        self._containers: dict[str, WidgetContainer] = {}
        for element_id in container_ids or []:
            self.add_container(element_id)

    def add_container(self, element_id: str) -> WidgetContainer:
        container = WidgetContainer(element_id)
        self._containers[element_id] = container
        return container

    def get_element_by_id(self, element_id: str) -> WidgetContainer | None:
        return self._containers.get(element_id)

    def snapshot(self) -> dict[str, str]:
        """Rendered HTML of every container, keyed by id."""
        return {eid: c.inner_html for eid, c in self._containers.items()}
