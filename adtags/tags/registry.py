"""
Request-scoped registry of ad units and size mappings.

An ``AdTagContext`` is created by the host for every request (see
``adtags.tag_server.middleware.ad_context``) and passed explicitly to the
registrar and renderer. Nothing here is looked up from a global, except
the process-wide container id counter when ``container_id_scope`` is
``"process"``.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, Mapping
from typing import Optional

from adtags.common.config import TagSettings, get_settings
from adtags.tags import registrar, renderer
from adtags.tags.models import AdUnit, SizeMapping


class ContainerIdAllocator:
    """Monotonic counter producing container ids."""

    def __init__(self, start: int = 0):
        self._next = start
        self._lock = threading.Lock()

    def allocate(self, prefix: str) -> str:
        with self._lock:
            value = self._next
            self._next += 1
        return f"{prefix}{value}"

    def peek(self) -> int:
        """Value the next allocation will use."""
        with self._lock:
            return self._next


# Shared by every request of the process
process_allocator = ContainerIdAllocator()


class AdTagContext:
    """
    Ad units and size mappings accumulated while rendering one page.

    Usage::

        ctx = AdTagContext()
        ctx.add_size_mapping("leader", ["[[1024,768],[[970,250]]]"])
        html = ctx.placeholder("home_top", "[970,250]", size_mapping="leader")
        footer = ctx.footer_tag("12345", {"section": "home"})
    """

    def __init__(
        self,
        settings: Optional[TagSettings] = None,
        scheme: str = "",
        allocator: Optional[ContainerIdAllocator] = None,
    ):
        self.settings = settings or get_settings().tags
        self.scheme = scheme.lower()
        self.ad_units: list[AdUnit] = []
        self.size_mappings: dict[str, SizeMapping] = {}

        if allocator is not None:
            self._allocator = allocator
        elif self.settings.container_id_scope == "request":
            self._allocator = ContainerIdAllocator()
        else:
            self._allocator = process_allocator

    # ------------------------------------------------------------------
    # Registry access
    # ------------------------------------------------------------------

    def next_container_id(self) -> str:
        return self._allocator.allocate(self.settings.container_id_prefix)

    def has_size_mapping(self, name: str) -> bool:
        return name in self.size_mappings

    @property
    def secure(self) -> bool:
        """Whether the current request came in over https."""
        return self.scheme in ("https", "wss")

    @property
    def displayed_units(self) -> list[AdUnit]:
        return [unit for unit in self.ad_units if unit.display]

    def mapping_variable(self, name: str) -> str:
        """Script variable holding the built size mapping called ``name``."""
        return f"{name}{self.settings.mapping_suffix}"

    # ------------------------------------------------------------------
    # Convenience wrappers
    # ------------------------------------------------------------------

    def placeholder(
        self,
        unit_name: str,
        size: str,
        css_class: str = "",
        tag_name: str = "div",
        size_mapping: Optional[str] = None,
        display: bool = True,
    ) -> str:
        return registrar.register_placeholder(
            self, unit_name, size, css_class, tag_name, size_mapping, display
        )

    def define_ad_unit(self, unit_name: str, size: str, container_id: str) -> None:
        registrar.define_ad_unit(self, unit_name, size, container_id)

    def add_size_mapping(self, name: str, variations: Iterable[str]) -> None:
        registrar.add_size_mapping(self, name, variations)

    def footer_tag(
        self,
        network_code: str,
        targeting: Optional[Mapping[str, str]] = None,
    ) -> str:
        return renderer.render_footer_tag(self, network_code, targeting)
