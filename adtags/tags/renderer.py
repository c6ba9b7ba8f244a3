"""
Footer tag renderer for Google Publisher Tag (GPT).

Turns the ad units and size mappings accumulated in an ``AdTagContext``
into the single ``<script>`` block that loads gpt.js, defines every slot
and asks GPT to display them.

References:
  - GPT reference: https://developers.google.com/publisher-tag/reference
  - Size mappings: https://support.google.com/admanager/answer/3423562
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Optional

from adtags.common.logger import get_logger
from adtags.common.utils import escape_js_string, is_blank
from adtags.tags.models import AdUnit, SizeMapping

if TYPE_CHECKING:
    from adtags.tags.registry import AdTagContext

logger = get_logger(__name__)

NL = "\n"

_SERVICE_CALLS = (
    "googletag.pubads().enableSingleRequest();\n"
    "googletag.pubads().collapseEmptyDivs();\n"
    "googletag.enableServices();\n"
    "});"
)


class FooterTagBuilder:
    """
    Build the footer script for one request.

    Usage::

        builder = FooterTagBuilder(context)
        html = builder.build("12345", {"section": "news"})
    """

    def __init__(self, context: AdTagContext):
        self.context = context
        self.settings = context.settings

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def build(
        self,
        network_code: str,
        targeting: Optional[Mapping[str, str]] = None,
    ) -> str:
        """Render the footer tag, or a hiding script when no network is set."""
        if is_blank(network_code):
            return self.build_hidden()

        parts = [
            "<script>",
            self._bootstrap(),
            "googletag.cmd.push(function(){",
        ]
        for mapping in self.context.size_mappings.values():
            parts.append(self._size_mapping(mapping))
        for unit in self.context.ad_units:
            parts.append(self._define_slot(network_code, unit))
        if targeting:
            for key, value in targeting.items():
                value = "" if value is None else str(value)
                parts.append(
                    f"googletag.pubads().setTargeting('{self._js(key)}','{self._js(value)}');"
                )
        parts.append(_SERVICE_CALLS)
        for unit in self.context.displayed_units:
            parts.append(
                f"googletag.cmd.push(function() {{ googletag.display('{self._js(unit.container_id)}'); }});"
            )
        parts.append("</script>")

        logger.debug(
            "Footer tag rendered",
            network_code=network_code,
            ad_units=len(self.context.ad_units),
            size_mappings=len(self.context.size_mappings),
            targeting_keys=len(targeting) if targeting else 0,
        )
        return NL.join(parts) + NL

    def build_hidden(self) -> str:
        """Hide every registered container; nothing is loaded."""
        lines = ["<script>"]
        for unit in self.context.ad_units:
            lines.append(
                f"document.getElementById('{self._js(unit.container_id)}').style.display='none';"
            )
        lines.append("</script>")

        logger.debug("Footer tag rendered without network", ad_units=len(self.context.ad_units))
        return NL.join(lines) + NL

    # ------------------------------------------------------------------
    # Script fragments
    # ------------------------------------------------------------------

    def _bootstrap(self) -> str:
        library_url = self._js(self.settings.library_url)
        if self.settings.protocol_detection == "request":
            protocol = "https:" if self.context.secure else "http:"
            src = f"gads.src = '{protocol}' +{NL}'{library_url}';"
        else:
            src = (
                "var useSSL = 'https:' == document.location.protocol;\n"
                f"gads.src = (useSSL ? 'https:' : 'http:') +{NL}'{library_url}';"
            )
        return (
            "window.DG={};\n"
            "DG.ads={};\n"
            "var googletag = googletag || {};\n"
            "googletag.cmd = googletag.cmd || [];\n"
            "(function() {\n"
            "var gads = document.createElement('script');\n"
            "gads.async = true;\n"
            "gads.type = 'text/javascript';\n"
            f"{src}\n"
            "var node = document.getElementsByTagName('script')[0];\n"
            "node.parentNode.insertBefore(gads, node);\n"
            "})();"
        )

    def _size_mapping(self, mapping: SizeMapping) -> str:
        lines = [f"var {self.context.mapping_variable(mapping.name)} = googletag.sizeMapping()."]
        for variation in mapping.variations:
            lines.append(f"addSize({variation}).")
        lines.append("build();")
        return NL.join(lines)

    def _define_slot(self, network_code: str, unit: AdUnit) -> str:
        size_mapping = ""
        if unit.size_mapping is not None:
            size_mapping = f".defineSizeMapping({self.context.mapping_variable(unit.size_mapping)})"
        name = self._js(unit.unit_name)
        return (
            f"DG.ads['{name}']=googletag.defineSlot("
            f"'/{self._js(network_code)}/{name}', {unit.size}, '{self._js(unit.container_id)}')"
            f"{size_mapping}.addService(googletag.pubads());"
        )

    def _js(self, value: str) -> str:
        if self.settings.escape_values:
            return escape_js_string(value)
        return value


# ---------------------------------------------------------------------------
# Convenience function
# ---------------------------------------------------------------------------

def render_footer_tag(
    context: AdTagContext,
    network_code: str,
    targeting: Optional[Mapping[str, str]] = None,
) -> str:
    """
    Script that must be placed after every placeholder of the page.

    Example::

        html = render_footer_tag(ctx, "12345", {"section": "news"})
    """
    return FooterTagBuilder(context).build(network_code, targeting)
