"""
Tests for the footer tag renderer.
"""

import pytest

from adtags.common.config import TagSettings
from adtags.tags import AdTagContext, FooterTagBuilder, render_footer_tag

LEADERBOARD_MAPPING = [
    "[[1024,768],[[970,250],[728,90]]]",
    "[[768,0],[[728,90]]]",
    "[[0,0],[[320,50]]]",
]

EXPECTED_EXAMPLE = """<script>
window.DG={};
DG.ads={};
var googletag = googletag || {};
googletag.cmd = googletag.cmd || [];
(function() {
var gads = document.createElement('script');
gads.async = true;
gads.type = 'text/javascript';
var useSSL = 'https:' == document.location.protocol;
gads.src = (useSSL ? 'https:' : 'http:') +
'//www.googletagservices.com/tag/js/gpt.js';
var node = document.getElementsByTagName('script')[0];
node.parentNode.insertBefore(gads, node);
})();
googletag.cmd.push(function(){
var m1GoogleAdMapping = googletag.sizeMapping().
addSize([[1024,768],[[970,250]]]).
build();
DG.ads['unitA']=googletag.defineSlot('/12345/unitA', [970,250], 'div-gpt-ad-0').defineSizeMapping(m1GoogleAdMapping).addService(googletag.pubads());
googletag.pubads().setTargeting('k','v');
googletag.pubads().enableSingleRequest();
googletag.pubads().collapseEmptyDivs();
googletag.enableServices();
});
googletag.cmd.push(function() { googletag.display('div-gpt-ad-0'); });
</script>
"""


def _positions(text: str, needles: list[str]) -> list[int]:
    return [text.index(n) for n in needles]


class TestFooterTag:
    """Tests for render_footer_tag with a network code."""

    def test_worked_example(self, context: AdTagContext) -> None:
        context.add_size_mapping("m1", ["[[1024,768],[[970,250]]]"])
        context.placeholder("unitA", "[970,250]", "", "div", "m1", True)

        html = render_footer_tag(context, "12345", {"k": "v"})

        assert html == EXPECTED_EXAMPLE

    def test_single_script_block(self, context: AdTagContext) -> None:
        context.placeholder("unitA", "[300,250]")

        html = context.footer_tag("12345")

        assert html.count("<script>") == 1
        assert html.count("</script>") == 1
        assert html.count("gpt.js") == 1

    def test_statement_order(self, context: AdTagContext) -> None:
        """Bootstrap, mappings, slots, targeting, services, displays."""
        context.add_size_mapping("leader", LEADERBOARD_MAPPING)
        context.add_size_mapping("mpu", ["[[0,0],[[300,250]]]"])
        context.placeholder("top", "[728,90]", size_mapping="leader")
        context.define_ad_unit("oop", "[1,1]", "oop-slot")
        context.placeholder("side", "[300,250]", size_mapping="mpu")

        html = context.footer_tag("999", {"a": "1", "b": "2"})

        order = _positions(html, [
            "googletag.cmd = googletag.cmd || [];",
            "var leaderGoogleAdMapping",
            "var mpuGoogleAdMapping",
            "DG.ads['top']",
            "DG.ads['oop']",
            "DG.ads['side']",
            "setTargeting('a','1')",
            "setTargeting('b','2')",
            "enableSingleRequest()",
            "collapseEmptyDivs()",
            "googletag.enableServices();",
            "googletag.display('div-gpt-ad-0')",
            "googletag.display('div-gpt-ad-1')",
        ])
        assert order == sorted(order)

    def test_variations_in_definition_order(self, context: AdTagContext) -> None:
        context.add_size_mapping("leader", LEADERBOARD_MAPPING)

        html = context.footer_tag("999")

        expected = "\n".join(
            ["var leaderGoogleAdMapping = googletag.sizeMapping()."]
            + [f"addSize({v})." for v in LEADERBOARD_MAPPING]
            + ["build();"]
        )
        assert expected in html

    def test_slot_paths(self, context: AdTagContext) -> None:
        context.placeholder("home/top", "[728,90]")
        context.placeholder("home/side", "[300,250]")

        html = context.footer_tag("6355419")

        assert "googletag.defineSlot('/6355419/home/top', [728,90], 'div-gpt-ad-0')" in html
        assert "googletag.defineSlot('/6355419/home/side', [300,250], 'div-gpt-ad-1')" in html
        assert html.count(".addService(googletag.pubads());") == 2
        assert ".defineSizeMapping(" not in html

    def test_only_displayed_units_are_displayed(self, context: AdTagContext) -> None:
        context.placeholder("shown", "[300,250]")
        context.placeholder("lazy", "[300,250]", display=False)
        context.define_ad_unit("oop", "[1,1]", "oop-slot")

        html = context.footer_tag("999")

        assert "googletag.display('div-gpt-ad-0')" in html
        assert "googletag.display('div-gpt-ad-1')" not in html
        assert "googletag.display('oop-slot')" not in html
        assert html.count("googletag.display(") == 1
        # Every unit is still defined
        assert html.count("googletag.defineSlot(") == 3

    @pytest.mark.parametrize("targeting", [None, {}])
    def test_no_targeting(self, context: AdTagContext, targeting) -> None:
        context.placeholder("unitA", "[300,250]")

        html = context.footer_tag("999", targeting)

        assert "setTargeting" not in html

    def test_null_targeting_value(self, context: AdTagContext) -> None:
        html = context.footer_tag("999", {"k": None, "n": 3})

        assert "googletag.pubads().setTargeting('k','');" in html
        assert "googletag.pubads().setTargeting('n','3');" in html
        assert "'None'" not in html

    def test_empty_registry(self, context: AdTagContext) -> None:
        """Without slots the library is still loaded and services enabled."""
        html = context.footer_tag("999")

        assert "gpt.js" in html
        assert "googletag.enableServices();" in html
        assert "defineSlot" not in html
        assert "googletag.display(" not in html

    def test_escapes_string_literals(self, context: AdTagContext) -> None:
        context.define_ad_unit("x'</script>", "[1,1]", "slot")

        html = context.footer_tag("999", {"k'": "v\n<b>"})

        assert "DG.ads['x\\'\\x3c/script\\x3e']" in html
        assert "setTargeting('k\\'','v\\n\\x3cb\\x3e')" in html
        assert html.count("</script>") == 1

    def test_raw_literals_when_escaping_disabled(self) -> None:
        context = AdTagContext(
            settings=TagSettings(container_id_scope="request", escape_values=False)
        )
        context.define_ad_unit("a&b", "[1,1]", "slot")

        html = context.footer_tag("999", {"k": "<v>"})

        assert "DG.ads['a&b']" in html
        assert "setTargeting('k','<v>')" in html

    def test_does_not_mutate_context(self, context: AdTagContext) -> None:
        context.placeholder("unitA", "[300,250]")

        first = context.footer_tag("999")
        second = context.footer_tag("999")

        assert first == second
        assert len(context.ad_units) == 1


class TestProtocolDetection:
    """Tests for choosing the gpt.js protocol."""

    def test_page_protocol_by_default(self, context: AdTagContext) -> None:
        html = context.footer_tag("999")

        assert "'https:' == document.location.protocol" in html

    @pytest.mark.parametrize("scheme,protocol", [("https", "https:"), ("http", "http:"), ("", "http:")])
    def test_request_protocol(self, scheme: str, protocol: str) -> None:
        settings = TagSettings(container_id_scope="request", protocol_detection="request")
        context = AdTagContext(settings=settings, scheme=scheme)

        html = context.footer_tag("999")

        assert f"gads.src = '{protocol}' +\n'//www.googletagservices.com/tag/js/gpt.js';" in html
        assert "document.location.protocol" not in html

    def test_custom_library_url(self) -> None:
        settings = TagSettings(
            container_id_scope="request",
            library_url="//securepubads.g.doubleclick.net/tag/js/gpt.js",
        )
        html = AdTagContext(settings=settings).footer_tag("999")

        assert "'//securepubads.g.doubleclick.net/tag/js/gpt.js'" in html


class TestHiddenFooterTag:
    """Tests for the footer tag without a network code."""

    @pytest.mark.parametrize("network_code", ["", "   ", None])
    def test_hides_every_container(self, context: AdTagContext, network_code) -> None:
        context.placeholder("a", "[300,250]")
        context.placeholder("b", "[300,250]", display=False)
        context.define_ad_unit("oop", "[1,1]", "oop-slot")

        html = render_footer_tag(context, network_code, {"k": "v"})

        assert html == (
            "<script>\n"
            "document.getElementById('div-gpt-ad-0').style.display='none';\n"
            "document.getElementById('div-gpt-ad-1').style.display='none';\n"
            "document.getElementById('oop-slot').style.display='none';\n"
            "</script>\n"
        )

    def test_no_bootstrap(self, context: AdTagContext) -> None:
        context.placeholder("a", "[300,250]")

        html = FooterTagBuilder(context).build_hidden()

        assert "gpt.js" not in html
        assert "googletag" not in html

    def test_empty_registry(self, context: AdTagContext) -> None:
        assert context.footer_tag("") == "<script>\n</script>\n"
