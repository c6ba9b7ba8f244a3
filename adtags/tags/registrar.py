"""
Registration of GPT ad slots and responsive size mappings.

All validation runs before the context is touched, so a failed call
neither consumes a container id nor leaves a partial registration behind.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Optional

from adtags.common.exceptions import (
    DuplicateDefinitionError,
    InvalidArgumentError,
    MissingArgumentError,
    UndefinedReferenceError,
)
from adtags.common.logger import get_logger
from adtags.common.utils import (
    escape_html_attr,
    escape_html_comment,
    is_blank,
    is_js_identifier,
    is_tag_name,
)
from adtags.tags.models import AdUnit, SizeMapping

if TYPE_CHECKING:
    from adtags.tags.registry import AdTagContext

logger = get_logger(__name__)


def register_placeholder(
    context: AdTagContext,
    unit_name: str,
    size: str,
    css_class: str = "",
    tag_name: str = "div",
    size_mapping: Optional[str] = None,
    display: bool = True,
) -> str:
    """
    Register an ad unit and return the container element it renders into.

    Args:
        context: Registry of the current request.
        unit_name: Name of the ad unit as set up in Ad Manager.
        size: Creative sizes as a JS literal, e.g. ``[300,250]`` or
            ``[[728,90],[970,250]]`` to allow several sizes.
        css_class: CSS class added to the container.
        tag_name: Container element, must be a block element.
        size_mapping: Name of a size mapping already added to ``context``.
        display: Whether ``googletag.display()`` is called for this slot
            once services are enabled.

    Returns:
        ``<div id="div-gpt-ad-N" class="..." data-cb-ad-id="unit"><!-- unit --></div>``

    Raises:
        MissingArgumentError: ``unit_name`` or ``tag_name`` is blank.
        InvalidArgumentError: ``tag_name`` is not a plain element name
            (only checked when values are escaped).
        UndefinedReferenceError: ``size_mapping`` has not been added yet.
    """
    if is_blank(unit_name):
        raise MissingArgumentError("unit_name")
    if is_blank(tag_name):
        raise MissingArgumentError("tag_name")

    escape = context.settings.escape_values
    if escape and not is_tag_name(tag_name):
        raise InvalidArgumentError(
            f"'{tag_name}' is not a valid element name.", "tag_name"
        )

    if size_mapping is not None and not context.has_size_mapping(size_mapping):
        raise UndefinedReferenceError(size_mapping)

    container_id = context.next_container_id()
    context.ad_units.append(
        AdUnit(
            unit_name=unit_name,
            size=size,
            container_id=container_id,
            display=display,
            size_mapping=size_mapping,
        )
    )

    logger.debug(
        "Ad placeholder registered",
        unit_name=unit_name,
        container_id=container_id,
        size_mapping=size_mapping,
        display=display,
    )

    css = css_class or ""
    if escape:
        return (
            f'<{tag_name} id="{escape_html_attr(container_id)}" '
            f'class="{escape_html_attr(css)}" '
            f'data-cb-ad-id="{escape_html_attr(unit_name)}">'
            f"<!-- {escape_html_comment(unit_name)} --></{tag_name}>"
        )
    return (
        f'<{tag_name} id="{container_id}" class="{css}" '
        f'data-cb-ad-id="{unit_name}"><!-- {unit_name} --></{tag_name}>'
    )


def define_ad_unit(
    context: AdTagContext,
    unit_name: str,
    size: str,
    container_id: str,
) -> None:
    """
    Define an ad unit without creating its container on the page.

    The slot is declared in the footer tag but never displayed by it; the
    page is expected to own ``container_id`` and call display itself.
    """
    if is_blank(unit_name):
        raise MissingArgumentError("unit_name")
    if is_blank(container_id):
        raise MissingArgumentError("container_id")

    context.ad_units.append(
        AdUnit(
            unit_name=unit_name,
            size=size,
            container_id=container_id,
            display=False,
        )
    )

    logger.debug("Ad unit defined", unit_name=unit_name, container_id=container_id)


def add_size_mapping(
    context: AdTagContext,
    name: str,
    variations: Iterable[str],
) -> None:
    """
    Add a size mapping for serving responsive ads.

    Args:
        context: Registry of the current request.
        name: Unique size mapping name; becomes part of a script variable.
        variations: Rules of the form ``[[1024,768],[[970,250]]]``
            (browser size, slot sizes), ordered highest to lowest priority.

    Raises:
        MissingArgumentError: ``name`` is blank or ``variations`` is None.
        DuplicateDefinitionError: ``name`` was already added.
        InvalidArgumentError: ``name`` cannot be used in a variable name,
            or ``variations`` is a single string.
    """
    if is_blank(name):
        raise MissingArgumentError("name")
    if context.has_size_mapping(name):
        raise DuplicateDefinitionError(name)
    if variations is None:
        raise MissingArgumentError("variations")
    # A lone string would be split into characters
    if isinstance(variations, str):
        raise InvalidArgumentError(
            "Size mapping variations must be a list of rules, not a single string.",
            "variations",
        )
    if not is_js_identifier(name):
        raise InvalidArgumentError(
            f"Size mapping name '{name}' must be a valid script identifier.", "name"
        )

    mapping = SizeMapping(name=name, variations=tuple(variations))
    context.size_mappings[name] = mapping

    logger.debug(
        "Size mapping added",
        size_mapping=name,
        variations=len(mapping.variations),
    )
