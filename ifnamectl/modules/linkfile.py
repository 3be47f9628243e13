"""Render systemd .link files and embed them as data URIs."""
from typing import List
from urllib.parse import quote_plus, unquote

from .models import ByHardwareID, ByMAC, ExplicitName, MatchCriterion, NamingStrategy, Policy

DATA_URI_PREFIX = "data:text/plain,"
HEX_PREFIX = "0x"


def canonical_hw_id(value: str) -> str:
    """Return a vendor/model ID carrying the 0x prefix udev reports."""
    if not value.startswith(HEX_PREFIX):
        return HEX_PREFIX + value
    return value


def match_predicates(criterion: MatchCriterion) -> List[str]:
    """Return the [Match] section lines for a criterion."""
    if isinstance(criterion, ByMAC):
        return [f"MACAddress={criterion.address}"]
    if isinstance(criterion, ByHardwareID):
        return [
            f"Property=ID_VENDOR_ID={canonical_hw_id(criterion.vendor_id)}",
            f"Property=ID_MODEL_ID={canonical_hw_id(criterion.model_id)}",
        ]
    raise TypeError(f"Unsupported match criterion: {criterion!r}")


def link_directive(naming: NamingStrategy) -> str:
    """Return the single [Link] section line for a naming strategy."""
    if isinstance(naming, ExplicitName):
        return f"Name={naming.name}"
    if isinstance(naming, Policy):
        return f"NamePolicy={naming.scheme}"
    raise TypeError(f"Unsupported naming strategy: {naming!r}")


def render_link_file(criterion: MatchCriterion, naming: NamingStrategy) -> str:
    """Render a .link file matching ``criterion`` and naming it per ``naming``.

    Example for a MAC match with an explicit name::

        [Match]
        MACAddress=aa:bb:cc:dd:ee:ff

        [Link]
        Name=ptp0
    """
    lines = ["[Match]"]
    lines.extend(match_predicates(criterion))
    lines.append("")
    lines.append("[Link]")
    lines.append(link_directive(naming))
    return "\n".join(lines) + "\n"


def encode_link_file(content: str) -> str:
    """Encode text as a ``data:text/plain,`` URI for Ignition.

    Query-style escaping is applied first and the resulting ``+`` signs
    are then turned into ``%20``; literal ``+`` characters in the input
    are already ``%2B`` at that point.
    """
    encoded = quote_plus(content, safe="")
    return DATA_URI_PREFIX + encoded.replace("+", "%20")


def decode_link_file(source: str) -> str:
    """Inverse of :func:`encode_link_file`."""
    if not source.startswith(DATA_URI_PREFIX):
        raise ValueError(f"Not a plain-text data URI: {source[:32]}")
    return unquote(source[len(DATA_URI_PREFIX):])
