"""Content Negotiation — JSON by default, XML on request, 406 otherwise.

Invariants:
    - Missing/empty Accept, */* and application/* select JSON
    - application/xml and text/xml select XML
    - Ranges are tried by descending q; q=0 ranges are ignored
    - An Accept header that admits neither format raises NotAcceptableError

Design Decisions:
    - xml.etree.ElementTree for the XML projection: flat documents, no schema
    - Error envelopes stay JSON regardless of Accept
"""

from typing import Any
from xml.etree import ElementTree as ET

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, Response

from users_api.core.errors import NotAcceptableError

JSON_MEDIA_TYPE = "application/json"
XML_MEDIA_TYPE = "application/xml"

_JSON_RANGES = frozenset({"application/json", "text/json", "application/*", "*/*"})
_XML_RANGES = frozenset({"application/xml", "text/xml"})


def _parse_accept(header: str) -> list[tuple[str, float]]:
    """Media ranges with their quality, highest quality first."""
    ranges = []
    for part in header.split(","):
        media, _, params = part.partition(";")
        media = media.strip().lower()
        if not media:
            continue
        quality = 1.0
        for param in params.split(";"):
            key, _, value = param.strip().partition("=")
            if key.strip() == "q":
                try:
                    quality = float(value)
                except ValueError:
                    quality = 0.0
        ranges.append((media, quality))
    return sorted(ranges, key=lambda r: r[1], reverse=True)


def negotiate(accept: str | None) -> str:
    if not accept or not accept.strip():
        return JSON_MEDIA_TYPE
    for media, quality in _parse_accept(accept):
        if quality <= 0:
            continue
        if media in _XML_RANGES:
            return XML_MEDIA_TYPE
        if media in _JSON_RANGES or media.endswith("+json"):
            return JSON_MEDIA_TYPE
    raise NotAcceptableError(accept)


def _to_element(tag: str, value: Any, item_tag: str) -> ET.Element:
    element = ET.Element(tag)
    if isinstance(value, dict):
        for key, child in value.items():
            element.append(_to_element(key, child, item_tag))
    elif isinstance(value, list):
        for child in value:
            element.append(_to_element(item_tag, child, item_tag))
    elif value is not None:
        element.text = str(value)
    return element


def to_xml(value: Any, root_tag: str, item_tag: str = "user") -> str:
    """Serialize a JSON-compatible value under root_tag."""
    return ET.tostring(
        _to_element(root_tag, value, item_tag), encoding="unicode",
    )


def render(
    payload: Any,
    media_type: str,
    status_code: int = 200,
    headers: dict[str, str] | None = None,
    xml_root: str = "user",
) -> Response:
    """Build a response for payload in the negotiated media type."""
    data = jsonable_encoder(payload, by_alias=True)
    if media_type == XML_MEDIA_TYPE:
        return Response(
            content=to_xml(data, xml_root),
            status_code=status_code,
            headers=headers,
            media_type=XML_MEDIA_TYPE,
        )
    return JSONResponse(content=data, status_code=status_code, headers=headers)
