"""Numeric field types: number, range and media attachment ids."""

from __future__ import annotations

from typing import Any

from fasthtml.common import Button, Div, Img, Input, P, Strong

from ..logger import get_logger
from ..sanitizers import to_number, to_unsigned_int
from .base import FieldBehavior, display_value

logger = get_logger(__name__)

_IMAGE_SUFFIXES = (".png", ".jpg", ".jpeg", ".gif", ".webp", ".svg", ".avif")


class NumberField(FieldBehavior):
    empty_value = 0
    default_attributes = {"class": "regular-text", "step": "any"}

    def render(self, value, attributes=None):
        return Input(**self.control_attributes(attributes, type="number", value=display_value(value)))

    def sanitize(self, value: Any) -> int | float:
        return to_number(value)


class RangeField(NumberField):
    """Slider with a read-only number box that mirrors its position."""

    default_attributes = {"min": 0, "max": 100, "step": 1}
    forced_class = "{prefix}-enhanced-range-slider"

    def render(self, value, attributes=None):
        attrs = self.merge_attributes(attributes)
        low = to_number(attrs.get("min", 0))
        high = to_number(attrs.get("max", 100))
        current = display_value(low if value is None else value)

        slider = Input(**self.control_attributes(attributes, type="range", value=current))
        mirror = Input(
            type="number",
            cls=f"{self.prefix}-range-value-input",
            value=current,
            min=display_value(low),
            max=display_value(high),
            readonly=True,
        )
        return Div(slider, mirror, cls=f"{self.prefix}-enhanced-range-container")


class MediaField(FieldBehavior):
    """Attachment id picker.

    The host may pass `resolve_url=callable(id) -> str` when adding the field;
    the returned URL is used for the preview. Image URLs are shown inline,
    other files by name.
    """

    empty_value = 0

    def _media_url(self, media_id: int) -> str:
        resolver = self.definition.extra.get("resolve_url")
        if media_id <= 0 or not callable(resolver):
            return ""
        try:
            return str(resolver(media_id) or "")
        except (LookupError, ValueError, OSError) as exc:
            logger.warning("Cannot resolve media %s for field %s: %s", media_id, self.definition.id, exc)
            return ""

    def _preview(self, url: str):
        if not url:
            return Div(cls=f"{self.prefix}-media-preview")
        if url.lower().split("?", 1)[0].endswith(_IMAGE_SUFFIXES):
            return Div(Img(src=url, alt="", style="max-width: 150px; height: auto; margin-top: 10px;"), cls=f"{self.prefix}-media-preview")
        name = url.rstrip("/").rsplit("/", 1)[-1]
        return Div(P(Strong("File:"), f" {name}", style="margin-top:10px;"), cls=f"{self.prefix}-media-preview")

    def render(self, value, attributes=None):
        media_id = to_unsigned_int(value)
        labels = self.labels
        field_id = self.definition.id

        parts = [
            Input(**self.control_attributes(attributes, type="hidden", value=str(media_id) if media_id else "")),
            Button(
                labels.select_media_text,
                type="button",
                cls=f"button {self.prefix}-media-upload-button",
                data_field=field_id,
                data_title=labels.add_media_title,
            ),
        ]
        if media_id:
            parts.append(
                Button(
                    labels.remove_media_text,
                    type="button",
                    cls=f"button {self.prefix}-media-remove-button",
                    data_field=field_id,
                )
            )
        parts.append(self._preview(self._media_url(media_id)))
        return Div(*parts, cls=f"{self.prefix}-media-field-container")

    def sanitize(self, value: Any) -> int:
        return to_unsigned_int(value)
