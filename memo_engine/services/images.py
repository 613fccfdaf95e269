"""
Image picker boundary.

Converts picker results into ImageAttachment values. Only the uri string is
kept; the image bytes are never read.
"""
from typing import Any, Iterable, List, Mapping, Union

from memo_engine.domains.errors import ValidationError
from memo_engine.domains.memos import ImageAttachment, generate_id

PickedImage = Union[str, Mapping[str, Any]]


class ImageService:
    """Wraps picked images as attachments with fresh ids and empty tags."""

    def wrap(self, picked: Iterable[PickedImage]) -> List[ImageAttachment]:
        images = []
        for item in picked:
            uri = item if isinstance(item, str) else item.get("uri")
            if not isinstance(uri, str) or not uri:
                raise ValidationError(f"Picked image has no uri: {item!r}")
            images.append(ImageAttachment(uri=uri, tag="", id=generate_id()))
        return images


__all__ = ["ImageService", "PickedImage"]
