"""Core domain models.

These dataclasses are shared across the core and adapters to avoid tight
coupling to any integration-specific types.
"""

from __future__ import annotations

import mimetypes
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Dict, List, Optional

# Field name -> human-readable message. Empty means the draft is valid.
FieldErrors = Dict[str, str]


@dataclass(frozen=True)
class Post:
    """Read model for one feed entry, already shaped for display."""

    id: int
    author: str
    content: str
    address: str
    cep: str
    phone: str
    timestamp: str
    created_at: str
    category: str
    urgent: bool
    image: Optional[str]

    @property
    def key(self) -> str:
        # id alone is not trusted to be unique across unstable pages.
        return f"{self.id}-{self.created_at}"


@dataclass(frozen=True)
class FeedPage:
    page: int
    posts: List[Post]


@dataclass(frozen=True)
class Attachment:
    """Optional image picked for a submission."""

    path: Path
    filename: str
    content_type: Optional[str]

    @classmethod
    def from_path(cls, path: "str | Path") -> "Attachment":
        resolved = Path(path).expanduser()
        content_type, _ = mimetypes.guess_type(resolved.name)
        return cls(path=resolved, filename=resolved.name, content_type=content_type)

    @property
    def is_image(self) -> bool:
        return bool(self.content_type and self.content_type.startswith("image/"))


@dataclass
class DraftSubmission:
    """In-progress post held only in client memory."""

    name: str = ""
    content: str = ""
    category: str = ""
    phone: str = ""
    cep: str = ""
    address: str = ""
    number: str = ""
    neighborhood: str = ""
    city: str = ""
    state: str = ""
    file: Optional[Attachment] = None

    @classmethod
    def text_fields(cls) -> List[str]:
        return [item.name for item in fields(cls) if item.name != "file"]

    def to_form_fields(self) -> Dict[str, str]:
        """Return the multipart text fields expected by the Posts API."""

        return {
            "title": self.name,
            "content": self.content,
            "category": self.category,
            "phone": self.phone,
            "cep": self.cep,
            "address": self.address,
            "number": self.number,
            "neighborhood": self.neighborhood,
            "city": self.city,
            "state": self.state,
        }


@dataclass(frozen=True)
class PostalAddress:
    """Address resolved from a postal code or from device coordinates."""

    cep: str
    street: str
    neighborhood: str
    city: str
    state: str
    number: Optional[str] = None


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float
    accuracy: Optional[float] = None


@dataclass(frozen=True)
class CategoryStyle:
    """Presentation metadata for one category tag."""

    label: str
    color: str
    icon: str

