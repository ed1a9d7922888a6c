from __future__ import annotations

import base64
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence


@dataclass(frozen=True)
class Attachment:
    name: str
    content: bytes
    content_type: Optional[str] = None

    @classmethod
    def from_path(cls, path: str | Path, *, content_type: Optional[str] = None) -> "Attachment":
        path = Path(path)
        return cls(name=path.name, content=path.read_bytes(), content_type=content_type)

    def to_graph(self) -> dict:
        payload = {
            "@odata.type": "#microsoft.graph.fileAttachment",
            "name": self.name,
            "contentBytes": base64.b64encode(self.content).decode("ascii"),
        }
        if self.content_type:
            payload["contentType"] = self.content_type
        return payload


@dataclass(frozen=True)
class EmailMessage:
    subject: str
    html_body: str
    to: Sequence[str]
    cc: Sequence[str] = field(default_factory=tuple)
    attachments: Sequence[Attachment] = field(default_factory=tuple)
    save_to_sent_items: bool = True

    def to_graph(self) -> dict:
        """Body of a Graph ``POST /users/{sender}/sendMail`` call."""
        message = {
            "subject": self.subject,
            "body": {"contentType": "HTML", "content": self.html_body},
            "toRecipients": [{"emailAddress": {"address": addr}} for addr in self.to],
        }
        if self.cc:
            message["ccRecipients"] = [{"emailAddress": {"address": addr}} for addr in self.cc]
        if self.attachments:
            message["attachments"] = [a.to_graph() for a in self.attachments]
        return {"message": message, "saveToSentItems": self.save_to_sent_items}
