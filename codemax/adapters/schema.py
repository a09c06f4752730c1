import base64
import mimetypes
from pathlib import Path
from typing import List, Literal, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field


class InlineData(BaseModel):
    """Binary attachment carried inline as base64 with its MIME type."""
    model_config = ConfigDict(populate_by_name=True)

    data: str  # base64-encoded
    mime_type: str = Field(alias="mimeType")

    def to_bytes(self) -> bytes:
        return base64.b64decode(self.data)


class Part(BaseModel):
    """
    One content fragment of a Message: text or an inline binary blob.

    Accepts the camelCase wire names (inlineData, mimeType) so stored
    histories load unchanged.
    """
    model_config = ConfigDict(populate_by_name=True)

    text: Optional[str] = None
    inline_data: Optional[InlineData] = Field(default=None, alias="inlineData")

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "Part":
        """Read a file into an inline part, guessing its MIME type from the name."""
        mime_type, _ = mimetypes.guess_type(str(path))
        if not mime_type:
            mime_type = "application/octet-stream"

        with open(path, "rb") as f:
            data = base64.b64encode(f.read()).decode("utf-8")

        return cls(inline_data=InlineData(data=data, mime_type=mime_type))


class Message(BaseModel):
    """A single turn in a conversation, authored by the user or the model."""
    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())

    role: Literal["user", "model"]
    parts: List[Part] = Field(default_factory=list)
    model_name: Optional[str] = Field(default=None, alias="modelName")

    @classmethod
    def user(cls, text: str, attachments: Sequence[Part] = ()) -> "Message":
        return cls(role="user", parts=[Part(text=text), *attachments])

    @classmethod
    def model(cls, text: str, model_name: Optional[str] = None) -> "Message":
        return cls(role="model", parts=[Part(text=text)], model_name=model_name)

    def get_text(self) -> str:
        """Newline-joined text of all parts. Parts without text contribute ''."""
        return "\n".join(p.text or "" for p in self.parts)
