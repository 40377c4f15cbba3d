"""Types produced and consumed by the notification pipeline."""

from __future__ import annotations

from pydantic import BaseModel, Field


class RenderedMessage(BaseModel):
    """Template output ready for a transport.

    The body is kept as an ordered list of lines; transports that need a
    single string join it through ``text``.
    """

    title: str
    lines: list[str] = Field(default_factory=list)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


class DeliveryOutcome(BaseModel):
    """Result of a single transport attempt."""

    success: bool
    error_detail: str | None = None

    @classmethod
    def ok(cls) -> DeliveryOutcome:
        return cls(success=True)

    @classmethod
    def failed(cls, detail: str) -> DeliveryOutcome:
        return cls(success=False, error_detail=detail)
