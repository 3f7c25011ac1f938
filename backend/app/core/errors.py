"""
Error taxonomy for the document pipeline.

- ``InvalidGenerationRequest``: the request failed schema constraints; raised
  before any provider call is made.
- ``GenerationFailure``: the text step (or an assistant call) produced
  nothing usable; fatal for the whole operation.
- ``ImageFailure``: a single image call failed; always recovered
  locally by the image step and never escalated.
"""

from __future__ import annotations

from dataclasses import dataclass


class InkwellError(Exception):
    """Base class for all pipeline errors."""


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


class InvalidGenerationRequest(InkwellError):
    def __init__(self, fields: list[FieldError]):
        self.fields = fields
        names = ", ".join(f.field for f in fields) or "request"
        super().__init__(f"Invalid generation request: {names}")


class GenerationFailure(InkwellError):
    pass


class ImageFailure(InkwellError):
    pass
