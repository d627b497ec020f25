"""Options and result envelope shared by the converters.

Converters never raise for malformed input. Recoverable defects are recorded
in ``warnings`` and the data is still usable; ``errors`` is only filled when
no meaningful output could be produced.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ConversionOptions(BaseModel):
    namespace: str | None = None
    title: str | None = None
    version: str | None = None
    description: str | None = None
    generate_operations: bool = False
    include_relationships: bool = True


class ConversionResult(BaseModel, Generic[T]):
    """Converted data plus the defects recorded while producing it."""

    data: T
    errors: list[str] = []
    warnings: list[str] = []

    @property
    def ok(self) -> bool:
        return not self.errors
