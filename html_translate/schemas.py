"""
Pydantic schemas shared by the provider clients and the CLI.

ElementQuery: where a scraping client looks for the translation in a page
TranslationRecord: one translated text, as reported by the CLI
"""

from typing import Optional, Tuple

from pydantic import BaseModel, Field, field_validator


class ElementQuery(BaseModel):
    """A tag plus an optional exact-match attribute filter."""
    tag: str
    attr_name: Optional[str] = None
    attr_value: Optional[str] = None

    @field_validator("tag")
    @classmethod
    def _lower_tag(cls, value: str) -> str:
        return value.strip().lower()

    @property
    def attr(self) -> Optional[Tuple[str, str]]:
        """The (key, value) filter for find/find_all, or None."""
        if self.attr_name is None:
            return None
        return (self.attr_name, self.attr_value or "")

    def __str__(self) -> str:
        if self.attr_name is None:
            return f"<{self.tag}>"
        return f'<{self.tag} {self.attr_name}="{self.attr_value}">'


class TranslationRecord(BaseModel):
    """A translated text and where it came from."""
    provider: str
    source: str                    # Language code as sent to the provider
    target: str
    text: str
    translated: str
    chunks: int = Field(default=1, description="Requests needed for this text")
