"""Pydantic schema for segmentation options."""

import re
from typing import Any, Callable, List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator, model_validator

from ..core.types import DEFAULT_SENTENCE_DELIMS, Token, TokenizerSelection
from ..escape import ESCAPERS


class PreprocessorConfig(BaseModel):
    """
    Options read by the segmenters.

    The model is frozen: build a new one (``model_copy(update=...)``) rather
    than mutating it. Options must be settled before iteration starts.
    """
    sentence_delimiters: Tuple[str, ...] = Field(default=DEFAULT_SENTENCE_DELIMS,
                                                 description="Words that end a sentence")
    explicit_delimiter: Optional[str] = Field(default=None,
                                              description="Single delimiter for pre-split input; disables followers")
    tag_delimiter: Optional[str] = Field(default=None,
                                         description="Split 'word<delim>TAG' tokens on the last delimiter")
    element_filter: str = Field(default=".*",
                                description="XML mode: regex over element names to read text from")
    keep_internal_tags: bool = Field(default=False,
                                     description="XML mode: keep tags nested inside a region")
    tokenizer: TokenizerSelection = Field(default=TokenizerSelection.DEFAULT)
    tokenizer_options: str = Field(default="", description="Comma-separated tokenizer options")
    tokenizer_factory: Optional[Any] = Field(default=None, exclude=True,
                                             description="Custom TokenizerFactory, overrides 'tokenizer'")
    escaper: Optional[Callable[[List[Token]], List[Token]]] = Field(
        default=None, exclude=True, description="Transform applied to each finished sentence")
    keep_empty_sentences: bool = Field(default=False)

    class Config:
        extra = "forbid"
        frozen = True
        arbitrary_types_allowed = True

    @field_validator("escaper", mode="before")
    @classmethod
    def _resolve_escaper(cls, value):
        if isinstance(value, str):
            if value not in ESCAPERS:
                raise ValueError(f"Unknown escaper '{value}', expected one of {sorted(ESCAPERS)}")
            return ESCAPERS[value]
        return value

    @field_validator("element_filter")
    @classmethod
    def _check_element_filter(cls, value: str) -> str:
        try:
            re.compile(value)
        except re.error as e:
            raise ValueError(f"Invalid element filter pattern '{value}': {e}")
        return value

    def validate_options(self) -> List[str]:
        """Check option combinations and return any issues."""
        issues = []

        if self.explicit_delimiter == "":
            issues.append("explicit_delimiter must not be empty")

        if self.tag_delimiter == "":
            issues.append("tag_delimiter must not be empty")

        if (self.tag_delimiter is not None
                and self.tag_delimiter == self.explicit_delimiter):
            issues.append(f"tag_delimiter and explicit_delimiter are both '{self.tag_delimiter}'")

        return issues

    @model_validator(mode="after")
    def _check_options(self):
        issues = self.validate_options()
        if issues:
            raise ValueError(f"Config validation issues: {'; '.join(issues)}")
        return self
