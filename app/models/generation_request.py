from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

Language = Literal["English", "Hindi", "Hindi-English Mix"]
Tone = Literal["Formal", "Friendly", "Motivational", "Professional", "Human touch"]

WORD_COUNT_PRESETS = ("300", "500", "1000", "2000", "3000")
CUSTOM_WORD_COUNT = "custom"


class GenerationRequest(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    topic: str = Field(min_length=1, examples=["remote work"])
    word_count: str = Field(
        default="500",
        description=(
            "One of the presets (300, 500, 1000, 2000, 3000), a positive integer, "
            "or 'custom' together with `customWordCount`."
        ),
    )
    custom_word_count: Optional[int] = Field(default=None, gt=0)
    language: Language = "English"
    tone: Tone = "Professional"

    @field_validator("word_count")
    @classmethod
    def _check_word_count(cls, value: str) -> str:
        if value == CUSTOM_WORD_COUNT or value in WORD_COUNT_PRESETS:
            return value
        if value.isdigit() and int(value) > 0:
            return str(int(value))
        raise ValueError("wordCount must be a preset, a positive integer or 'custom'.")

    @model_validator(mode="after")
    def _check_custom_word_count(self) -> "GenerationRequest":
        if self.word_count == CUSTOM_WORD_COUNT and self.custom_word_count is None:
            raise ValueError("customWordCount is required when wordCount is 'custom'.")
        return self

    @property
    def target_word_count(self) -> str:
        """The word count the prompt asks for, with 'custom' resolved."""
        if self.word_count == CUSTOM_WORD_COUNT:
            return str(self.custom_word_count)
        return self.word_count
