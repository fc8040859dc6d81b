from typing import List

from pydantic import BaseModel


class SelectOption(BaseModel):
    value: str
    label: str


class OptionsResponse(BaseModel):
    word_counts: List[SelectOption]
    languages: List[SelectOption]
    tones: List[SelectOption]
    aspect_ratios: List[SelectOption]


WORD_COUNT_OPTIONS = [
    SelectOption(value="300", label="Approx. 300 words"),
    SelectOption(value="500", label="Approx. 500 words"),
    SelectOption(value="1000", label="Approx. 1000 words"),
    SelectOption(value="2000", label="Approx. 2000 words"),
    SelectOption(value="3000", label="Approx. 3000 words"),
    SelectOption(value="custom", label="Custom..."),
]

LANGUAGE_OPTIONS = [
    SelectOption(value="English", label="English"),
    SelectOption(value="Hindi", label="Hindi"),
    SelectOption(value="Hindi-English Mix", label="Hindi-English Mix"),
]

TONE_OPTIONS = [
    SelectOption(value="Professional", label="Professional"),
    SelectOption(value="Formal", label="Formal"),
    SelectOption(value="Friendly", label="Friendly"),
    SelectOption(value="Motivational", label="Motivational"),
    SelectOption(value="Human touch", label="Human touch"),
]

ASPECT_RATIO_OPTIONS = [
    SelectOption(value="16:9", label="16:9 (Landscape)"),
    SelectOption(value="1:1", label="1:1 (Square)"),
    SelectOption(value="9:16", label="9:16 (Portrait)"),
    SelectOption(value="4:3", label="4:3 (Standard)"),
    SelectOption(value="3:4", label="3:4 (Tall)"),
]
