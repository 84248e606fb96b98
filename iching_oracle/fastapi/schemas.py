from __future__ import annotations

from typing import List, Optional, Union

from pydantic import BaseModel, Field


class ReadingInput(BaseModel):
    method: str = Field("yarrow-stalks", description="yarrow-stalks or coin")
    randomness: str = Field("random", description="random (random.org) or pseudorandom")
    question: str = Field("", description="Optional question to ask")
    seed: Optional[int] = Field(None, description="Seed, only used with pseudorandom")


class AssembleInput(BaseModel):
    lines: List[Union[str, int]] = Field(
        ..., description="Six lines bottom to top, as enum names or the values 6-9"
    )
    question: str = ""


class HexagramOut(BaseModel):
    number: int
    name: str
    pinyin: str
    chinese: str
    binary: str
    lines: List[int]


class ReadingResponse(BaseModel):
    question: str
    method: Optional[str] = Field(None, description="null for lines cast elsewhere")
    randomness: Optional[str] = None
    primary: HexagramOut
    changing_lines: List[int]
    secondary: Optional[HexagramOut] = None


class TrigramOut(BaseModel):
    name: str
    image: str
    symbol: str
    binary: str


class EntryOut(BaseModel):
    number: int
    name: str
    pinyin: str
    binary: str


class CatalogEntryResponse(EntryOut):
    chinese: str
    lower_trigram: TrigramOut
    upper_trigram: TrigramOut


class ReachableOut(EntryOut):
    operation: str


class AnalysisResponse(BaseModel):
    hexagram: EntryOut
    lower_trigram: TrigramOut
    upper_trigram: TrigramOut
    lower_nuclear_trigram: TrigramOut
    upper_nuclear_trigram: TrigramOut
    opposite: EntryOut
    inverse: EntryOut
    nuclear: EntryOut
    reachable: List[ReachableOut]


class PathStep(EntryOut):
    operation: str


class ShortestPathResponse(BaseModel):
    start: int
    end: int
    paths: List[List[PathStep]]
