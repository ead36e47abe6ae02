# api/schemas.py

from typing import List, Optional
from pydantic import BaseModel


class SpanSchema(BaseModel):
    start: int
    end: int
    type: Optional[str] = None


class SampleSchema(BaseModel):
    tokens: List[str]
    spans: List[SpanSchema]
    reset_adaptive_state: bool = False
    line: str  # sample rendered back in the tagged format


class DecodeRequest(BaseModel):
    text: str


class DecodeResponse(BaseModel):
    samples: List[SampleSchema]


class IntervalSchema(BaseModel):
    start: int
    end: int


class ProjectRequest(BaseModel):
    text: str
    sentences: List[IntervalSchema]
    tokens: List[IntervalSchema]


class TokenSampleSchema(BaseModel):
    text: str
    spans: List[SpanSchema]
    tokens: List[str]


class ProjectResponse(BaseModel):
    samples: List[TokenSampleSchema]
