from pydantic import BaseModel
from typing import List, Literal


class DiffToken(BaseModel):
    text: str
    type: Literal["equal", "insert", "delete"]


class CheckRequest(BaseModel):
    user: str
    answer: str


class CheckResponse(BaseModel):
    correct: bool
    normalizedUser: str
    normalizedAnswer: str
    answerWordCount: int
    tokens: List[DiffToken]


class BatchCheckRequest(BaseModel):
    items: List[CheckRequest]


class BatchCheckResult(CheckResponse):
    index: int
    status: Literal["correct", "incorrect"]


class BatchCheckResponse(BaseModel):
    correctCount: int
    total: int
    results: List[BatchCheckResult]


class NormalizeRequest(BaseModel):
    text: str


class NormalizeResponse(BaseModel):
    normalized: str
