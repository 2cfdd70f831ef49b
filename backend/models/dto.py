from typing import List

from pydantic import BaseModel


class SequenceResponse(BaseModel):
    count: int
    sequence: List[int]
    last: int
