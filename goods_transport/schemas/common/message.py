from typing import List, Optional
from pydantic import BaseModel

class MessageResponse(BaseModel):
    message: str

class FieldError(BaseModel):
    field: str
    message: str
    type: str

class ErrorResponse(BaseModel):
    message: str
    errors: Optional[List[FieldError]] = None

