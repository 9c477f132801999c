from typing import Any, Optional
from pydantic import BaseModel


class ApiResponse(BaseModel):
    """Uniform envelope returned by every endpoint"""
    done: bool
    data: Optional[Any] = None
    message: Optional[str] = None
    url: Optional[str] = None

    @classmethod
    def ok(cls, data: Any = None, **kwargs) -> "ApiResponse":
        return cls(done=True, data=data, **kwargs)

    @classmethod
    def fail(cls, message: str) -> "ApiResponse":
        return cls(done=False, message=message)

    def to_json(self) -> dict:
        return self.model_dump(exclude_none=True)
