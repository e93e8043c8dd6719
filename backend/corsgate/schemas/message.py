from pydantic import BaseModel


class MessageOut(BaseModel):
    id: int
    author: str
    body: str
    created_at: str | None = None
