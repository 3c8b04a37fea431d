from pydantic import BaseModel


class StatusResponse(BaseModel):
    status: str
    version: str
    timestamp: str
    environment: str
    message: str
