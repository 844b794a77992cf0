from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.timestamps import is_valid_rfc3339, normalize_optional


class _Interval(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    start: Optional[str] = None
    end: Optional[str] = None

    @field_validator("start", "end", mode="before")
    @classmethod
    def _check_timestamp(cls, value: Optional[str]) -> Optional[str]:
        return normalize_optional(value)


class PauseWithoutBlockID(_Interval):
    pass


class PauseCreate(_Interval):
    block_id: int = Field(alias="blockID")


class Pause(PauseCreate):
    id: int


class BlockCreate(_Interval):
    homeoffice: bool = False
    pauses: List[PauseWithoutBlockID] = Field(default_factory=list)


class BlockUpdate(_Interval):
    id: int
    homeoffice: bool = False


class Block(BlockUpdate):
    pauses: List[Pause] = Field(default_factory=list)

    @property
    def closed(self) -> bool:
        return bool(self.end)


class _RequiredTimestamp(BaseModel):
    @classmethod
    def _require(cls, value: str) -> str:
        value = (value or "").strip()
        if not is_valid_rfc3339(value):
            raise ValueError("invalid datetime found")
        return value


class BodyStart(_RequiredTimestamp):
    start: str

    @field_validator("start")
    @classmethod
    def _check_start(cls, value: str) -> str:
        return cls._require(value)


class BodyEnd(_RequiredTimestamp):
    end: str

    @field_validator("end")
    @classmethod
    def _check_end(cls, value: str) -> str:
        return cls._require(value)


class BodyHomeoffice(BaseModel):
    homeoffice: bool


class CurrentState(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    block_id: int = Field(alias="currentBlockId")
    pause_id: int = Field(alias="currentPauseId")


class RowsAffected(BaseModel):
    rows_affected: int


class Login(BaseModel):
    email: str
    password: str


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


__all__ = [
    "Block",
    "BlockCreate",
    "BlockUpdate",
    "BodyEnd",
    "BodyHomeoffice",
    "BodyStart",
    "CurrentState",
    "Login",
    "Pause",
    "PauseCreate",
    "PauseWithoutBlockID",
    "RowsAffected",
    "Token",
]
