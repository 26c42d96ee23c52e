"""入站请求体模型。

HTTP 层拿到的 JSON 先经过这里的 pydantic 模型校验，
校验失败由各个 handler 自行映射为 400 响应（而不是 FastAPI 默认的 422）。
"""

import datetime as dt

from pydantic import BaseModel, ConfigDict, StrictStr, field_validator


class _NonBlankModel(BaseModel):
    model_config = ConfigDict(extra="ignore")

    @field_validator("*", mode="after")
    @classmethod
    def reject_blank(cls, v):
        if isinstance(v, str) and not v.strip():
            raise ValueError("must not be blank")
        return v


class ChatMessage(_NonBlankModel):
    """用户发来的一条聊天消息；不会单独持久化。"""

    message: StrictStr


class ContactForm(_NonBlankModel):
    name: StrictStr
    phone: StrictStr
    message: StrictStr


class BookingForm(_NonBlankModel):
    name: StrictStr
    phone: StrictStr
    vehicle: StrictStr
    issue: StrictStr
    datetime: dt.datetime
