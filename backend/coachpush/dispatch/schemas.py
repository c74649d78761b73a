# backend/coachpush/dispatch/schemas.py

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel


class EventAcceptedResponse(BaseModel):
    """
    POST /events のレスポンス。

    送信・スキップ・内部失敗のいずれでも同じ値を返す。
    """

    status: Literal["ok"] = "ok"
