# backend/coachpush/automation/schemas.py

from __future__ import annotations

from pydantic import BaseModel, Field


class BatchRunResponse(BaseModel):
    """
    バッチジョブ 1 回分の実行結果。

    個々の失敗候補は返さず、件数だけを返す。
    """

    job: str = Field(..., description="ジョブ名（daily-reminders / inactivity-reminders）")
    candidates: int = Field(0, description="処理対象になった候補数")
    sent: int = Field(0, description="送信に成功した件数")
    skipped: int = Field(0, description="送信しなかった件数")
    failed: int = Field(0, description="失敗した件数")
