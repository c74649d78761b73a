# backend/coachpush/main.py

"""
バックエンドアプリケーションのエントリーポイント。

主な責務:
- /events エンドポイントを公開する（ドキュメント作成トリガーの受け口）
- /jobs/* エンドポイントを公開する（定期ジョブの受け口）
"""

from fastapi import FastAPI

from coachpush.automation.router import router as jobs_router
from coachpush.dispatch.router import router as events_router


def create_app() -> FastAPI:
    """
    FastAPI アプリケーションファクトリ。

    - イベント受け口 (/events)
    - 定期ジョブ (/jobs/daily-reminders, /jobs/inactivity-reminders)
    - ヘルスチェックエンドポイント (/health)
    """
    app = FastAPI(title="Coach Push Notification Backend")

    # ルーター登録
    app.include_router(events_router)
    app.include_router(jobs_router)

    @app.get("/health", tags=["health"])
    def health_check() -> dict:
        """
        簡易ヘルスチェックエンドポイント。
        モニタリングや動作確認用。
        """
        return {"status": "ok"}

    return app


# uvicorn 実行時のエントリーポイント
app = create_app()
