# backend/coachpush/automation/__init__.py

"""
定期実行ジョブ用モジュール群。

- config: バッチの並行数・非アクティブ判定日数などの設定
- schemas: ジョブ実行結果のレスポンススキーマ
- jobs: 日次ワークアウトリマインダー / 非アクティブリマインダー本体と CLI
- router: 外部スケジューラから叩く FastAPI ルーター
"""
