# backend/coachpush/dispatch/__init__.py

"""
通知ディスパッチパイプライン。

Resolver → Enricher → Composer → send の流れを、
単発イベント（dispatcher）と定期バッチ（batch）の両方で共有する。

- events: トリガーイベントのタグ付きユニオン
- recipients: 受信者プロフィール / デバイストークンの解決
- enrichment: 表示用コンテキストの補完（デフォルト文言の一元管理）
- composer: PushMessage の組み立て（I/O なしの純粋関数群）
- dispatcher: 単発イベントのディスパッチ
- batch: 上限付き並行実行と一括ファンアウト
- schemas: イベント受け口のレスポンススキーマ
- router: イベント受け口の FastAPI ルーター
"""
