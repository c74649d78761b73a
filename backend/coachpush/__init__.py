# backend/coachpush/__init__.py
"""
コーチング用 Push 通知バックエンドのアプリケーションパッケージ。

This package contains:
- main: FastAPI application entrypoint（トリガー受け口）
- store: ドキュメントストア（Firestore / in-memory）アダプタ
- notifications: Push メッセージのスキーマと送信アダプタ（FCM / ログ出力）
- dispatch: 受信者解決・コンテキスト補完・メッセージ組み立て・単発/一括ディスパッチ
- automation: 定期ジョブ（日次リマインダー / 非アクティブ再エンゲージメント）
"""
