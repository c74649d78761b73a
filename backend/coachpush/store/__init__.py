# backend/coachpush/store/__init__.py

"""
ドキュメントストア層。

通知パイプラインから見たストアは「点読み（get_by_id）」と
「等価フィルタ付きスキャン（query）」だけを持つ外部コラボレーター。

構成:
- base: DocumentStore プロトコル・例外・コレクション名
- memory: 開発/テスト用の in-memory 実装
- firestore: Firestore REST API を httpx で叩く実装
- factory: 設定に応じてアプリ全体で共有するストアを生成
"""
