# backend/coachpush/notifications/__init__.py

"""
Push 通知レイヤ用モジュール群。

構成イメージ:
- schemas: Push メッセージの共通スキーマとカテゴリ → アイコン対応表
- service: 送信インターフェースとログ出力のみの最小実装
- fcm: Firebase Cloud Messaging (HTTP v1) への送信実装
- config: FCM 設定
- factory: アプリ全体で共有する PushSender の生成
"""
