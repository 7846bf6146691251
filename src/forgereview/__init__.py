"""forgereview: プルリクエストの自動コードレビュー。

diff を GitHub / Bitbucket / ローカルの作業ツリーから取得し、外部のレビュー生成
コマンドに渡して、結果を PR コメントまたは stdout に配信する。

サブパッケージ:
    models: 設定・認証情報・配信文書のドメインモデル。
    config: 設定ファイル・環境変数・CLI オプションの解決。
    platforms: プラットフォームごとの diff 取得と配信。
    engine: レビュー実行パイプライン。
    cli: コマンドラインインターフェース。
"""

from forgereview.cli import main

__all__ = ["main"]
