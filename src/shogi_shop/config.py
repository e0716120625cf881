"""Application configuration for the Shogi Shop front ends.

CLI と Web サーバの設定。ルールエンジン自体は設定を持たない。
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AppConfig:
    """Configuration shared by the CLI and the web server.

    Attributes:
        host:      Web サーバの待ち受けアドレス
        port:      Web サーバのポート番号
        log_level: logging.basicConfig に渡すログレベル名
    """

    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "WARNING"


DEFAULT_CONFIG = AppConfig()
