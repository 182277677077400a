"""应用配置模块

使用 Pydantic Settings 管理应用配置，支持从 .env 文件加载环境变量
"""

from pydantic_settings import BaseSettings
from typing import List, Optional
import os


class Settings(BaseSettings):
    """应用配置类"""

    # 应用配置
    APP_TITLE: str = "装车订单系统"
    APP_DESCRIPTION: str = "散装产品装车订单生命周期API"
    APP_VERSION: str = "1.0.0"
    LOG_LEVEL: str = "INFO"

    # MySQL 配置 - 从环境变量加载
    MYSQL_USER: str = "root"
    MYSQL_PASSWORD: str = ""
    MYSQL_HOST: str = "127.0.0.1"
    MYSQL_PORT: str = "3306"
    MYSQL_DB: str = "bulkload_db"

    # 数据库配置 - 优先使用DATABASE_URL，否则从MySQL配置构建
    DATABASE_URL: str = ""
    ECHO_SQL: bool = False  # 是否打印SQL日志

    # 温度告警初始配置（仅在单例配置行不存在时使用）
    DEFAULT_TEMPERATURE_THRESHOLD: float = 50.0
    ALERT_RECIPIENTS: List[str] = []

    # 邮件发送配置，SMTP_HOST 为空时只写日志
    SMTP_HOST: Optional[str] = None
    SMTP_PORT: int = 587
    SMTP_USER: Optional[str] = None
    SMTP_PASSWORD: Optional[str] = None
    SMTP_SENDER: str = "alerts@bulkload.local"
    SMTP_USE_TLS: bool = True
    SMTP_TIMEOUT: float = 10.0  # 秒

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # 如果没有显式设置DATABASE_URL，从MySQL配置构建
        if not self.DATABASE_URL:
            if self.MYSQL_PASSWORD:
                self.DATABASE_URL = f"mysql+pymysql://{self.MYSQL_USER}:{self.MYSQL_PASSWORD}@{self.MYSQL_HOST}:{self.MYSQL_PORT}/{self.MYSQL_DB}"
            else:
                # fallback to a local sqlite DB to make local dev effortless
                self.DATABASE_URL = "sqlite:///./dev.db"

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    @property
    def smtp_enabled(self) -> bool:
        return bool(self.SMTP_HOST)

    class Config:
        env_file = ".env"  # 从.env文件加载配置


# 创建全局配置实例
settings = Settings()
