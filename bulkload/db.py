"""数据库快捷入口

路由、脚本和测试统一从这里取 engine / SessionLocal / Base / get_db，
连接细节见 database.connection。
"""

from .database.connection import engine, get_db, Base, SessionLocal

__all__ = ["engine", "get_db", "Base", "SessionLocal"]
