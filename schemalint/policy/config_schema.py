from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class MySQLSettings(BaseModel):
    driver: str = Field(default="pymysql")
    # seconds; handed to the driver, the linter itself never times out
    connect_timeout: Optional[int] = Field(default=None, gt=0)


class CLIConfig(BaseModel):
    dialect: str = Field(default="mysql")
    pretty: bool = Field(default=True)
    log_level: str = Field(default="WARNING")

    mysql: MySQLSettings = Field(default_factory=MySQLSettings)

    class Config:
        extra = "allow"
