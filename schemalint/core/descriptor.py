from __future__ import annotations

from typing import Annotated, Dict, Literal, Optional, Union

from pydantic import BaseModel, Field

NonEmpty = Annotated[str, Field(min_length=1)]


class _Descriptor(BaseModel):
    class Config:
        frozen = True
        extra = "forbid"


class FileSourceDescriptor(_Descriptor):
    kind: Literal["file"] = "file"
    path: NonEmpty


class StdinSourceDescriptor(_Descriptor):
    kind: Literal["stdin"] = "stdin"


class MySQLSourceDescriptor(_Descriptor):
    kind: Literal["mysql"] = "mysql"
    user: str = ""
    password: Optional[str] = None
    host: Optional[str] = None
    port: int = Field(default=3306, gt=0, lt=65536)
    unix_socket: Optional[str] = None
    dbname: NonEmpty
    options: Dict[str, str] = Field(default_factory=dict)

    def redacted(self) -> str:
        """Render the source identifier with the password masked."""
        userinfo = self.user
        if self.password is not None:
            userinfo += ":***"
        if self.unix_socket:
            address = f"unix({self.unix_socket})"
        else:
            address = f"tcp({self.host}:{self.port})"
        query = "&".join(f"{k}={v}" for k, v in self.options.items())
        return f"mysql://{userinfo}@{address}/{self.dbname}" + (f"?{query}" if query else "")


class LocalGitSourceDescriptor(_Descriptor):
    kind: Literal["local-git"] = "local-git"
    repo_path: NonEmpty
    file: NonEmpty
    commitish: Optional[str] = None


SourceDescriptor = Annotated[
    Union[
        FileSourceDescriptor,
        StdinSourceDescriptor,
        MySQLSourceDescriptor,
        LocalGitSourceDescriptor,
    ],
    Field(discriminator="kind"),
]
