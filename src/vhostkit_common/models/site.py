"""Domain and PHP target models."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from vhostkit_common.constants import PHP_SOCKET_DIR
from vhostkit_common.php import resolve_socket_path, socket_name
from vhostkit_common.validators import is_valid_domain, is_valid_php_version


class DomainSpec(BaseModel):
    """A validated, lowercase domain served by one virtual host."""

    model_config = ConfigDict(frozen=True)

    name: str

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        if not is_valid_domain(value):
            raise ValueError(f"invalid domain name: {value!r}")
        return value

    @property
    def www(self) -> str:
        return f"www.{self.name}"

    @property
    def uploads(self) -> str:
        return f"uploads.{self.name}"

    @property
    def db_name(self) -> str:
        """MySQL-safe database name (dots replaced by underscores)."""
        return self.name.replace(".", "_")

    def __str__(self) -> str:
        return self.name


class PhpTarget(BaseModel):
    """A supported PHP-FPM release and the socket it listens on."""

    model_config = ConfigDict(frozen=True)

    version_token: str
    socket_dir: Path = Field(default=PHP_SOCKET_DIR)

    @field_validator("version_token")
    @classmethod
    def _check_token(cls, value: str) -> str:
        if not is_valid_php_version(value):
            raise ValueError(f"unsupported PHP-FPM version: {value!r}")
        return value

    @property
    def socket_name(self) -> str:
        return socket_name(self.version_token)

    @property
    def socket_path(self) -> str:
        return resolve_socket_path(self.version_token, self.socket_dir)
